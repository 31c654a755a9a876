"""
Nursing Calendar Domain Policies.

Pure business rules for appointment scheduling.
These classes have NO I/O dependencies - they can be unit tested in isolation.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Union

from core.domain import (
    PolicyEngine,
    PolicyDecision,
    PolicyResult,
    Validator,
    ValidationError,
    as_date,
    parse_date,
)

from ..catalog import DEFAULT_CATALOG, Catalog
from ..models import AppointmentDraft, ColorTag, NormalizedAppointment, Service


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_OPEN_HOUR = 8
DEFAULT_CLOSE_HOUR = 18
DEFAULT_STEP_MINUTES = 30

# date.weekday() values
WEEKEND_DAYS = (5, 6)


# =============================================================================
# SLOT RULES
# =============================================================================

def available_start_times(
    open_hour: int = DEFAULT_OPEN_HOUR,
    close_hour: int = DEFAULT_CLOSE_HOUR,
    step_minutes: int = DEFAULT_STEP_MINUTES,
) -> List[time]:
    """
    Start times offered by the booking form.

    Covers [open_hour, close_hour): with the defaults, 08:00 through 17:30
    every 30 minutes.

    Raises:
        ValueError: If the hours or the step are out of range
    """
    if step_minutes <= 0:
        raise ValueError(f"step_minutes must be positive, got {step_minutes}")
    if not (0 <= open_hour < close_hour <= 24):
        raise ValueError(f"Invalid opening hours: {open_hour}-{close_hour}")

    slots = []
    current = open_hour * 60
    while current < close_hour * 60:
        slots.append(time(hour=current // 60, minute=current % 60))
        current += step_minutes
    return slots


def derive_end_time(start: datetime, service: Service) -> datetime:
    """End of an appointment that starts at `start` and uses `service`."""
    return start + timedelta(minutes=service.duration_minutes)


def is_eligible_date(
    day: Union[date, datetime],
    today: Union[date, datetime],
    is_editing: bool = False,
) -> bool:
    """
    Whether a date can be picked for an appointment.

    Creation rejects past dates and weekends (time of day is ignored).
    Editing an existing appointment accepts any date.
    """
    if is_editing:
        return True
    day = as_date(day)
    if day < as_date(today):
        return False
    return day.weekday() not in WEEKEND_DAYS


def parse_slot_time(value: Any) -> Optional[time]:
    """Parse a start time picked from the slot list ("09:30" or a time)."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        return None
    try:
        hours, minutes = value.strip().split(":")
        return time(hour=int(hours), minute=int(minutes))
    except ValueError:
        return None


# =============================================================================
# POLICY ENGINES
# =============================================================================

@dataclass
class BookingContext:
    """Context for booking form policy evaluation."""
    requested_date: Union[date, datetime]
    requested_time: Any
    today: Union[date, datetime]
    is_editing: bool = False
    open_hour: int = DEFAULT_OPEN_HOUR
    close_hour: int = DEFAULT_CLOSE_HOUR
    step_minutes: int = DEFAULT_STEP_MINUTES


class BookingDatePolicy(PolicyEngine):
    """
    Rules the booking form applies before a draft is built.

    Evaluates:
    - Date eligibility (future weekday on creation)
    - Start time on the offered slot grid
    """

    def get_policies(self) -> List[str]:
        return [
            "eligible_date",
            "slot_grid",
        ]

    def evaluate(self, context: BookingContext) -> PolicyDecision:
        """Evaluate if the requested date and time can be booked."""
        for check in (self._check_date, self._check_time):
            decision = check(context)
            if decision.is_denied:
                return decision

        return PolicyDecision(
            result=PolicyResult.APPROVED,
            reason="Date and time are available for booking",
            metadata={"policies_checked": self.get_policies()},
        )

    def errors(self, context: BookingContext) -> List[ValidationError]:
        """Every failed check, as form field errors."""
        errors = []
        for check in (self._check_date, self._check_time):
            decision = check(context)
            if decision.is_denied:
                errors.append(ValidationError(
                    field=decision.metadata["field"],
                    message=decision.reason,
                    code=decision.metadata["code"],
                ))
        return errors

    def _check_date(self, context: BookingContext) -> PolicyDecision:
        if context.requested_date is None:
            return PolicyDecision(
                result=PolicyResult.DENIED,
                reason="select a date",
                metadata={"field": "date", "code": "required"},
            )
        if not is_eligible_date(context.requested_date, context.today, context.is_editing):
            return PolicyDecision(
                result=PolicyResult.DENIED,
                reason="must be a future weekday",
                metadata={"field": "date", "code": "ineligible_date"},
            )
        return PolicyDecision(result=PolicyResult.APPROVED, reason="Eligible date")

    def _check_time(self, context: BookingContext) -> PolicyDecision:
        slot = parse_slot_time(context.requested_time)
        offered = available_start_times(
            context.open_hour, context.close_hour, context.step_minutes
        )
        if slot is None:
            return PolicyDecision(
                result=PolicyResult.DENIED,
                reason="select a time",
                metadata={"field": "time", "code": "required"},
            )
        if slot not in offered:
            return PolicyDecision(
                result=PolicyResult.DENIED,
                reason=f"{slot.strftime('%H:%M')} is not an available start time",
                metadata={"field": "time", "code": "unavailable_slot"},
            )
        return PolicyDecision(result=PolicyResult.APPROVED, reason="Offered start time")


# =============================================================================
# VALIDATION
# =============================================================================

@dataclass
class ValidationResult:
    """Outcome of validating a draft: a normalized appointment or errors."""
    appointment: Optional[NormalizedAppointment] = None
    errors: List[ValidationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.appointment is not None and not self.errors

    def errors_by_field(self) -> Dict[str, List[str]]:
        """Group error messages by field for inline form messages."""
        grouped: Dict[str, List[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped

    def has_error(self, field_name: str) -> bool:
        return any(e.field == field_name for e in self.errors)


class AppointmentValidator(Validator):
    """
    Validates an appointment draft before it reaches the store.

    Every check runs so the form can show all messages at once. The
    color tag is normalized rather than rejected.
    """

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        is_editing: bool = False,
        today: Optional[Union[date, datetime]] = None,
    ):
        self.catalog = catalog or DEFAULT_CATALOG
        self.is_editing = is_editing
        self.today = today

    def validate(self, data: AppointmentDraft) -> List[ValidationError]:
        return self.check(data).errors

    def check(self, draft: AppointmentDraft) -> ValidationResult:
        """Validate and, on success, normalize the draft."""
        errors = []

        nurse = (
            self.catalog.find_nurse_by_id(draft.nurse_id)
            or self.catalog.find_nurse_by_name(draft.nurse_name)
        )
        if nurse is None:
            errors.append(ValidationError(field="nurse", message="not found", code="not_found"))

        service = (
            self.catalog.find_service_by_id(draft.service_id)
            or self.catalog.find_service_by_name(draft.service_name)
        )
        if service is None:
            errors.append(ValidationError(field="service", message="not found", code="not_found"))

        start = parse_date(draft.start_date_time)
        end = parse_date(draft.end_date_time)
        if start is None or end is None:
            errors.append(ValidationError(field="dates", message="invalid", code="invalid"))
        else:
            if start >= end:
                errors.append(ValidationError(
                    field="dates",
                    message="start must precede end",
                    code="invalid_range",
                ))
            if service is not None and end - start != timedelta(minutes=service.duration_minutes):
                errors.append(ValidationError(
                    field="duration",
                    message=f"must equal {service.duration_minutes} minutes for {service.name}",
                    code="duration_mismatch",
                ))
            if (
                self.today is not None
                and not is_eligible_date(start, self.today, self.is_editing)
            ):
                errors.append(ValidationError(
                    field="date",
                    message="must be a future weekday",
                    code="ineligible_date",
                ))

        if errors:
            return ValidationResult(errors=errors)

        return ValidationResult(appointment=NormalizedAppointment(
            nurse=nurse,
            service=service,
            title=(draft.title or "").strip() or service.name,
            color_tag=ColorTag.coerce(draft.color_tag),
            start_date_time=start,
            end_date_time=end,
            notes=(draft.notes or "").strip(),
        ))


def validate(
    draft: AppointmentDraft,
    catalog: Optional[Catalog] = None,
    is_editing: bool = False,
    today: Optional[Union[date, datetime]] = None,
) -> ValidationResult:
    """Validate a draft against the catalog. Never touches the store."""
    return AppointmentValidator(catalog, is_editing=is_editing, today=today).check(draft)

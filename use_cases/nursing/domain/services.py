"""
Nursing Calendar Domain Services.

Services that orchestrate domain logic for edits and calendar views.
These have NO I/O dependencies - pure calculations and transformations.
"""

from dataclasses import replace
from datetime import date, datetime
from typing import Dict, List, Optional, Union

from core.domain import DomainService, parse_date

from ..catalog import Catalog
from ..models import Appointment, AppointmentDraft, ColorTag, NormalizedAppointment, Service
from .policies import derive_end_time

# Fields whose modification must be confirmed before an edit is committed.
# Nurse and title are not significant.
SIGNIFICANT_FIELDS = (
    "start_date_time",
    "end_date_time",
    "service_name",
    "notes",
    "color_tag",
)

GROUP_BY_DATE = "date"
GROUP_BY_COLOR = "color"


# =============================================================================
# CHANGE DETECTION
# =============================================================================

def _to_millis(value: datetime) -> datetime:
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


class ChangeDetector(DomainService):
    """
    Compares an edited draft with the stored appointment it came from.

    Pure logic - a None original means the draft is a new appointment,
    which never needs confirmation.
    """

    def execute(
        self,
        original: Optional[Appointment],
        draft: NormalizedAppointment,
    ) -> bool:
        return self.has_significant_change(original, draft)

    def has_significant_change(
        self,
        original: Optional[Appointment],
        draft: NormalizedAppointment,
    ) -> bool:
        return bool(self.changed_fields(original, draft))

    def changed_fields(
        self,
        original: Optional[Appointment],
        draft: NormalizedAppointment,
    ) -> List[str]:
        """Significant fields whose value differs, in a stable order."""
        if original is None:
            return []

        changed = []
        for name in SIGNIFICANT_FIELDS:
            before = getattr(original, name)
            after = getattr(draft, name)
            if isinstance(before, datetime):
                differs = _to_millis(before) != _to_millis(after)
            else:
                differs = before != after
            if differs:
                changed.append(name)
        return changed

    def is_date_change(
        self,
        original: Optional[Appointment],
        draft: NormalizedAppointment,
    ) -> bool:
        """True when the appointment moves to another calendar day."""
        if original is None:
            return False
        return original.start_date_time.date() != draft.start_date_time.date()


_detector = ChangeDetector()


def has_significant_change(
    original: Optional[Appointment],
    draft: NormalizedAppointment,
) -> bool:
    """Whether committing `draft` over `original` needs user confirmation."""
    return _detector.has_significant_change(original, draft)


# =============================================================================
# FORM CASCADES
# =============================================================================

def apply_service_selection(
    draft: AppointmentDraft,
    service: Service,
    catalog: Catalog,
) -> AppointmentDraft:
    """
    Derive dependent fields after a service is picked.

    The title becomes the service name, the end time follows the service
    duration, and an empty nurse field falls back to the catalog default.
    Returns a new draft; the input is left untouched.
    """
    updates = {
        "service_id": service.id,
        "service_name": service.name,
        "title": service.name,
    }

    start = parse_date(draft.start_date_time)
    if start is not None:
        updates["end_date_time"] = derive_end_time(start, service)

    if not draft.nurse_id and not draft.nurse_name:
        nurse = catalog.default_nurse()
        if nurse is not None:
            updates["nurse_id"] = nurse.id
            updates["nurse_name"] = nurse.name

    return replace(draft, **updates)


def reschedule(appointment: Appointment, new_start: datetime) -> AppointmentDraft:
    """
    Draft for moving an appointment to a new start (drag and drop).

    The duration is preserved; every other field is carried over.
    """
    new_start = parse_date(new_start)
    duration = appointment.end_date_time - appointment.start_date_time
    return replace(
        AppointmentDraft.from_appointment(appointment),
        start_date_time=new_start,
        end_date_time=new_start + duration,
    )


# =============================================================================
# AGENDA
# =============================================================================

class AgendaBuilder(DomainService):
    """
    Groups appointments for the agenda view.

    Appointments are sorted chronologically inside each group; groups
    are ordered by date, or by the color order of ColorTag.
    """

    def execute(
        self,
        appointments: List[Appointment],
        group_by: str = GROUP_BY_DATE,
    ) -> Dict[Union[date, ColorTag], List[Appointment]]:
        return self.group(appointments, group_by)

    def group(
        self,
        appointments: List[Appointment],
        group_by: str = GROUP_BY_DATE,
    ) -> Dict[Union[date, ColorTag], List[Appointment]]:
        if group_by not in (GROUP_BY_DATE, GROUP_BY_COLOR):
            raise ValueError(f"Unknown agenda grouping: {group_by}")

        ordered = sorted(appointments, key=lambda a: (a.start_date_time, a.id or 0))
        groups: Dict[Union[date, ColorTag], List[Appointment]] = {}

        if group_by == GROUP_BY_DATE:
            for appointment in ordered:
                groups.setdefault(appointment.start_date_time.date(), []).append(appointment)
            return groups

        for color in ColorTag:
            members = [a for a in ordered if a.color_tag == color]
            if members:
                groups[color] = members
        return groups

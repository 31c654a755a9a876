"""
Nursing Calendar Service.

Wires the domain layer, the event store and the message composer into
the operations the calendar UI calls:

- open_new / open_edit: start a dialog session
- select_service: cascade a service choice into the draft
- submit / confirm / cancel: two-phase commit of a draft
- move: drag-and-drop reschedule (confirmed unless dropped on its own slot)
- delete: remove an appointment
- book: the restrictive booking page (future weekdays, fixed slots)
- agenda: grouped, chronological snapshot
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, field_validator

from config import Settings, settings as default_settings
from core.domain import ValidationError
from core.presentation import ConfirmationPrompt, Notification

from .catalog import DEFAULT_CATALOG, Catalog
from .domain.policies import (
    BookingContext,
    BookingDatePolicy,
    available_start_times,
    derive_end_time,
    parse_slot_time,
    validate,
)
from .domain.services import AgendaBuilder, ChangeDetector, apply_service_selection, reschedule
from .models import Appointment, AppointmentDraft, ColorTag, NormalizedAppointment
from .presentation.composer import AppointmentMessageComposer
from .session import AppointmentEditSession, EditFlowStep
from .store import EventStore

logger = logging.getLogger(__name__)


# =============================================================================
# REQUESTS AND RESULTS
# =============================================================================

class BookingRequest(BaseModel):
    """Values submitted by the booking page."""
    nurse_id: str = ""
    service_id: str = ""
    color_tag: str = ColorTag.BLUE.value
    day: Optional[date] = None
    start_time: str = ""
    notes: str = ""

    @field_validator("day", mode="before")
    @classmethod
    def _calendar_day(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.date()
        return value


@dataclass
class CalendarResult:
    """
    Outcome of a calendar operation.

    Attributes:
        success: False when the operation was refused or its target is gone
        step: Where the session stands afterwards (None without a session)
        appointment: The committed or removed appointment, when there is one
        errors: Field errors for inline form messages
        notification: Toast to show, if any
        prompt: Confirmation to ask for when the step is PENDING
        session: The dialog session the operation worked on
    """
    success: bool
    step: Optional[EditFlowStep] = None
    appointment: Optional[Appointment] = None
    errors: List[ValidationError] = field(default_factory=list)
    notification: Optional[Notification] = None
    prompt: Optional[ConfirmationPrompt] = None
    session: Optional[AppointmentEditSession] = None

    @property
    def needs_confirmation(self) -> bool:
        """True when a successful operation is waiting for the user."""
        return self.success and self.step == EditFlowStep.PENDING


# =============================================================================
# SERVICE
# =============================================================================

class CalendarService:
    """
    Calendar operations over an explicitly owned event store.

    Every store write goes through _commit, which only runs for a
    validated appointment that either needs no confirmation or has been
    confirmed by the user.
    """

    def __init__(
        self,
        store: Optional[EventStore] = None,
        catalog: Optional[Catalog] = None,
        settings: Optional[Settings] = None,
        composer: Optional[AppointmentMessageComposer] = None,
    ):
        self.store = store if store is not None else EventStore()
        self.catalog = catalog or DEFAULT_CATALOG
        self.settings = settings or default_settings
        self.composer = composer or AppointmentMessageComposer(
            use_24_hour_format=self.settings.use_24_hour_format
        )
        self.detector = ChangeDetector()
        self.booking_policy = BookingDatePolicy()
        self.agenda_builder = AgendaBuilder()

    # =========================================================================
    # Dialog sessions
    # =========================================================================

    def open_new(self, start: Optional[datetime] = None) -> AppointmentEditSession:
        """Start a session for a new appointment beginning at `start` (default: now)."""
        start = (start or datetime.now()).replace(microsecond=0)
        draft = AppointmentDraft(
            color_tag=ColorTag.coerce(self.settings.default_color_tag).value,
            start_date_time=start,
            end_date_time=start + timedelta(minutes=self.settings.new_event_default_minutes),
        )
        session = AppointmentEditSession(draft=draft)
        logger.debug(f"Opened new appointment session {session.session_id}")
        return session

    def open_edit(self, appointment_id: int) -> Optional[AppointmentEditSession]:
        """Start a session editing a stored appointment, or None if it is gone."""
        appointment = self.store.get_by_id(appointment_id)
        if appointment is None:
            logger.warning(f"Cannot edit appointment {appointment_id}: not found")
            return None
        session = AppointmentEditSession(
            draft=AppointmentDraft.from_appointment(appointment),
            original=appointment,
        )
        logger.debug(f"Opened edit session {session.session_id} for appointment {appointment_id}")
        return session

    def select_service(self, session: AppointmentEditSession, service_id: str) -> CalendarResult:
        """Apply a service choice to the session's draft."""
        service = self.catalog.find_service_by_id(service_id)
        if service is None:
            errors = [ValidationError(field="service", message="not found", code="not_found")]
            return CalendarResult(
                success=False,
                step=session.flow_step,
                errors=errors,
                session=session,
            )
        session.draft = apply_service_selection(session.draft, service, self.catalog)
        return CalendarResult(success=True, step=session.flow_step, session=session)

    # =========================================================================
    # Two-phase commit
    # =========================================================================

    def submit(
        self,
        session: AppointmentEditSession,
        today: Optional[Union[date, datetime]] = None,
    ) -> CalendarResult:
        """
        Phase one: validate the draft and decide whether to ask first.

        Args:
            session: A session in the DRAFT step
            today: When given, new appointments must fall on a future weekday

        Raises:
            ValueError: If the session is not in the DRAFT step
        """
        if session.flow_step != EditFlowStep.DRAFT:
            raise ValueError(f"Session {session.session_id} has no draft to submit")

        result = validate(
            session.draft,
            self.catalog,
            is_editing=session.is_editing,
            today=today,
        )
        if not result.ok:
            session.reject(result.errors)
            logger.info(
                f"Session {session.session_id} rejected: "
                f"{', '.join(e.field for e in result.errors)}"
            )
            return CalendarResult(
                success=False,
                step=session.flow_step,
                errors=result.errors,
                notification=self.composer.rejected(result.errors),
                session=session,
            )

        pending = result.appointment
        if self.detector.has_significant_change(session.original, pending):
            session.hold(pending)
            return CalendarResult(
                success=True,
                step=session.flow_step,
                prompt=self.composer.change_prompt(
                    session.original,
                    pending,
                    date_changed=self.detector.is_date_change(session.original, pending),
                ),
                session=session,
            )

        return self._commit(session, pending)

    def confirm(self, session: AppointmentEditSession) -> CalendarResult:
        """
        Phase two: write a pending edit to the store.

        Raises:
            ValueError: If nothing is waiting for confirmation
        """
        if session.flow_step != EditFlowStep.PENDING or session.pending is None:
            raise ValueError(f"Session {session.session_id} has nothing to confirm")
        return self._commit(session, session.pending)

    def cancel(self, session: AppointmentEditSession) -> CalendarResult:
        """Dismiss the confirmation: drop the edits, leave the store untouched."""
        session.revert()
        logger.debug(f"Session {session.session_id} reverted")
        return CalendarResult(success=True, step=session.flow_step, session=session)

    def _commit(
        self,
        session: AppointmentEditSession,
        pending: NormalizedAppointment,
    ) -> CalendarResult:
        if session.original is None:
            appointment = self.store.add(pending.to_appointment())
            session.commit(appointment)
            return CalendarResult(
                success=True,
                step=session.flow_step,
                appointment=appointment,
                notification=self.composer.created(appointment),
                session=session,
            )

        mutation = self.store.update(pending.to_appointment(
            id=session.original.id,
            owner=session.original.owner,
        ))
        if not mutation.success:
            return CalendarResult(
                success=False,
                step=session.flow_step,
                notification=self.composer.not_found(session.original.id),
                session=session,
            )

        session.commit(mutation.appointment)
        return CalendarResult(
            success=True,
            step=session.flow_step,
            appointment=mutation.appointment,
            notification=self.composer.updated(mutation.appointment),
            session=session,
        )

    # =========================================================================
    # Calendar gestures
    # =========================================================================

    def move(self, appointment_id: int, new_start: datetime) -> CalendarResult:
        """
        Reschedule an appointment dropped on a new slot.

        The duration is kept. A real move always comes back PENDING with a
        move prompt; dropping on the original slot commits nothing new.
        """
        session = self.open_edit(appointment_id)
        if session is None:
            return CalendarResult(
                success=False,
                notification=self.composer.not_found(appointment_id),
            )

        session.draft = reschedule(session.original, new_start)
        result = self.submit(session)
        if result.step == EditFlowStep.PENDING:
            result.prompt = self.composer.move_prompt(session.original, session.pending)
        return result

    def delete(self, appointment_id: int) -> CalendarResult:
        """Remove an appointment; a second call reports it as already gone."""
        mutation = self.store.remove(appointment_id)
        if not mutation.success:
            return CalendarResult(
                success=False,
                notification=self.composer.not_found(appointment_id),
            )
        return CalendarResult(
            success=True,
            appointment=mutation.appointment,
            notification=self.composer.removed(mutation.appointment),
        )

    # =========================================================================
    # Booking page
    # =========================================================================

    def available_times(self) -> List[time]:
        """Start times offered by the booking page."""
        return available_start_times(
            self.settings.clinic_open_hour,
            self.settings.clinic_close_hour,
            self.settings.slot_step_minutes,
        )

    def book(
        self,
        request: BookingRequest,
        today: Optional[Union[date, datetime]] = None,
    ) -> CalendarResult:
        """
        Create an appointment from the booking page.

        The date must be a future weekday and the time one of the offered
        slots; the end is derived from the service and the nurse becomes
        the owner. Refusals are returned before any draft is validated.
        """
        today = today or date.today()
        errors = self.booking_policy.errors(BookingContext(
            requested_date=request.day,
            requested_time=request.start_time,
            today=today,
            open_hour=self.settings.clinic_open_hour,
            close_hour=self.settings.clinic_close_hour,
            step_minutes=self.settings.slot_step_minutes,
        ))

        nurse = self.catalog.find_nurse_by_id(request.nurse_id)
        if nurse is None:
            errors.append(ValidationError(field="nurse", message="not found", code="not_found"))
        service = self.catalog.find_service_by_id(request.service_id)
        if service is None:
            errors.append(ValidationError(field="service", message="not found", code="not_found"))

        if errors:
            return CalendarResult(
                success=False,
                errors=errors,
                notification=self.composer.rejected(errors),
            )

        start = datetime.combine(request.day, parse_slot_time(request.start_time))
        session = AppointmentEditSession(draft=AppointmentDraft(
            nurse_id=nurse.id,
            service_id=service.id,
            title=service.name,
            color_tag=request.color_tag,
            start_date_time=start,
            end_date_time=derive_end_time(start, service),
            notes=request.notes,
        ))
        return self.submit(session, today=today)

    # =========================================================================
    # Views
    # =========================================================================

    def agenda(self, group_by: Optional[str] = None) -> Dict[object, List[Appointment]]:
        """Chronological agenda grouped by date or color."""
        return self.agenda_builder.group(
            self.store.list(),
            group_by or self.settings.agenda_group_by,
        )

"""
Nursing Appointment Calendar Use Case.

Structure:
- catalog.py: Nurses and services (static reference data)
- models.py: Appointment, AppointmentDraft, NormalizedAppointment
- domain/: Pure business logic (no I/O)
  - policies.py: Slot rules, BookingDatePolicy, AppointmentValidator
  - services.py: ChangeDetector, service selection cascade, AgendaBuilder
- store.py: EventStore (in-memory)
- session.py: AppointmentEditSession (confirm-before-commit flow)
- presentation/: Notifications and confirmation prompts
  - composer.py: AppointmentMessageComposer
- calendar.py: CalendarService
- sample_data.py: Sample appointments for demos
"""

from .calendar import BookingRequest, CalendarResult, CalendarService
from .catalog import Catalog
from .models import Appointment, AppointmentDraft, ColorTag
from .session import AppointmentEditSession, EditFlowStep
from .store import EventStore, MutationResult, MutationStatus

__all__ = [
    "BookingRequest",
    "CalendarResult",
    "CalendarService",
    "Catalog",
    "Appointment",
    "AppointmentDraft",
    "ColorTag",
    "AppointmentEditSession",
    "EditFlowStep",
    "EventStore",
    "MutationResult",
    "MutationStatus",
]

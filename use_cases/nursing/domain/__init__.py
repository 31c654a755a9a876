"""Nursing calendar domain layer - pure business logic."""

from .policies import (
    AppointmentValidator,
    BookingContext,
    BookingDatePolicy,
    ValidationResult,
    available_start_times,
    derive_end_time,
    is_eligible_date,
    validate,
)
from .services import (
    AgendaBuilder,
    ChangeDetector,
    apply_service_selection,
    has_significant_change,
    reschedule,
)

__all__ = [
    "AppointmentValidator",
    "BookingContext",
    "BookingDatePolicy",
    "ValidationResult",
    "available_start_times",
    "derive_end_time",
    "is_eligible_date",
    "validate",
    "AgendaBuilder",
    "ChangeDetector",
    "apply_service_selection",
    "has_significant_change",
    "reschedule",
]

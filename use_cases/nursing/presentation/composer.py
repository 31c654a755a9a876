"""
Nursing Calendar Message Composer.

Builds the notifications and confirmation prompts of the appointment
dialogs. Extends the core MessageComposer base class.
"""

from typing import Callable, Dict, List

from core.domain import ValidationError
from core.presentation import ConfirmationPrompt, MessageComposer, Notification

from ..models import Appointment, NormalizedAppointment


class AppointmentMessageComposer(MessageComposer):
    """
    Composes messages for the appointment calendar.

    Provides methods to build:
    - Success and failure toasts for store mutations
    - Change, date-change, move and delete confirmation prompts
    - Detail lines for the appointment details dialog
    """

    def get_message_builders(self) -> Dict[str, Callable]:
        """Return the mapping of message types to builder methods."""
        return {
            "created": self.created,
            "updated": self.updated,
            "removed": self.removed,
            "not_found": self.not_found,
            "rejected": self.rejected,
            "change_prompt": self.change_prompt,
            "move_prompt": self.move_prompt,
            "delete_prompt": self.delete_prompt,
            "details": self.details,
        }

    # =========================================================================
    # Notifications
    # =========================================================================

    def created(self, appointment: Appointment) -> Notification:
        return self.success(f"Appointment '{appointment.title}' scheduled successfully")

    def updated(self, appointment: Appointment) -> Notification:
        return self.success(f"Appointment '{appointment.title}' updated successfully")

    def removed(self, appointment: Appointment) -> Notification:
        return self.success(f"Appointment '{appointment.title}' cancelled successfully")

    def not_found(self, appointment_id) -> Notification:
        return self.error(f"Appointment {appointment_id} no longer exists")

    def rejected(self, errors: List[ValidationError]) -> Notification:
        fields = ", ".join(dict.fromkeys(e.field for e in errors))
        return self.error(f"Please review: {fields}")

    # =========================================================================
    # Confirmation prompts
    # =========================================================================

    def change_prompt(
        self,
        original: Appointment,
        pending: NormalizedAppointment,
        date_changed: bool = False,
    ) -> ConfirmationPrompt:
        """
        Prompt shown before an edit with significant changes is committed.

        A change of day gets its own wording, as in the date-change dialog.
        """
        if date_changed:
            return ConfirmationPrompt(
                title="Confirm date change",
                description=(
                    "You are about to change the date of this appointment. "
                    "Do you want to continue?"
                ),
                details=self._from_to(original, pending),
            )
        return ConfirmationPrompt(
            title="Confirm change",
            description="Are you sure you want to change the details of this appointment?",
            details=self._from_to(original, pending),
        )

    def move_prompt(
        self,
        original: Appointment,
        pending: NormalizedAppointment,
    ) -> ConfirmationPrompt:
        """Prompt shown after an appointment is dropped on a new slot."""
        return ConfirmationPrompt(
            title="Confirm change",
            description=(
                f"Are you sure you want to move '{original.title}' from "
                f"{self.format_datetime(original.start_date_time)} to "
                f"{self.format_datetime(pending.start_date_time)}?"
            ),
            confirm_label="Move appointment",
        )

    def delete_prompt(self, appointment: Appointment) -> ConfirmationPrompt:
        return ConfirmationPrompt(
            title="Cancel appointment",
            description=(
                "This action cannot be undone. It will permanently remove "
                f"'{appointment.title}' from the calendar."
            ),
            confirm_label="Delete",
        )

    # =========================================================================
    # Details
    # =========================================================================

    def details(self, appointment: Appointment) -> List[str]:
        """Lines of the details dialog."""
        lines = [
            f"Nurse: {appointment.owner.name}",
            f"Start: {appointment.start_date_time.strftime('%A %d %B')}, "
            f"{self.format_time(appointment.start_date_time)}",
            f"End: {appointment.end_date_time.strftime('%A %d %B')}, "
            f"{self.format_time(appointment.end_date_time)}",
        ]
        if appointment.notes:
            lines.append(f"Notes: {appointment.notes}")
        return lines

    def _from_to(self, original: Appointment, pending: NormalizedAppointment) -> List[str]:
        return [
            f"From: {self.format_datetime(original.start_date_time)}",
            f"To: {self.format_datetime(pending.start_date_time)}",
        ]

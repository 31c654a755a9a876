"""
In-memory Event Store.

Owns the calendar's appointments for the lifetime of the process.
Components read snapshots through list() and request every mutation
through add/update/remove; nothing else holds the canonical collection.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from core.data import Repository

from .models import Appointment

logger = logging.getLogger(__name__)


class MutationStatus(Enum):
    """Outcome of an update or removal."""
    UPDATED = "updated"
    REMOVED = "removed"
    NOT_FOUND = "not_found"


@dataclass
class MutationResult:
    """Result of a store mutation, suitable for a toast."""
    status: MutationStatus
    appointment: Optional[Appointment] = None
    reason: str = ""

    @property
    def success(self) -> bool:
        return self.status != MutationStatus.NOT_FOUND

    @classmethod
    def not_found(cls, appointment_id: Optional[int]) -> "MutationResult":
        return cls(
            status=MutationStatus.NOT_FOUND,
            reason=f"Appointment {appointment_id} not found",
        )


class EventStore(Repository[Appointment]):
    """
    Insertion-ordered collection of appointments.

    Ids come from a counter that only moves forward, so two appointments
    created in the same instant never collide and a removed id is never
    handed out again.
    """

    def __init__(self, appointments: Optional[Iterable[Appointment]] = None):
        """
        Initialize the store.

        Args:
            appointments: Optional initial content (e.g. sample data)
        """
        self._appointments: Dict[int, Appointment] = {}
        self._next_id = 1
        for appointment in appointments or []:
            self.add(appointment)

    def __len__(self) -> int:
        return len(self._appointments)

    def __contains__(self, appointment_id: object) -> bool:
        return appointment_id in self._appointments

    def get_by_id(self, id: Optional[int]) -> Optional[Appointment]:
        if id is None:
            return None
        return self._appointments.get(id)

    def list(self) -> List[Appointment]:
        """Snapshot of the stored appointments in insertion order."""
        return list(self._appointments.values())

    def add(self, appointment: Appointment) -> Appointment:
        """
        Commit a new appointment.

        Mints an id when the appointment has none; a supplied id is kept.

        Raises:
            ValueError: If the supplied id is already in the store
        """
        if appointment.id is None:
            appointment = appointment.model_copy(update={"id": self._mint_id()})
        elif appointment.id in self._appointments:
            raise ValueError(f"Appointment {appointment.id} already exists")
        else:
            self._next_id = max(self._next_id, appointment.id + 1)

        self._appointments[appointment.id] = appointment
        logger.info(f"Added appointment {appointment.id}: {appointment.title}")
        return appointment

    def update(self, appointment: Appointment) -> MutationResult:
        """Replace the stored appointment with the same id."""
        if appointment.id not in self._appointments:
            logger.warning(f"Update skipped, appointment {appointment.id} not found")
            return MutationResult.not_found(appointment.id)

        self._appointments[appointment.id] = appointment
        logger.info(f"Updated appointment {appointment.id}")
        return MutationResult(status=MutationStatus.UPDATED, appointment=appointment)

    def remove(self, id: Optional[int]) -> MutationResult:
        """
        Delete an appointment.

        Removing an id that is already gone reports NOT_FOUND and changes
        nothing.
        """
        appointment = self._appointments.pop(id, None) if id is not None else None
        if appointment is None:
            logger.warning(f"Remove skipped, appointment {id} already gone")
            return MutationResult.not_found(id)

        logger.info(f"Removed appointment {id}")
        return MutationResult(status=MutationStatus.REMOVED, appointment=appointment)

    def _mint_id(self) -> int:
        appointment_id = self._next_id
        self._next_id += 1
        return appointment_id

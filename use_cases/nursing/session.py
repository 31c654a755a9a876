"""
Appointment Edit Session.

Extends the core SessionContext with the two-phase commit of the
appointment dialog: validate and detect changes first, write to the
store only once the user has confirmed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from core.domain import ValidationError
from core.session import SessionContext

from .models import Appointment, AppointmentDraft, NormalizedAppointment


class EditFlowStep(Enum):
    """Steps of an appointment through the dialog."""
    DRAFT = "draft"
    PENDING = "pending"
    COMMITTED = "committed"


@dataclass
class AppointmentEditSession(SessionContext):
    """
    Session for creating or editing one appointment.

    Tracks:
    - The stored original (None when creating)
    - The draft as the form currently holds it
    - The validated appointment waiting for confirmation
    - The errors of the last rejected submission
    """

    draft: AppointmentDraft = field(default_factory=AppointmentDraft)
    original: Optional[Appointment] = None
    pending: Optional[NormalizedAppointment] = None
    errors: List[ValidationError] = field(default_factory=list)
    committed: Optional[Appointment] = None
    flow_step: EditFlowStep = EditFlowStep.DRAFT

    TRANSITIONS = {
        EditFlowStep.DRAFT: frozenset({
            EditFlowStep.DRAFT,
            EditFlowStep.PENDING,
            EditFlowStep.COMMITTED,
        }),
        EditFlowStep.PENDING: frozenset({
            EditFlowStep.DRAFT,
            EditFlowStep.COMMITTED,
        }),
        EditFlowStep.COMMITTED: frozenset(),
    }

    @property
    def is_editing(self) -> bool:
        return self.original is not None

    @property
    def nurse_locked(self) -> bool:
        """The nurse field is read-only while editing."""
        return self.is_editing

    def reject(self, errors: List[ValidationError]):
        """Keep the draft and remember why it was refused."""
        self.transition(EditFlowStep.DRAFT)
        self.errors = list(errors)
        self.pending = None

    def hold(self, appointment: NormalizedAppointment):
        """Park a validated edit until the user confirms it."""
        self.transition(EditFlowStep.PENDING)
        self.errors = []
        self.pending = appointment

    def commit(self, appointment: Appointment):
        """Record the appointment written to the store."""
        self.transition(EditFlowStep.COMMITTED)
        self.errors = []
        self.pending = None
        self.committed = appointment

    def revert(self):
        """
        Discard a pending edit.

        The draft goes back to the stored values the session started from.
        """
        self.transition(EditFlowStep.DRAFT)
        self.pending = None
        self.errors = []
        if self.original is not None:
            self.draft = AppointmentDraft.from_appointment(self.original)

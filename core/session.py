"""
Session Management for Use Cases.

Provides session context tracking across user interactions.
This enables:
- Tracking which step of a flow the user is on
- Guarding flow transitions against illegal jumps
"""

from dataclasses import dataclass, field
from typing import ClassVar, FrozenSet, Mapping, Optional
from datetime import datetime, timezone
from enum import Enum
import logging
import uuid

logger = logging.getLogger(__name__)


@dataclass
class SessionContext:
    """
    Base session context that tracks interaction state.

    Each use case extends this with its own step enum, a default
    flow_step and a TRANSITIONS table. The session context is:
    - Scoped to a single form or dialog
    - Discarded when the dialog closes
    """
    # Identity
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])

    # Current flow state
    flow_step: Optional[Enum] = None

    # Timestamps
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    TRANSITIONS: ClassVar[Mapping[Enum, FrozenSet[Enum]]] = {}

    def can_transition(self, step: Enum) -> bool:
        """Check whether the flow may move to the given step."""
        allowed: FrozenSet[Enum] = self._transitions().get(self.flow_step, frozenset())
        return step in allowed

    def transition(self, step: Enum):
        """
        Move the flow to a new step.

        Raises:
            ValueError: If the transition is not allowed from the current step
        """
        if not self.can_transition(step):
            raise ValueError(
                f"Cannot move session {self.session_id} from {self.flow_step} to {step}"
            )
        logger.debug(f"Session {self.session_id}: {self.flow_step} -> {step}")
        self.flow_step = step
        self._touch()

    def _transitions(self) -> Mapping[Enum, FrozenSet[Enum]]:
        return type(self).TRANSITIONS

    def _touch(self):
        """Update the timestamp."""
        self.updated_at = datetime.now(timezone.utc)

    @property
    def is_finished(self) -> bool:
        """True when no further transition is possible."""
        return not self._transitions().get(self.flow_step)

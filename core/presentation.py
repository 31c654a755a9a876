"""
Presentation Layer Base Classes.

The presentation layer handles message composition and formatting.
It transforms domain objects into plain values a UI can render:
toast notifications, confirmation prompts and formatted text.

Key principles:
- Messages are stateless representations
- No business logic in composers
- Consistent formatting across use cases
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, List
from datetime import datetime
from enum import Enum


class NotificationLevel(Enum):
    """Severity of a transient notification."""
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Notification:
    """A transient toast shown after an operation."""
    level: NotificationLevel
    message: str

    @property
    def is_error(self) -> bool:
        return self.level == NotificationLevel.ERROR


@dataclass
class ConfirmationPrompt:
    """
    A question the user must answer before a side effect happens.

    Attributes:
        title: Dialog title
        description: Body text explaining what will change
        confirm_label: Label of the accepting button
        cancel_label: Label of the dismissing button
        details: Extra lines (e.g. from/to values)
    """
    title: str
    description: str
    confirm_label: str = "Confirm"
    cancel_label: str = "Cancel"
    details: List[str] = field(default_factory=list)


class MessageComposer(ABC):
    """
    Abstract base class for message composers.

    Each use case should extend this and implement methods for
    its specific notifications and prompts.

    Example:
        class AppointmentMessageComposer(MessageComposer):
            def created(self, appointment: Appointment) -> Notification:
                ...
    """

    def __init__(self, use_24_hour_format: bool = True):
        """
        Initialize the composer.

        Args:
            use_24_hour_format: Render times as 14:30 instead of 2:30 PM
        """
        self.use_24_hour_format = use_24_hour_format
        self.formatter = TextFormatter()

    def success(self, message: str) -> Notification:
        return Notification(level=NotificationLevel.SUCCESS, message=message)

    def error(self, message: str) -> Notification:
        return Notification(level=NotificationLevel.ERROR, message=message)

    def format_time(self, dt: datetime) -> str:
        """Format the time of day honouring the 12h/24h preference."""
        return self.formatter.time(dt, self.use_24_hour_format)

    def format_datetime(self, dt: datetime) -> str:
        """Format a full timestamp, e.g. '10 Mar 2025 at 09:00'."""
        return f"{self.formatter.date(dt, '%d %b %Y')} at {self.format_time(dt)}"

    @abstractmethod
    def get_message_builders(self) -> Dict[str, Callable]:
        """
        Return a mapping of message types to builder methods.

        Returns:
            Dict mapping message names to builder methods
        """
        pass


class TextFormatter:
    """
    Utility class for formatting text in messages.

    Provides consistent formatting for common data types.
    """

    @staticmethod
    def date(dt: datetime, format: str = "%Y-%m-%d") -> str:
        """Format a date."""
        return dt.strftime(format)

    @staticmethod
    def time(dt: datetime, use_24_hour_format: bool = True) -> str:
        """Format a time of day."""
        if use_24_hour_format:
            return dt.strftime("%H:%M")
        hour = dt.hour % 12 or 12
        suffix = "AM" if dt.hour < 12 else "PM"
        return f"{hour}:{dt.minute:02d} {suffix}"

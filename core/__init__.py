"""
Core Framework for Calendar Use Cases.

This module provides the extensible base classes and interfaces
that all use cases should implement. The layered architecture ensures:

1. Domain Layer - Pure business rules, no I/O
2. Data Layer - Repository pattern for data access
3. Presentation Layer - Notifications and confirmation prompts
4. Session Layer - Flow state for forms and dialogs

Each use case follows this pattern for consistency and reusability.
"""

from .domain import DomainService, PolicyEngine, Validator, ValidationError
from .data import Repository, ReadOnlyRepository
from .presentation import MessageComposer, Notification, ConfirmationPrompt
from .session import SessionContext

__all__ = [
    # Domain
    "DomainService",
    "PolicyEngine",
    "Validator",
    "ValidationError",
    # Data
    "Repository",
    "ReadOnlyRepository",
    # Presentation
    "MessageComposer",
    "Notification",
    "ConfirmationPrompt",
    # Session
    "SessionContext",
]

"""
Use Cases Package.

This package contains modular use case implementations built on core/.
Each use case is a self-contained module with its own:
- Domain policies and services
- Store
- Dialog sessions
- Message composer

Available use cases:
- nursing: Appointment calendar for a nursing practice

Architecture:
Each use case follows the layered architecture pattern defined in core/:
- domain/: Pure business logic (policies, services)
- store.py: Repository implementation
- presentation/: Notifications and prompts
- session.py: Use-case-specific session context
- calendar.py: Service wiring the layers together
"""

from use_cases.nursing import CalendarService, EventStore

__all__ = [
    "CalendarService",
    "EventStore",
]

"""
Data Layer Base Classes.

The data layer provides the Repository pattern for data access.
This abstracts away the specific data store and provides a clean
interface for the domain layer.

Key principles:
- Repositories handle CRUD operations only
- No business logic in repositories
- Return domain objects, not raw dicts
- Support for different backends via dependency injection
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, TypeVar

# Type variable for entity types
T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """
    Abstract base class for mutable repositories.

    A Repository provides data access methods for a specific entity type.
    Type parameter T represents the entity type this repository manages.

    Example:
        class AppointmentRepository(Repository[Appointment]):
            def get_by_id(self, id: int) -> Optional[Appointment]:
                return self._rows.get(id)
    """

    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[T]:
        """
        Get an entity by its ID.

        Args:
            id: The entity's unique identifier

        Returns:
            The entity if found, None otherwise
        """
        pass

    @abstractmethod
    def list(self) -> List[T]:
        """Return a snapshot of every stored entity."""
        pass

    @abstractmethod
    def add(self, entity: T) -> T:
        """
        Add a new entity.

        Args:
            entity: The entity to add

        Returns:
            The stored entity (may have updated fields like ID)
        """
        pass

    @abstractmethod
    def update(self, entity: T) -> Any:
        """Replace a stored entity that has the same ID."""
        pass

    @abstractmethod
    def remove(self, id: Any) -> Any:
        """Remove an entity by ID."""
        pass


class ReadOnlyRepository(ABC, Generic[T]):
    """
    Abstract base class for read-only repositories.

    Use this for reference data that doesn't change during operation
    (e.g., the service catalog, the nursing staff).
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Get an entity by its ID."""
        pass

    @abstractmethod
    def get_all(self) -> List[T]:
        """Get all entities."""
        pass

    def get_by_name(self, name: str) -> Optional[T]:
        """
        Get an entity by its name field.

        Default implementation searches get_all().
        Override for more efficient lookup.
        """
        for entity in self.get_all():
            if getattr(entity, "name", None) == name:
                return entity
        return None

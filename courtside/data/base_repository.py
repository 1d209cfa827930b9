"""
Base repository interface for domain store collections.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar

T = TypeVar('T')

# Called with the repository after each state-changing action
Listener = Callable[[Any], None]
Predicate = Callable[[T], bool]


class BaseRepository(Generic[T], ABC):
    """Base class for all repository implementations.

    A repository holds the authoritative, ordered collection for one entity
    family. Every action is synchronous and runs to completion before the
    next one starts.

    Generic type T represents the entity model being managed.
    """

    @abstractmethod
    def add(self, entity: T) -> T:
        """Insert an entity, assigning system fields that are still empty.

        Args:
            entity: Entity to insert

        Returns:
            T: The stored entity
        """
        pass

    @abstractmethod
    def update(self, id: str, changes: dict, updated_at: Optional[str] = None) -> Optional[T]:
        """Shallow-merge changes into the entity with this ID.

        Args:
            id: Entity identifier
            changes: Field values to merge
            updated_at: Timestamp to stamp instead of the current time

        Returns:
            Optional[T]: Updated entity, None if no entity has this ID
        """
        pass

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Remove the entity with this ID.

        Args:
            id: Entity identifier

        Returns:
            bool: True if an entity was removed, False otherwise
        """
        pass

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve an entity by its ID.

        Args:
            id: Entity identifier

        Returns:
            Optional[T]: Entity if found, None otherwise
        """
        pass

    @abstractmethod
    def query(self, predicate: Optional[Predicate] = None, **field_equals: Any) -> List[T]:
        """Retrieve all entities matching a predicate and field values.

        Args:
            predicate: Optional callable returning True for matches
            **field_equals: Field values a match must equal

        Returns:
            List[T]: Matching entities in collection order
        """
        pass

    @abstractmethod
    def list(self) -> List[T]:
        """Return the full collection in order."""
        pass

    @abstractmethod
    def set_all(self, entities: Iterable[T]) -> None:
        """Replace the whole collection."""
        pass

    @abstractmethod
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every state change.

        Returns:
            Callable[[], None]: Function that removes the listener
        """
        pass

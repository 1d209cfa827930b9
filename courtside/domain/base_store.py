"""
Common plumbing for domain stores.

A domain store groups the repositories of one entity family, exposes the
family's actions and derived getters, and tells its subscribers whenever any
of its collections changed.
"""
from typing import Any, Callable, List, Optional

from courtside.config.logging_config import get_logger
from courtside.data.memory_repository import InMemoryRepository
from courtside.data.persistence import KeyValueStorage, PersistenceAdapter

logger = get_logger(__name__)

StoreListener = Callable[['DomainStore'], None]


class DomainStore:
    """Base class for all domain stores."""

    name = "store"

    def __init__(self):
        self._listeners: List[StoreListener] = []

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """
        Register a listener called with the store after every state change.

        Args:
            listener: Callback receiving the store

        Returns:
            Callable[[], None]: Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _repository(self, name: str, **kwargs: Any) -> InMemoryRepository:
        """Create a repository whose changes are forwarded to store subscribers."""
        repository = InMemoryRepository(f"{self.name}.{name}", **kwargs)
        repository.subscribe(self._on_repository_changed)
        return repository

    def _on_repository_changed(self, repository: InMemoryRepository) -> None:
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.error(f"{self.name}: subscriber failed: {str(e)}")


class PersistentStore(DomainStore):
    """Domain store whose main collection is mirrored to key-value storage.

    The collection is hydrated once at construction. Afterwards every change
    is written back from a repository listener, so no action waits on or
    inspects the write.
    """

    storage_key = ""
    collection_field = ""

    def __init__(self, storage: Optional[KeyValueStorage]):
        super().__init__()
        self.persistence: Optional[PersistenceAdapter] = None
        if storage is not None:
            self.persistence = PersistenceAdapter(storage, self.storage_key, self.collection_field)

    def _attach_persistence(self, repository: InMemoryRepository, entity_cls: Any) -> None:
        """Load stored entities into the repository, then persist every change."""
        if self.persistence is None:
            return
        stored = self.persistence.hydrate(entity_cls.from_dict)
        if stored:
            repository.set_all(stored)
        repository.subscribe(lambda repo: self.persistence.persist(repo.list()))

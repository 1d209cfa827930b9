"""
In-memory repository implementation backing every domain store.
"""
import copy
from dataclasses import fields, is_dataclass, replace
from typing import Any, Callable, Dict, Generic, Hashable, Iterable, List, Optional, TypeVar

from courtside.config.logging_config import get_logger
from courtside.data.base_repository import BaseRepository, Listener, Predicate
from courtside.utils.identifiers import generate_id, utc_timestamp

T = TypeVar('T')
logger = get_logger(__name__)


def _entity_id(entity: Any) -> Hashable:
    return getattr(entity, 'id')


class InMemoryRepository(BaseRepository[T], Generic[T]):
    """Ordered in-memory collection for one entity family.

    Entities are matched by ``key`` (the ``id`` attribute unless told
    otherwise). Keys are unique: adding an entity whose key is already
    present changes nothing and returns the stored entity. Updating or
    deleting a key that is not present is a silent no-op: nothing is raised,
    nothing is created, and listeners are not called.

    ``add`` stores a deep copy, so the stored entity shares no nested lists
    or value objects with the caller or with another store. Updates are
    shallow: the new version replaces the old one at the same position and
    shares the nested values it did not change with earlier snapshots.
    """

    def __init__(
        self,
        name: str,
        insert_at_front: bool = False,
        id_prefix: str = "",
        key: Callable[[T], Hashable] = _entity_id,
        entity_cls: Optional[Callable[..., T]] = None,
    ):
        """Initialize the repository with an empty collection.

        Args:
            name: Collection name used in log messages
            insert_at_front: Prepend new entities instead of appending them
            id_prefix: Prefix for generated identifiers
            key: Function returning an entity's identity
            entity_cls: Model class used by create()
        """
        self.name = name
        self.insert_at_front = insert_at_front
        self.id_prefix = id_prefix
        self._key = key
        self.entity_cls = entity_cls
        self._uses_id = key is _entity_id
        self._items: List[T] = []
        self._listeners: List[Listener] = []

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, id: Hashable) -> bool:
        return self._index_of(id) is not None

    def add(self, entity: T) -> T:
        """Insert an entity, filling in its ID and timestamps when empty.

        Args:
            entity: Entity to insert

        Returns:
            T: The stored copy, or the entity already stored under the same key
        """
        stored = self._stamp_new(entity)
        index = self._index_of(self._key(stored))
        if index is not None:
            logger.debug(f"{self.name}: add skipped, {self._key(stored)} already present")
            return self._items[index]

        if self.insert_at_front:
            self._items.insert(0, stored)
        else:
            self._items.append(stored)

        logger.debug(f"{self.name}: added {self._key(stored)}")
        self._notify()
        return stored

    def create(self, **values: Any) -> T:
        """Build an entity of the repository's model class and add it."""
        if self.entity_cls is None:
            raise TypeError(f"{self.name}: no entity class configured")
        return self.add(self.entity_cls(**values))

    def update(self, id: Hashable, changes: Dict[str, Any], updated_at: Optional[str] = None) -> Optional[T]:
        """Shallow-merge changes into the entity with this ID.

        Args:
            id: Entity identifier
            changes: Field values to merge; the ID itself is never changed
            updated_at: Timestamp to stamp instead of the current time

        Returns:
            Optional[T]: Updated entity, None if not found
        """
        index = self._index_of(id)
        if index is None:
            logger.debug(f"{self.name}: update skipped, {id} not found")
            return None

        current = self._items[index]
        merged = self._merge(current, changes)
        if _has_field(merged, 'updated_at'):
            merged = replace(merged, updated_at=updated_at or utc_timestamp())

        self._items[index] = merged
        logger.debug(f"{self.name}: updated {id}")
        self._notify()
        return merged

    def replace(self, entity: T) -> Optional[T]:
        """Swap in a full new version of an existing entity.

        Args:
            entity: Replacement, matched by its own ID

        Returns:
            Optional[T]: The stored entity, None if no entity has its ID
        """
        index = self._index_of(self._key(entity))
        if index is None:
            logger.debug(f"{self.name}: replace skipped, {self._key(entity)} not found")
            return None

        self._items[index] = entity
        self._notify()
        return entity

    def delete(self, id: Hashable) -> bool:
        """Delete an entity by its ID.

        Args:
            id: Entity identifier

        Returns:
            bool: True if deleted, False if not found
        """
        index = self._index_of(id)
        if index is None:
            logger.debug(f"{self.name}: delete skipped, {id} not found")
            return False

        del self._items[index]
        logger.debug(f"{self.name}: deleted {id}")
        self._notify()
        return True

    def delete_where(self, predicate: Predicate) -> int:
        """Delete every entity matching the predicate.

        Returns:
            int: Number of entities removed
        """
        kept = [item for item in self._items if not predicate(item)]
        removed = len(self._items) - len(kept)
        if removed:
            self._items = kept
            logger.debug(f"{self.name}: deleted {removed} entities")
            self._notify()
        return removed

    def get_by_id(self, id: Hashable) -> Optional[T]:
        index = self._index_of(id)
        return None if index is None else self._items[index]

    def query(self, predicate: Optional[Predicate] = None, **field_equals: Any) -> List[T]:
        """Retrieve all entities matching the filter.

        Args:
            predicate: Optional callable returning True for matches
            **field_equals: Field values a match must equal

        Returns:
            List[T]: New list of matches in collection order
        """
        result = []
        for entity in self._items:
            if any(getattr(entity, name, None) != value for name, value in field_equals.items()):
                continue
            if predicate is not None and not predicate(entity):
                continue
            result.append(entity)
        return result

    def list(self) -> List[T]:
        return list(self._items)

    def set_all(self, entities: Iterable[T]) -> None:
        """Replace the whole collection, keeping the given order."""
        self._items = list(entities)
        self._notify()

    def clear(self) -> None:
        if self._items:
            self._items = []
            self._notify()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _index_of(self, id: Hashable) -> Optional[int]:
        for index, entity in enumerate(self._items):
            if self._key(entity) == id:
                return index
        return None

    def _stamp_new(self, entity: T) -> T:
        now = utc_timestamp()
        stamps: Dict[str, Any] = {}
        if self._uses_id and not getattr(entity, 'id', None):
            stamps['id'] = generate_id(self.id_prefix)
        for name in ('created_at', 'updated_at'):
            if _has_field(entity, name) and not getattr(entity, name):
                stamps[name] = now
        return replace(copy.deepcopy(entity), **stamps)

    def _merge(self, current: T, changes: Dict[str, Any]) -> T:
        known = {f.name for f in fields(current)}
        accepted = {k: v for k, v in changes.items() if k in known and k != 'id'}
        ignored = set(changes) - set(accepted)
        if ignored:
            logger.debug(f"{self.name}: ignoring fields {sorted(ignored)}")
        return replace(current, **accepted)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.error(f"{self.name}: listener failed: {str(e)}")


def _has_field(entity: Any, name: str) -> bool:
    return is_dataclass(entity) and any(f.name == name for f in fields(entity))

"""
Key-value persistence for the few stores that survive a restart.

Each persistent store owns one JSON document under a fixed key, shaped
``{"<collectionField>": [entity, ...]}``. The document is read once when the
store is built and rewritten after every mutation. Read and write failures
are logged and absorbed: the in-memory collection stays authoritative for the
running process.
"""
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from courtside.config.logging_config import get_logger
from courtside.utils.error_handling import ErrorSeverity, StorageError

T = TypeVar('T')
logger = get_logger(__name__)


class KeyValueStorage(ABC):
    """String key-value storage holding one document per key."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string, or None if the key is absent."""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        pass


class MemoryKeyValueStorage(KeyValueStorage):
    """Dictionary-backed storage for tests and storage-disabled runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)


class FileKeyValueStorage(KeyValueStorage):
    """One ``<key>.json`` file per key inside a data directory."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()


class PersistenceAdapter:
    """Serializes one store collection to a storage key and reads it back.

    The adapter also keeps a small health signal (``healthy``,
    ``failure_count``, ``last_error``) so callers can observe write failures
    that mutating actions never see.
    """

    def __init__(self, storage: KeyValueStorage, key: str, collection_field: str):
        """
        Initialize the adapter.

        Args:
            storage: Backing key-value storage
            key: Storage key, e.g. "child-profiles-storage"
            collection_field: Top-level field holding the entity list
        """
        self.storage = storage
        self.key = key
        self.collection_field = collection_field
        self.failure_count = 0
        self.last_error: Optional[StorageError] = None

    @property
    def healthy(self) -> bool:
        return self.last_error is None

    def hydrate(self, from_dict: Callable[[Dict[str, Any]], T]) -> List[T]:
        """
        Load the persisted collection.

        Args:
            from_dict: Builds one entity from its stored dict

        Returns:
            List[T]: Stored entities, or an empty list when nothing usable is stored
        """
        try:
            raw = self.storage.get_item(self.key)
            if raw is None:
                logger.debug(f"No stored document for {self.key}")
                return []

            document = json.loads(raw)
            items = document.get(self.collection_field) or []
            if isinstance(items, dict):
                items = [items]
            entities = [from_dict(item) for item in items]
            logger.info(f"Hydrated {len(entities)} item(s) from {self.key}")
            return entities

        except Exception as e:
            self._record_failure(StorageError(
                f"Could not read stored {self.key}: {str(e)}",
                key=self.key,
                severity=ErrorSeverity.WARNING,
                cause=e,
            ))
            return []

    def persist(self, entities: Iterable[Any]) -> bool:
        """
        Write the collection under the storage key.

        Args:
            entities: Entities exposing to_dict()

        Returns:
            bool: True if the write succeeded
        """
        try:
            document = {self.collection_field: [entity.to_dict() for entity in entities]}
            self.storage.set_item(self.key, json.dumps(document))
            self.last_error = None
            return True

        except Exception as e:
            self._record_failure(StorageError(
                f"Could not write {self.key}: {str(e)}",
                key=self.key,
                severity=ErrorSeverity.ERROR,
                cause=e,
            ))
            return False

    def persist_single(self, entity: Optional[Any]) -> bool:
        """Write a single-record document (``null`` when cleared)."""
        try:
            document = {self.collection_field: entity.to_dict() if entity is not None else None}
            self.storage.set_item(self.key, json.dumps(document))
            self.last_error = None
            return True

        except Exception as e:
            self._record_failure(StorageError(
                f"Could not write {self.key}: {str(e)}",
                key=self.key,
                severity=ErrorSeverity.ERROR,
                cause=e,
            ))
            return False

    def health(self) -> Dict[str, Any]:
        """Persistence health information for this key."""
        return {
            "key": self.key,
            "healthy": self.healthy,
            "failure_count": self.failure_count,
            "last_error": self.last_error.to_dict() if self.last_error else None,
        }

    def _record_failure(self, error: StorageError) -> None:
        self.failure_count += 1
        self.last_error = error
        logger.error(str(error))

"""
Draft staging area for multi-step creation flows.

A draft is a nested dict that collects partial input across several screens
before one final submit turns it into a committed entity. It is never part of
a store's committed collection.
"""
import copy
from typing import Any, Callable, Dict

from courtside.config.logging_config import get_logger

logger = get_logger(__name__)


class DraftStaging:
    """Single named staging region with partial-merge updates.

    ``reset`` always installs a fresh copy of the default shape, so nothing
    typed into one draft can leak into the next one through shared nested
    dicts or lists.
    """

    def __init__(self, name: str, default_factory: Callable[[], Dict[str, Any]]):
        """
        Initialize the staging area.

        Args:
            name: Draft name used in log messages
            default_factory: Returns the empty/default draft shape
        """
        self.name = name
        self._default_factory = default_factory
        self._draft: Dict[str, Any] = default_factory()

    @property
    def value(self) -> Dict[str, Any]:
        """Deep copy of the current draft."""
        return copy.deepcopy(self._draft)

    def default(self) -> Dict[str, Any]:
        """A fresh default draft, for comparisons."""
        return self._default_factory()

    def update(self, **fields: Any) -> None:
        """Merge top-level fields into the draft."""
        self._draft.update(copy.deepcopy(fields))

    def update_section(self, section: str, **fields: Any) -> None:
        """
        Merge fields into one nested section without clobbering its siblings.

        Args:
            section: Name of a nested dict in the draft (e.g. "address")
            **fields: Values to merge into that section
        """
        target = self._draft.get(section)
        if not isinstance(target, dict):
            target = {}
            self._draft[section] = target
        target.update(copy.deepcopy(fields))

    def update_field(self, path: str, value: Any) -> None:
        """
        Set one value by dotted path, creating intermediate sections.

        Args:
            path: Field path such as "name" or "address.city"
            value: New value
        """
        *parents, leaf = path.split(".")
        target = self._draft
        for part in parents:
            child = target.get(part)
            if not isinstance(child, dict):
                child = {}
                target[part] = child
            target = child
        target[leaf] = copy.deepcopy(value)

    def reset(self) -> None:
        """Discard in-progress input."""
        self._draft = self._default_factory()
        logger.debug(f"Draft {self.name} reset")

    def take(self) -> Dict[str, Any]:
        """Return the current draft and reset the staging area."""
        draft = self._draft
        self.reset()
        return draft

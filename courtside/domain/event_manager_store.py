"""
Organizer-side event store.

Every change to a managed event is published on the event emitter after the
local collection has been updated, so the public catalog can mirror it.
"""
from dataclasses import replace
from typing import Any, List, Optional

from courtside.config.logging_config import get_logger
from courtside.data.models import Event, EventStatus
from courtside.domain.base_store import DomainStore
from courtside.events.event_interface import DomainEvent, EventEmitter, EventType
from courtside.utils.identifiers import generate_id, utc_timestamp

logger = get_logger(__name__)


class EventManagerStore(DomainStore):
    """Events created and managed by organizers."""

    name = "event_manager"

    def __init__(self, emitter: EventEmitter):
        """
        Initialize the store.

        Args:
            emitter: Emitter that receives one domain event per mutation
        """
        super().__init__()
        self.emitter = emitter
        self._events = self._repository("managed_events")

    @property
    def managed_events(self) -> List[Event]:
        return self._events.list()

    def create_event(self, event: Event) -> Event:
        """
        Store a new event and publish it.

        The id and both timestamps are assigned here, before publishing, so
        the published copy is identical to the stored one.

        Args:
            event: Event input; an empty id is generated, timestamps are overwritten

        Returns:
            Event: The stored event; an id that is already managed returns the
            existing event and publishes nothing
        """
        existing = self._events.get_by_id(event.id) if event.id else None
        if existing is not None:
            logger.warning(f"Managed event {event.id} already exists, create ignored")
            return existing

        now = utc_timestamp()
        stored = self._events.add(replace(event, id=event.id or generate_id("event"), created_at=now, updated_at=now))
        logger.info(f"Managed event {stored.name!r} created with id {stored.id}")
        self.emitter.emit(DomainEvent(
            type=EventType.MANAGED_EVENT_CREATED,
            entity_id=stored.id,
            payload=stored,
            updated_at=now,
            source=self.name,
        ))
        return stored

    def update_event(self, event_id: str, **changes: Any) -> Optional[Event]:
        """
        Merge changes into a managed event and publish the patch.

        Unknown ids are ignored and nothing is published.
        """
        now = utc_timestamp()
        updated = self._events.update(event_id, changes, updated_at=now)
        if updated is None:
            return None
        self.emitter.emit(DomainEvent(
            type=EventType.MANAGED_EVENT_UPDATED,
            entity_id=event_id,
            payload=changes,
            updated_at=now,
            source=self.name,
        ))
        return updated

    def complete_event(self, event_id: str) -> Optional[Event]:
        return self.update_event(event_id, status=EventStatus.COMPLETED)

    def delete_event(self, event_id: str) -> bool:
        """
        Remove a managed event and publish the deletion.

        The deletion is published even when this store does not hold the id,
        so a catalog copy left behind by an earlier failed sync is removed too.

        Returns:
            bool: True if this store held the event
        """
        deleted = self._events.delete(event_id)
        self.emitter.emit(DomainEvent(
            type=EventType.MANAGED_EVENT_DELETED,
            entity_id=event_id,
            source=self.name,
        ))
        return deleted

    def get_event_by_id(self, event_id: str) -> Optional[Event]:
        return self._events.get_by_id(event_id)

    def get_events_by_manager(self, manager_id: str) -> List[Event]:
        return self._events.query(creator_id=manager_id)

    def get_upcoming_events(self, manager_id: str) -> List[Event]:
        return self._events.query(creator_id=manager_id, status=EventStatus.UPCOMING)

    def get_completed_events(self, manager_id: str) -> List[Event]:
        return self._events.query(creator_id=manager_id, status=EventStatus.COMPLETED)

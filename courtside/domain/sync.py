"""
Mirrors organizer-managed events into the public catalog.
"""
from courtside.config.logging_config import get_logger
from courtside.domain.booking_store import BookingStore
from courtside.events.event_interface import DomainEvent, EventEmitter, EventType

logger = get_logger(__name__)


class EventCatalogSync:
    """Applies managed-event domain events to a BookingStore.

    The push is one-directional: the catalog never publishes back. Creations
    and updates reuse the publisher's id and ``updated_at`` so both copies
    stay field-equal.
    """

    def __init__(self, emitter: EventEmitter, booking_store: BookingStore):
        self.emitter = emitter
        self.booking_store = booking_store
        self._handlers = {
            EventType.MANAGED_EVENT_CREATED: self._on_created,
            EventType.MANAGED_EVENT_UPDATED: self._on_updated,
            EventType.MANAGED_EVENT_DELETED: self._on_deleted,
        }
        for event_type, handler in self._handlers.items():
            emitter.on(event_type, handler)
        logger.debug("Event catalog sync attached")

    def detach(self) -> None:
        """Stop mirroring."""
        for event_type, handler in self._handlers.items():
            self.emitter.off(event_type, handler)
        logger.debug("Event catalog sync detached")

    def _on_created(self, event: DomainEvent) -> None:
        self.booking_store.add_event(event.payload)

    def _on_updated(self, event: DomainEvent) -> None:
        self.booking_store.update_event(event.entity_id, event.payload, updated_at=event.updated_at)

    def _on_deleted(self, event: DomainEvent) -> None:
        self.booking_store.delete_event(event.entity_id)

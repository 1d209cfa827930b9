"""
Domain event interface for cross-store synchronization.

A manager store publishes typed domain events after it has mutated its own
collection; a paired public store subscribes and mirrors the change. Delivery
is synchronous, in-process and one-directional. There is no queue and no
retry: a failing handler is logged and the publisher's mutation stands.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from courtside.config.logging_config import get_logger

logger = get_logger(__name__)


class EventType(Enum):
    """Types of events that can be emitted on an event emitter."""

    # Managed event lifecycle
    MANAGED_EVENT_CREATED = "managed_event.created"
    MANAGED_EVENT_UPDATED = "managed_event.updated"
    MANAGED_EVENT_DELETED = "managed_event.deleted"

    # Catch-all for unknown events
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, event_type_str: str) -> 'EventType':
        """Convert a string to an EventType enum value."""
        try:
            return next(e for e in cls if e.value == event_type_str)
        except StopIteration:
            logger.warning(f"Unknown event type: {event_type_str}")
            return cls.UNKNOWN


@dataclass
class DomainEvent:
    """A change published by a manager store.

    ``payload`` is the full entity for creations, the applied patch for
    updates and ``None`` for deletions. ``updated_at`` is the exact
    timestamp the publisher stamped, so both copies end up identical.
    """

    type: EventType
    entity_id: str
    payload: Any = None
    updated_at: Optional[str] = None
    source: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert the event to a dictionary."""
        payload = self.payload.to_dict() if hasattr(self.payload, "to_dict") else self.payload
        return {
            "type": self.type.value,
            "entity_id": self.entity_id,
            "payload": payload,
            "updated_at": self.updated_at,
            "source": self.source,
        }


# Type for event handlers
EventHandlerType = Callable[[DomainEvent], None]


class EventEmitter:
    """
    Event emitter for publishing and subscribing to domain events.

    One emitter is created by the application root and handed to every
    store that publishes or subscribes.
    """

    def __init__(self):
        """Initialize the event emitter."""
        self._handlers: Dict[EventType, List[EventHandlerType]] = {}
        self._wildcard_handlers: List[EventHandlerType] = []

    def on(self, event_type: Union[EventType, str], handler: EventHandlerType) -> None:
        """
        Register a handler for a specific event type.

        Args:
            event_type: The type of event to handle
            handler: The callback function to invoke when the event occurs
        """
        if isinstance(event_type, str):
            event_type = EventType.from_string(event_type)

        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(f"Registered handler for event type: {event_type.value}")

    def on_any(self, handler: EventHandlerType) -> None:
        """
        Register a handler for all event types.

        Args:
            handler: The callback function to invoke when any event occurs
        """
        self._wildcard_handlers.append(handler)
        logger.debug("Registered wildcard event handler")

    def off(self, event_type: Union[EventType, str], handler: Optional[EventHandlerType] = None) -> None:
        """
        Remove a handler for a specific event type.

        Args:
            event_type: The type of event
            handler: The handler to remove. If None, removes all handlers for the event type.
        """
        if isinstance(event_type, str):
            event_type = EventType.from_string(event_type)

        if event_type in self._handlers:
            if handler is None:
                self._handlers[event_type] = []
                logger.debug(f"Removed all handlers for event type: {event_type.value}")
            else:
                try:
                    self._handlers[event_type].remove(handler)
                    logger.debug(f"Removed handler for event type: {event_type.value}")
                except ValueError:
                    logger.warning(f"Handler not found for event type: {event_type.value}")

    def handler_count(self, event_type: EventType) -> int:
        return len(self._handlers.get(event_type, []))

    def emit(self, event: DomainEvent) -> None:
        """
        Emit an event to all registered handlers, in registration order.

        Args:
            event: The event to emit
        """
        for handler in list(self._handlers.get(event.type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type.value}: {str(e)}")

        for handler in list(self._wildcard_handlers):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in wildcard event handler for {event.type.value}: {str(e)}")

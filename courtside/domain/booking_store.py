"""
Public catalog store: the venues and events a player can browse, and the
player's own bookings.
"""
from typing import Any, Iterable, List, Optional

from courtside.config.logging_config import get_logger
from courtside.data.models import Booking, Event, Venue
from courtside.domain.base_store import DomainStore
from courtside.domain.filters import (
    EventFilters,
    VenueFilters,
    event_matches,
    event_matches_text,
    venue_matches,
    venue_matches_text,
)

logger = get_logger(__name__)


class BookingStore(DomainStore):
    """Venues, events and bookings of the public app.

    Events created by organizers arrive here through ``EventCatalogSync``;
    the store never originates those changes itself. Deleting a venue or an
    event leaves dependent events and bookings in place.
    """

    name = "booking"

    def __init__(self):
        super().__init__()
        self._venues = self._repository("venues", id_prefix="venue")
        self._events = self._repository("events", id_prefix="event")
        self._bookings = self._repository("bookings", id_prefix="booking")
        self.selected_venue: Optional[Venue] = None
        self.selected_event: Optional[Event] = None

    @property
    def venues(self) -> List[Venue]:
        return self._venues.list()

    @property
    def events(self) -> List[Event]:
        return self._events.list()

    @property
    def bookings(self) -> List[Booking]:
        return self._bookings.list()

    # Venue actions
    def set_venues(self, venues: Iterable[Venue]) -> None:
        self._venues.set_all(venues)

    def add_venue(self, venue: Venue) -> Venue:
        return self._venues.add(venue)

    def update_venue(self, venue_id: str, **changes: Any) -> Optional[Venue]:
        return self._venues.update(venue_id, changes)

    def delete_venue(self, venue_id: str) -> bool:
        if self.selected_venue is not None and self.selected_venue.id == venue_id:
            self.selected_venue = None
        return self._venues.delete(venue_id)

    # Event actions
    def set_events(self, events: Iterable[Event]) -> None:
        self._events.set_all(events)

    def add_event(self, event: Event) -> Event:
        return self._events.add(event)

    def update_event(self, event_id: str, changes: dict, updated_at: Optional[str] = None) -> Optional[Event]:
        """
        Merge changes into an event.

        Args:
            event_id: Event to change; unknown ids are ignored
            changes: Field values to merge
            updated_at: Timestamp to stamp, so a mirrored copy can match its source

        Returns:
            Optional[Event]: The updated event, None if not found
        """
        return self._events.update(event_id, changes, updated_at=updated_at)

    def delete_event(self, event_id: str) -> bool:
        if self.selected_event is not None and self.selected_event.id == event_id:
            self.selected_event = None
        return self._events.delete(event_id)

    # Booking actions
    def set_bookings(self, bookings: Iterable[Booking]) -> None:
        self._bookings.set_all(bookings)

    def add_booking(self, booking: Booking) -> Booking:
        return self._bookings.add(booking)

    def update_booking(self, booking_id: str, **changes: Any) -> Optional[Booking]:
        return self._bookings.update(booking_id, changes)

    def delete_booking(self, booking_id: str) -> bool:
        return self._bookings.delete(booking_id)

    # Selection
    def select_venue(self, venue: Optional[Venue]) -> None:
        self.selected_venue = venue
        self._notify()

    def select_event(self, event: Optional[Event]) -> None:
        self.selected_event = event
        self._notify()

    # Getters
    def get_venue_by_id(self, venue_id: str) -> Optional[Venue]:
        return self._venues.get_by_id(venue_id)

    def get_event_by_id(self, event_id: str) -> Optional[Event]:
        return self._events.get_by_id(event_id)

    def get_events_by_venue(self, venue_id: str) -> List[Event]:
        return self._events.query(venue_id=venue_id)

    def get_venues_by_sport(self, sport_id: str) -> List[Venue]:
        return self._venues.query(lambda venue: any(sport.id == sport_id for sport in venue.sports))

    def get_bookings_by_user(self, user_id: str) -> List[Booking]:
        return self._bookings.query(user_id=user_id)

    def search_venues(self, query: str = "", filters: Optional[VenueFilters] = None) -> List[Venue]:
        return self._venues.query(lambda v: venue_matches_text(v, query) and venue_matches(v, filters))

    def search_events(self, query: str = "", filters: Optional[EventFilters] = None) -> List[Event]:
        return self._events.query(
            lambda e: event_matches_text(e, query) and event_matches(e, filters, self._venue_city)
        )

    def _venue_city(self, venue_id: str) -> Optional[str]:
        venue = self._venues.get_by_id(venue_id)
        return None if venue is None else venue.address.city

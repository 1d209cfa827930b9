"""
Partner-side venue store.

Holds the venues an owner manages plus the draft used by the five-step
venue creation wizard.
"""
from typing import Any, Dict, Iterable, List, Optional

from courtside.config.logging_config import get_logger
from courtside.data.draft import DraftStaging
from courtside.data.models import OperatingHours, TimeSlot, Venue, WeeklyOperatingHours
from courtside.domain.base_store import DomainStore
from courtside.domain.filters import VenueFilters, venue_matches, venue_matches_text
from courtside.utils.identifiers import generate_id

logger = get_logger(__name__)


def default_venue_draft() -> Dict[str, Any]:
    """Empty input for a new venue (everything except system fields)."""
    return {
        "name": "",
        "description": "",
        "address": {"street": "", "city": "", "state": "", "pincode": ""},
        "contact_info": {"phone": "", "email": "", "whatsapp": ""},
        "sports": [],
        "amenities": [],
        "images": [],
        "operating_hours": WeeklyOperatingHours().to_dict(),
        "time_slots": [],
        "policies": {"cancellation_policy": "", "advance_booking_days": 30, "minimum_booking_hours": 1},
        "is_active": True,
    }


class VenueStore(DomainStore):
    """Venues owned by a partner, with a creation draft."""

    name = "venues"

    def __init__(self):
        super().__init__()
        self._venues = self._repository("venues")
        self.draft = DraftStaging("venue", default_venue_draft)
        self.selected_venue_id: Optional[str] = None

    # ---------- draft ----------

    @property
    def draft_venue(self) -> Dict[str, Any]:
        return self.draft.value

    def update_draft_venue(self, **updates: Any) -> None:
        self.draft.update(**updates)
        self._notify()

    def update_draft_contact(self, **updates: Any) -> None:
        self.draft.update_section("contact_info", **updates)
        self._notify()

    def update_draft_address(self, **updates: Any) -> None:
        self.draft.update_section("address", **updates)
        self._notify()

    def update_draft_policies(self, **updates: Any) -> None:
        self.draft.update_section("policies", **updates)
        self._notify()

    def update_draft_hours(self, day: str, open: str, close: str, is_open: bool = True) -> None:
        self.draft.update_field(f"operating_hours.{day}", OperatingHours(open, close, is_open).to_dict())
        self._notify()

    def update_draft_field(self, path: str, value: Any) -> None:
        self.draft.update_field(path, value)
        self._notify()

    def reset_draft_venue(self) -> None:
        self.draft.reset()
        self._notify()

    def submit_draft_venue(self) -> Venue:
        """Commit the draft as a new venue and reset the draft.

        Returns:
            Venue: The created venue, with rating and review count at zero
        """
        draft = self.draft.take()
        venue = Venue.from_dict({**draft, "rating": 0.0, "review_count": 0})
        stored = self._venues.add(venue)
        logger.info(f"Venue {stored.name!r} created with id {stored.id}")
        return stored

    # ---------- venues ----------

    def set_venues(self, venues: Iterable[Venue]) -> None:
        self._venues.set_all(venues)

    def add_venue(self, venue: Venue) -> Venue:
        return self._venues.add(venue)

    def update_venue(self, venue_id: str, **changes: Any) -> Optional[Venue]:
        return self._venues.update(venue_id, changes)

    def delete_venue(self, venue_id: str) -> bool:
        """Remove a venue. Bookings and blocks referencing it are left alone."""
        if self.selected_venue_id == venue_id:
            self.selected_venue_id = None
        return self._venues.delete(venue_id)

    def select_venue(self, venue_id: Optional[str]) -> None:
        self.selected_venue_id = venue_id
        self._notify()

    # ---------- slots ----------

    def add_time_slot(self, venue_id: str, **slot: Any) -> Optional[TimeSlot]:
        """
        Append a time slot to a venue.

        Args:
            venue_id: Venue to extend; unknown venues are ignored
            **slot: TimeSlot fields other than id

        Returns:
            Optional[TimeSlot]: The new slot, None if the venue does not exist
        """
        venue = self._venues.get_by_id(venue_id)
        if venue is None:
            return None
        new_slot = TimeSlot(**{**slot, "id": generate_id("slot")})
        self._venues.update(venue_id, {"time_slots": [*venue.time_slots, new_slot]})
        return new_slot

    def remove_time_slot(self, venue_id: str, slot_id: str) -> None:
        venue = self._venues.get_by_id(venue_id)
        if venue is None:
            return
        remaining = [slot for slot in venue.time_slots if slot.id != slot_id]
        if len(remaining) != len(venue.time_slots):
            self._venues.update(venue_id, {"time_slots": remaining})

    # ---------- getters ----------

    def get_venue_by_id(self, venue_id: str) -> Optional[Venue]:
        return self._venues.get_by_id(venue_id)

    def list_venues(self) -> List[Venue]:
        return self._venues.list()

    def get_active_venues(self) -> List[Venue]:
        return self._venues.query(is_active=True)

    def search_venues(self, query: str = "", filters: Optional[VenueFilters] = None) -> List[Venue]:
        return self._venues.query(lambda v: venue_matches_text(v, query) and venue_matches(v, filters))

"""Search filters shared by the venue and event catalogs."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List, Optional

from courtside.data.models import Event, Venue


@dataclass
class Range:
    min: float
    max: float

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


@dataclass
class DateRange:
    start: str
    end: str


@dataclass
class VenueFilters:
    sports: List[str] = field(default_factory=list)  # sport ids, any match
    amenities: List[str] = field(default_factory=list)  # amenity ids, all required
    city: Optional[str] = None
    rating: Optional[float] = None  # minimum
    price_range: Optional[Range] = None
    is_active: Optional[bool] = None


@dataclass
class EventFilters:
    sports: List[str] = field(default_factory=list)
    event_type: List[str] = field(default_factory=list)
    participation_type: Optional[str] = None
    date_range: Optional[DateRange] = None
    fee_range: Optional[Range] = None
    city: Optional[str] = None


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 string; empty or malformed input gives None."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    # Naive values are treated as UTC
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def venue_matches_text(venue: Venue, query: str) -> bool:
    term = query.strip().lower()
    if not term:
        return True
    return (
        term in venue.name.lower()
        or term in venue.address.city.lower()
        or any(term in sport.name.lower() for sport in venue.sports)
    )


def venue_matches(venue: Venue, filters: Optional[VenueFilters]) -> bool:
    if filters is None:
        return True
    if filters.sports and not any(sport.id in filters.sports for sport in venue.sports):
        return False
    if filters.amenities:
        venue_amenities = {amenity.id for amenity in venue.amenities}
        if not all(amenity_id in venue_amenities for amenity_id in filters.amenities):
            return False
    if filters.city and venue.address.city.lower() != filters.city.lower():
        return False
    if filters.rating is not None and venue.rating < filters.rating:
        return False
    if filters.price_range and not any(filters.price_range.contains(slot.price) for slot in venue.time_slots):
        return False
    if filters.is_active is not None and venue.is_active != filters.is_active:
        return False
    return True


def event_matches_text(event: Event, query: str) -> bool:
    term = query.strip().lower()
    if not term:
        return True
    return (
        term in event.name.lower()
        or term in event.sport.name.lower()
        or term in (event.description or "").lower()
    )


def event_matches(
    event: Event,
    filters: Optional[EventFilters],
    venue_city: Callable[[str], Optional[str]] = lambda venue_id: None,
) -> bool:
    """
    Check an event against filters.

    Args:
        event: Event to check
        filters: Filters to apply, None matches everything
        venue_city: Looks up the city of a venue id (city filter only)
    """
    if filters is None:
        return True
    if filters.sports and event.sport.id not in filters.sports:
        return False
    if filters.event_type and event.event_type not in filters.event_type:
        return False
    if filters.participation_type and event.participation_type != filters.participation_type:
        return False
    if filters.date_range and not _in_date_range(event.date_time, filters.date_range):
        return False
    if filters.fee_range and not filters.fee_range.contains(event.fees.amount):
        return False
    if filters.city:
        city = venue_city(event.venue_id)
        if city is None or city.lower() != filters.city.lower():
            return False
    return True


def _in_date_range(value: str, date_range: DateRange) -> bool:
    # Undated events never match a date filter; an unreadable bound is open
    when = parse_datetime(value)
    if when is None:
        return False
    start = parse_datetime(date_range.start)
    end = parse_datetime(date_range.end)
    if start is not None and when < start:
        return False
    if end is not None and when > end:
        return False
    return True

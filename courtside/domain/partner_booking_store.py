"""
Partner-side bookings and manual slot blocks for the owner's venues.
"""
from typing import Iterable, List, Optional

from courtside.data.models import BookingStatus, ManualBlock, PartnerBooking
from courtside.domain.base_store import DomainStore


class PartnerBookingStore(DomainStore):
    """Bookings as seen by a venue owner, plus owner-made slot blocks."""

    name = "partner_bookings"

    def __init__(self, bookings: Iterable[PartnerBooking] = ()):
        super().__init__()
        self._bookings = self._repository("bookings", id_prefix="b")
        self._blocks = self._repository("manual_blocks", id_prefix="block", entity_cls=ManualBlock)
        self._bookings.set_all(bookings)

    # --- slot management ---

    def add_manual_block(self, venue_id: str, date: str, slot_id: str, reason: str = "") -> ManualBlock:
        return self._blocks.create(venue_id=venue_id, date=date, slot_id=slot_id, reason=reason)

    def remove_manual_block(self, block_id: str) -> bool:
        return self._blocks.delete(block_id)

    # --- bookings ---

    def add_booking(self, booking: PartnerBooking) -> PartnerBooking:
        return self._bookings.add(booking)

    def cancel_booking(self, booking_id: str) -> Optional[PartnerBooking]:
        return self._bookings.update(booking_id, {"status": BookingStatus.CANCELLED})

    # --- getters ---

    @property
    def bookings(self) -> List[PartnerBooking]:
        return self._bookings.list()

    @property
    def manual_blocks(self) -> List[ManualBlock]:
        return self._blocks.list()

    def get_booking_by_id(self, booking_id: str) -> Optional[PartnerBooking]:
        return self._bookings.get_by_id(booking_id)

    def get_bookings_for_date(self, venue_id: str, date: str) -> List[PartnerBooking]:
        """Live (not cancelled) bookings of a venue on one date."""
        return self._bookings.query(
            lambda b: b.status != BookingStatus.CANCELLED, venue_id=venue_id, date=date
        )

    def get_bookings_for_venue(self, venue_id: str) -> List[PartnerBooking]:
        return self._bookings.query(venue_id=venue_id)

    def get_blocks_for_date(self, venue_id: str, date: str) -> List[ManualBlock]:
        return self._blocks.query(venue_id=venue_id, date=date)

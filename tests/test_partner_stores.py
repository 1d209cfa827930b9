# tests/test_partner_stores.py
import pytest

from courtside.data.models import (
    Academy,
    BookingStatus,
    Certificate,
    Coach,
    PartnerBooking,
    Sport,
    Student,
    TimeSlot,
    Venue,
    VenueAddress,
)
from courtside.domain.academy_store import AcademyStore
from courtside.domain.announcement_store import AnnouncementStore
from courtside.domain.filters import Range, VenueFilters
from courtside.domain.partner_booking_store import PartnerBookingStore
from courtside.domain.venue_store import VenueStore


@pytest.fixture
def venue_store():
    return VenueStore()


@pytest.fixture
def academy_store():
    return AcademyStore()


# --- Venues ---

def test_submit_draft_venue(venue_store):
    """Test the multi-step venue wizard ending in a committed venue"""
    venue_store.update_draft_venue(name="Green Field", description="Turf")
    venue_store.update_draft_address(city="Delhi", pincode="110001")
    venue_store.update_draft_contact(phone="98100")
    venue_store.update_draft_policies(advance_booking_days=14)
    venue_store.update_draft_hours("sunday", "08:00", "12:00", is_open=False)

    assert venue_store.list_venues() == []

    venue = venue_store.submit_draft_venue()

    assert venue.id
    assert venue.rating == 0.0
    assert venue.review_count == 0
    assert venue.address.city == "Delhi"
    assert venue.address.pincode == "110001"
    assert venue.policies.advance_booking_days == 14
    assert venue.operating_hours.sunday.is_open is False
    assert venue_store.list_venues() == [venue]
    assert venue_store.draft_venue == venue_store.draft.default()


def test_reset_draft_venue(venue_store):
    """Test discarding in-progress input"""
    venue_store.update_draft_field("address.city", "Pune")
    venue_store.reset_draft_venue()
    assert venue_store.draft_venue["address"]["city"] == ""


def test_draft_changes_notify_subscribers(venue_store):
    """Test that draft edits reach store subscribers"""
    calls = []
    venue_store.subscribe(calls.append)
    venue_store.update_draft_venue(name="X")
    assert calls == [venue_store]


def test_time_slots(venue_store):
    """Test adding and removing venue slots"""
    venue_store.add_venue(Venue(id="v1", name="Arena"))

    slot = venue_store.add_time_slot("v1", start_time="10:00", end_time="11:00", price=500.0)
    assert slot.id.startswith("slot_")
    assert venue_store.get_venue_by_id("v1").time_slots == [slot]

    venue_store.remove_time_slot("v1", slot.id)
    assert venue_store.get_venue_by_id("v1").time_slots == []

    assert venue_store.add_time_slot("missing", start_time="10:00") is None


def test_update_and_delete_venue(venue_store):
    """Test venue updates and deletion of the selected venue"""
    venue_store.set_venues([Venue(id="v1", name="A"), Venue(id="v2", name="B", is_active=False)])
    venue_store.select_venue("v1")

    venue_store.update_venue("v1", name="A+")
    assert venue_store.get_venue_by_id("v1").name == "A+"
    assert [v.id for v in venue_store.get_active_venues()] == ["v1"]

    assert venue_store.delete_venue("v1") is True
    assert venue_store.selected_venue_id is None
    assert venue_store.update_venue("v1", name="gone") is None


def test_search_venues(venue_store):
    """Test text and filter search"""
    venue_store.set_venues([
        Venue(id="v1", name="Green Field", address=VenueAddress(city="Delhi"),
              sports=[Sport(id="s1", name="Football")],
              time_slots=[TimeSlot(id="t", price=500.0)]),
        Venue(id="v2", name="Shuttle Hub", address=VenueAddress(city="Mumbai"),
              sports=[Sport(id="s3", name="Badminton")],
              time_slots=[TimeSlot(id="t", price=300.0)]),
    ])

    assert [v.id for v in venue_store.search_venues("foot")] == ["v1"]
    assert [v.id for v in venue_store.search_venues("mumbai")] == ["v2"]
    assert [v.id for v in venue_store.search_venues(filters=VenueFilters(price_range=Range(0, 400)))] == ["v2"]
    assert len(venue_store.search_venues()) == 2


# --- Academies ---

def test_add_academy_scenario(academy_store):
    """Test adding an academy without an id"""
    stored = academy_store.add_academy(Academy(academy_name="Rising Stars", city="Delhi"))

    assert len(academy_store.get_academies()) == 1
    assert stored.id
    assert academy_store.get_academy_by_id(stored.id).academy_name == "Rising Stars"


def test_mark_attendance_twice_keeps_one_record(academy_store):
    """Test that the second attendance mark for a day wins"""
    academy_store.mark_attendance("s1", "2024-05-01", True)
    academy_store.mark_attendance("s1", "2024-05-01", False)

    records = [a for a in academy_store.attendance if (a.student_id, a.date) == ("s1", "2024-05-01")]
    assert len(records) == 1
    assert records[0].present is False
    assert academy_store.get_attendance_status("s1", "2024-05-01") is False
    assert academy_store.get_attendance_status("s1", "2024-05-02") is None


def test_update_nonexistent_academy_is_noop(academy_store):
    """Test that updating an unknown academy leaves the collection alone"""
    academy_store.add_academy(Academy(academy_name="Rising Stars"))
    before = academy_store.get_academies()

    assert academy_store.update_academy(Academy(id="nonexistent", academy_name="Ghost")) is None
    assert academy_store.get_academies() == before


def test_update_academy_replaces_fields(academy_store):
    """Test full replacement keeps created_at when the input has none"""
    stored = academy_store.add_academy(Academy(academy_name="Old", city="Delhi"))

    updated = academy_store.update_academy(Academy(id=stored.id, academy_name="New"))

    assert updated.academy_name == "New"
    assert updated.city == ""
    assert updated.created_at == stored.created_at


def test_students_and_certificates(academy_store):
    """Test academy-scoped students and certificates"""
    academy_store.add_student(Student(id="s1", name="Aarav", academy_id="a1"))
    academy_store.add_student(Student(id="s2", name="Isha", academy_id="a2"))
    academy_store.add_certificate(Certificate(student_id="s1", achievement="Best Player"))
    academy_store.add_certificate(Certificate(student_id="s2", achievement="Most Improved"))

    assert [s.id for s in academy_store.get_students_by_academy("a1")] == ["s1"]
    certificates = academy_store.get_certificates_by_academy("a1")
    assert [c.achievement for c in certificates] == ["Best Player"]


def test_delete_academy_keeps_students(academy_store):
    """Test that deleting an academy does not cascade"""
    academy = academy_store.add_academy(Academy(academy_name="A"))
    academy_store.add_student(Student(id="s1", academy_id=academy.id))

    assert academy_store.delete_academy(academy.id) is True
    assert len(academy_store.get_students_by_academy(academy.id)) == 1


def test_coaches_and_photos(academy_store):
    """Test nested coach and photo edits"""
    academy = academy_store.add_academy(Academy(academy_name="A"))

    updated = academy_store.add_coach(academy.id, Coach(name="Vikram"))
    coach_id = updated.coaches[0].id
    assert coach_id.startswith("coach_")

    academy_store.add_photo(academy.id, "one.jpg")
    academy_store.add_photo(academy.id, "two.jpg")
    assert academy_store.get_academy_by_id(academy.id).photos == ["two.jpg", "one.jpg"]

    academy_store.remove_photo(academy.id, "one.jpg")
    academy_store.remove_coach(academy.id, coach_id)
    final = academy_store.get_academy_by_id(academy.id)
    assert final.photos == ["two.jpg"]
    assert final.coaches == []

    assert academy_store.add_photo("missing", "x.jpg") is None


def test_clear_academies(academy_store):
    academy_store.add_academy(Academy(academy_name="A"))
    academy_store.clear_academies()
    assert academy_store.get_academies() == []


# --- Announcements ---

def test_first_real_post_replaces_dummy_posts():
    """Test dummy feed replacement and newest-first order"""
    store = AnnouncementStore(seed_dummy_data=True)
    assert len(store.posts) == 3
    assert store.is_dummy_data is True

    first = store.add_post("Nets closed on Friday")
    second = store.add_post("New batch from Monday")

    assert store.is_dummy_data is False
    assert [p.id for p in store.posts] == [second.id, first.id]
    assert store.delete_post(first.id) is True
    assert store.get_post_by_id(first.id) is None


def test_announcements_without_dummy_data():
    store = AnnouncementStore(seed_dummy_data=False)
    assert store.posts == []
    store.add_post("Hello")
    assert len(store.posts) == 1


# --- Partner bookings ---

def test_partner_bookings_and_blocks():
    """Test cancellation and per-date lookups"""
    store = PartnerBookingStore([
        PartnerBooking(id="b1", venue_id="v1", date="2024-05-01", status=BookingStatus.CONFIRMED),
        PartnerBooking(id="b2", venue_id="v1", date="2024-05-01"),
        PartnerBooking(id="b3", venue_id="v2", date="2024-05-01"),
    ])

    cancelled = store.cancel_booking("b2")
    assert cancelled.status is BookingStatus.CANCELLED
    assert [b.id for b in store.get_bookings_for_date("v1", "2024-05-01")] == ["b1"]
    assert len(store.get_bookings_for_venue("v1")) == 2
    assert store.cancel_booking("missing") is None

    block = store.add_manual_block("v1", "2024-05-01", "ts1", reason="Maintenance")
    assert block.id.startswith("block_")
    assert store.get_blocks_for_date("v1", "2024-05-01") == [block]
    assert store.remove_manual_block(block.id) is True
    assert store.manual_blocks == []


def test_add_partner_booking():
    store = PartnerBookingStore()
    stored = store.add_booking(PartnerBooking(venue_id="v1", date="2024-06-01"))
    assert store.get_booking_by_id(stored.id) == stored

# tests/test_draft_and_models.py
from courtside.data.draft import DraftStaging
from courtside.data.models import (
    BookingStatus,
    Event,
    FootballTournamentRequest,
    PartnerBooking,
    RegistrationDomain,
    Venue,
)
from courtside.domain.venue_store import default_venue_draft
from courtside.utils.identifiers import generate_id, utc_timestamp


def test_draft_update_section_keeps_siblings():
    """Test that a partial section update leaves other keys alone"""
    draft = DraftStaging("venue", default_venue_draft)

    draft.update_section("address", city="Delhi")
    draft.update_section("address", street="MG Road")

    address = draft.value["address"]
    assert address["city"] == "Delhi"
    assert address["street"] == "MG Road"
    assert address["pincode"] == ""


def test_draft_update_field_creates_path():
    """Test dotted-path updates"""
    draft = DraftStaging("test", dict)
    draft.update_field("policies.cancellation_policy", "24h notice")
    assert draft.value == {"policies": {"cancellation_policy": "24h notice"}}


def test_draft_value_is_a_copy():
    """Test that editing the returned value does not change the draft"""
    draft = DraftStaging("venue", default_venue_draft)
    value = draft.value
    value["address"]["city"] = "Changed"
    assert draft.value["address"]["city"] == ""


def test_draft_reset_installs_fresh_default():
    """Test that nested input cannot leak into the next draft"""
    draft = DraftStaging("venue", default_venue_draft)
    draft.update(sports=[{"id": "s1"}])
    draft.update_section("address", city="Delhi")

    taken = draft.take()

    assert taken["address"]["city"] == "Delhi"
    assert draft.value == draft.default()
    taken["sports"].append({"id": "s2"})
    assert draft.value["sports"] == []


def test_model_round_trip_through_dict():
    """Test nested dataclasses and enums from plain dicts"""
    data = {
        "id": "b1",
        "venue_id": "v1",
        "status": "confirmed",
        "time_slots": [{"id": "ts1", "start_time": "10:00", "end_time": "11:00", "price": 500}],
        "guest_details": {"name": "Rahul", "phone": "123"},
        "unknown": "ignored",
    }
    booking = PartnerBooking.from_dict(data)

    assert booking.status is BookingStatus.CONFIRMED
    assert booking.time_slots[0].start_time == "10:00"
    assert booking.guest_details.name == "Rahul"
    assert booking.to_dict()["status"] == "confirmed"


def test_venue_defaults_from_empty_dict():
    """Test that a sparse dict yields a complete venue"""
    venue = Venue.from_dict({"name": "Arena", "address": {"city": "Delhi"}})
    assert venue.address.city == "Delhi"
    assert venue.operating_hours.monday.open == "09:00"
    assert venue.is_active is True


def test_event_to_dict_serializes_status():
    """Test enum values in event dicts"""
    assert Event(id="e1").to_dict()["status"] == "upcoming"


def test_football_request_domain_default():
    """Test that football requests carry their own domain"""
    assert FootballTournamentRequest().domain is RegistrationDomain.FOOTBALL_TOURNAMENT


def test_generate_id_shape():
    """Test identifier length and prefix"""
    assert len(generate_id()) == 32
    assert generate_id("demo").startswith("demo_")
    assert generate_id() != generate_id()


def test_utc_timestamp_format():
    """Test ISO-8601 UTC with milliseconds"""
    stamp = utc_timestamp()
    assert stamp.endswith("Z")
    assert len(stamp.split(".")[1]) == 4  # three digits plus Z

# tests/test_event_sync.py
from unittest.mock import MagicMock

from courtside.data.models import Booking, Event, EventFees, EventStatus, Sport, Venue, VenueAddress
from courtside.domain.filters import DateRange, EventFilters, Range
from courtside.events.event_interface import DomainEvent, EventType


def _event(**overrides):
    fields = dict(
        venue_id="v1",
        name="Sunday League",
        sport=Sport(id="s1", name="Football"),
        date_time="2030-06-01T18:00:00.000Z",
        fees=EventFees(amount=500.0),
        creator_id="m1",
    )
    fields.update(overrides)
    return Event(**fields)


def test_create_event_mirrors_to_catalog(event_manager_store, booking_store, event_sync):
    """Test that a created event appears identically in the public catalog"""
    created = event_manager_store.create_event(_event())

    mirrored = booking_store.get_event_by_id(created.id)
    assert mirrored == event_manager_store.get_event_by_id(created.id)
    assert mirrored.name == "Sunday League"
    assert mirrored.date_time == "2030-06-01T18:00:00.000Z"
    assert mirrored.fees == EventFees(amount=500.0)


def test_update_event_uses_same_timestamp(event_manager_store, booking_store, event_sync):
    """Test that both copies carry the same updated_at after an update"""
    created = event_manager_store.create_event(_event())

    updated = event_manager_store.update_event(created.id, name="Sunday Cup", max_participants=16)

    mirrored = booking_store.get_event_by_id(created.id)
    assert mirrored == updated
    assert mirrored.updated_at == updated.updated_at
    assert mirrored.name == "Sunday Cup"


def test_complete_and_delete_event(event_manager_store, booking_store, event_sync):
    """Test completion and deletion propagate"""
    created = event_manager_store.create_event(_event())

    event_manager_store.complete_event(created.id)
    assert booking_store.get_event_by_id(created.id).status is EventStatus.COMPLETED
    assert event_manager_store.get_completed_events("m1")[0].id == created.id

    assert event_manager_store.delete_event(created.id) is True
    assert booking_store.get_event_by_id(created.id) is None
    assert event_manager_store.get_event_by_id(created.id) is None


def test_missing_event_update_publishes_nothing(event_manager_store, emitter):
    """Test that updating an unknown event emits no domain event"""
    handler = MagicMock()
    emitter.on(EventType.MANAGED_EVENT_UPDATED, handler)

    assert event_manager_store.update_event("missing", name="x") is None
    assert event_manager_store.complete_event("missing") is None
    handler.assert_not_called()


def test_delete_is_forwarded_when_manager_lacks_event(event_manager_store, booking_store, event_sync):
    """Test that a delete reaches the catalog even for events the organizer store no longer holds"""
    booking_store.add_event(_event(id="stale"))

    assert event_manager_store.delete_event("stale") is False
    assert booking_store.get_event_by_id("stale") is None


def test_create_with_existing_id_is_ignored(event_manager_store, booking_store, event_sync, emitter):
    """Test that a repeated id neither duplicates the event nor publishes again"""
    handler = MagicMock()
    emitter.on(EventType.MANAGED_EVENT_CREATED, handler)

    first = event_manager_store.create_event(_event(id="e1"))
    again = event_manager_store.create_event(_event(id="e1", name="Other"))

    assert again == first
    assert [e.id for e in event_manager_store.managed_events] == ["e1"]
    assert [e.id for e in booking_store.events] == ["e1"]
    assert booking_store.get_event_by_id("e1").name == "Sunday League"
    assert handler.call_count == 1


def test_catalog_copy_is_independent(event_manager_store, booking_store, event_sync):
    """Test that changing nested values on the organizer copy leaves the catalog copy alone"""
    created = event_manager_store.create_event(_event(requirements=["Studs"]))

    created.requirements.append("Shin guards")

    assert booking_store.get_event_by_id(created.id).requirements == ["Studs"]


def test_manager_mutation_stands_when_subscriber_fails(event_manager_store, emitter):
    """Test that a failing subscriber does not roll back the organizer store"""
    emitter.on(EventType.MANAGED_EVENT_CREATED, MagicMock(side_effect=RuntimeError("down")))

    created = event_manager_store.create_event(_event())

    assert event_manager_store.get_event_by_id(created.id) is not None


def test_emitted_event_shape(event_manager_store, emitter):
    """Test the published domain event for a creation"""
    received = []
    emitter.on(EventType.MANAGED_EVENT_CREATED, received.append)

    created = event_manager_store.create_event(_event())

    assert len(received) == 1
    event = received[0]
    assert isinstance(event, DomainEvent)
    assert event.entity_id == created.id
    assert event.updated_at == created.updated_at
    assert event.to_dict()["type"] == "managed_event.created"
    assert event.to_dict()["payload"]["name"] == "Sunday League"


def test_detach_stops_mirroring(event_manager_store, booking_store, event_sync, emitter):
    """Test that a detached sync no longer applies events"""
    event_sync.detach()
    assert emitter.handler_count(EventType.MANAGED_EVENT_CREATED) == 0

    created = event_manager_store.create_event(_event())
    assert booking_store.get_event_by_id(created.id) is None


def test_manager_queries(event_manager_store):
    """Test organizer-scoped getters"""
    a = event_manager_store.create_event(_event(creator_id="m1"))
    event_manager_store.create_event(_event(creator_id="m2"))
    event_manager_store.complete_event(a.id)
    event_manager_store.create_event(_event(creator_id="m1", name="Next"))

    assert len(event_manager_store.get_events_by_manager("m1")) == 2
    assert [e.name for e in event_manager_store.get_upcoming_events("m1")] == ["Next"]
    assert [e.id for e in event_manager_store.get_completed_events("m1")] == [a.id]


def test_event_type_from_string():
    assert EventType.from_string("managed_event.updated") is EventType.MANAGED_EVENT_UPDATED
    assert EventType.from_string("nope") is EventType.UNKNOWN


# --- Public catalog ---

def test_delete_venue_does_not_cascade(booking_store):
    """Test that bookings and events survive the deletion of their venue"""
    booking_store.set_venues([Venue(id="v1", name="Arena")])
    booking_store.add_booking(Booking(id="bk1", venue_id="v1", user_id="u1"))
    booking_store.add_event(Event(id="e1", venue_id="v1"))

    assert booking_store.delete_venue("v1") is True

    assert booking_store.venues == []
    assert [b.id for b in booking_store.get_bookings_by_user("u1")] == ["bk1"]
    assert booking_store.get_bookings_by_user("u1")[0].venue_id == "v1"
    assert [e.id for e in booking_store.get_events_by_venue("v1")] == ["e1"]


def test_catalog_getters(booking_store):
    """Test sport and venue lookups"""
    booking_store.set_venues([
        Venue(id="v1", sports=[Sport(id="s1", name="Football")]),
        Venue(id="v2", sports=[Sport(id="s2", name="Cricket")]),
    ])
    assert [v.id for v in booking_store.get_venues_by_sport("s2")] == ["v2"]
    assert booking_store.get_venue_by_id("v3") is None
    assert booking_store.update_venue("v3", name="x") is None
    assert booking_store.update_booking("missing", participants=3) is None


def test_search_events_with_filters(booking_store):
    """Test text search and every event filter"""
    booking_store.set_venues([
        Venue(id="v1", address=VenueAddress(city="Delhi")),
        Venue(id="v2", address=VenueAddress(city="Mumbai")),
    ])
    booking_store.set_events([
        _event(id="e1", venue_id="v1", event_type="league", fees=EventFees(amount=500.0)),
        _event(id="e2", venue_id="v2", name="Badminton Clinic", event_type="training",
               sport=Sport(id="s3", name="Badminton"), date_time="2030-07-01T07:00:00.000Z",
               fees=EventFees(amount=200.0)),
    ])

    assert [e.id for e in booking_store.search_events("clinic")] == ["e2"]
    assert [e.id for e in booking_store.search_events(filters=EventFilters(city="delhi"))] == ["e1"]
    assert [e.id for e in booking_store.search_events(filters=EventFilters(sports=["s3"]))] == ["e2"]
    assert [e.id for e in booking_store.search_events(filters=EventFilters(fee_range=Range(0, 300)))] == ["e2"]
    june = DateRange(start="2030-06-01T00:00:00Z", end="2030-06-30T23:59:59Z")
    assert [e.id for e in booking_store.search_events(filters=EventFilters(date_range=june))] == ["e1"]
    assert [e.id for e in booking_store.search_events(filters=EventFilters(event_type=["training"]))] == ["e2"]


def test_date_filter_skips_undated_events(booking_store):
    """Test that events without a readable date drop out of date-range searches"""
    booking_store.set_events([
        Event(id="undated"),
        _event(id="garbled", date_time="next tuesday"),
        _event(id="e1"),
    ])
    june = DateRange(start="2030-06-01T00:00:00Z", end="2030-06-30T23:59:59Z")

    assert [e.id for e in booking_store.search_events(filters=EventFilters(date_range=june))] == ["e1"]

    open_ended = DateRange(start="2030-05-01T00:00:00Z", end="")
    assert [e.id for e in booking_store.search_events(filters=EventFilters(date_range=open_ended))] == ["e1"]


def test_selection_cleared_on_delete(booking_store):
    venue = booking_store.add_venue(Venue(id="v1"))
    event = booking_store.add_event(Event(id="e1"))
    booking_store.select_venue(venue)
    booking_store.select_event(event)

    booking_store.delete_venue("v1")
    booking_store.delete_event("e1")

    assert booking_store.selected_venue is None
    assert booking_store.selected_event is None

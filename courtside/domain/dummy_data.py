"""Demo records used to populate fresh stores."""
from datetime import date, datetime, timedelta, timezone
from typing import List

from courtside.data.models import (
    Academy,
    Amenity,
    Booking,
    BookingStatus,
    Coach,
    ContactInfo,
    Event,
    EventFees,
    GuestDetails,
    Organizer,
    PartnerBooking,
    PaymentStatus,
    Sport,
    SportVariety,
    Student,
    TimeSlot,
    Venue,
    VenueAddress,
)
from courtside.utils.identifiers import utc_timestamp

FOOTBALL = Sport(
    id="s1",
    name="Football",
    category="outdoor",
    varieties=[SportVariety(id="sv1", name="6x6 Turf", base_price=1200.0)],
)
CRICKET = Sport(
    id="s2",
    name="Cricket",
    category="outdoor",
    varieties=[SportVariety(id="sv2", name="Box Cricket", base_price=800.0)],
)
BADMINTON = Sport(
    id="s3",
    name="Badminton",
    category="indoor",
    varieties=[SportVariety(id="sv3", name="Synthetic Court", base_price=400.0)],
)


def _days_from_now(days: int, hour: int = 18) -> str:
    moment = datetime.now(timezone.utc).replace(hour=hour, minute=0, second=0, microsecond=0)
    return utc_timestamp(moment + timedelta(days=days))


def dummy_venues() -> List[Venue]:
    now = utc_timestamp()
    return [
        Venue(
            id="v1",
            name="Green Field Arena",
            description="Floodlit turf and box cricket nets in the heart of the city.",
            address=VenueAddress(street="12 MG Road", city="Delhi", state="Delhi", pincode="110001"),
            contact_info=ContactInfo(phone="+91 98100 00001", email="hello@greenfield.example"),
            sports=[FOOTBALL, CRICKET],
            amenities=[
                Amenity(id="a1", name="Parking", category="facilities"),
                Amenity(id="a2", name="Changing Room", category="facilities"),
            ],
            rating=4.5,
            review_count=120,
            time_slots=[
                TimeSlot(id="ts1", start_time="10:00", end_time="11:00", price=500.0, sport_id="s1"),
                TimeSlot(id="ts2", start_time="18:00", end_time="19:00", price=800.0, sport_id="s2"),
            ],
            created_at=now,
            updated_at=now,
        ),
        Venue(
            id="v2",
            name="Shuttle Hub",
            description="Four indoor badminton courts with wooden flooring.",
            address=VenueAddress(street="44 Park Street", city="Mumbai", state="Maharashtra", pincode="400001"),
            contact_info=ContactInfo(phone="+91 98200 00002"),
            sports=[BADMINTON],
            amenities=[Amenity(id="a3", name="Racket Rental", category="sports_equipment")],
            rating=4.1,
            review_count=48,
            time_slots=[
                TimeSlot(id="ts3", start_time="07:00", end_time="08:00", price=300.0, sport_id="s3"),
            ],
            created_at=now,
            updated_at=now,
        ),
    ]


def dummy_events() -> List[Event]:
    now = utc_timestamp()
    return [
        Event(
            id="e1",
            venue_id="v1",
            name="Sunday Football League",
            description="Weekly 6-a-side league for amateur teams.",
            event_type="league",
            sport=FOOTBALL,
            participation_type="team",
            team_size=6,
            max_participants=8,
            current_participants=5,
            date_time=_days_from_now(3),
            duration=3.0,
            fees=EventFees(amount=2400.0, type="per_team"),
            organizer=Organizer(name="Green Field Arena", contact="+91 98100 00001"),
            requirements=["Studs", "Shin guards"],
            registration_deadline=_days_from_now(2),
            created_at=now,
            updated_at=now,
        ),
        Event(
            id="e2",
            venue_id="v2",
            name="Morning Badminton Clinic",
            event_type="training",
            sport=BADMINTON,
            max_participants=12,
            current_participants=7,
            date_time=_days_from_now(5, hour=7),
            duration=1.5,
            fees=EventFees(amount=350.0),
            organizer=Organizer(name="Shuttle Hub", contact="+91 98200 00002"),
            registration_deadline=_days_from_now(4),
            created_at=now,
            updated_at=now,
        ),
    ]


def dummy_bookings() -> List[Booking]:
    now = utc_timestamp()
    return [
        Booking(
            id="bk1",
            user_id="u1",
            venue_id="v1",
            date=date.today().isoformat(),
            time_slots=[TimeSlot(id="ts1", start_time="10:00", end_time="11:00", price=500.0, is_available=False)],
            sport_id="s1",
            total_amount=500.0,
            status=BookingStatus.CONFIRMED,
            payment_status=PaymentStatus.PAID,
            participants=10,
            created_at=now,
            updated_at=now,
        ),
    ]


def dummy_partner_bookings() -> List[PartnerBooking]:
    now = utc_timestamp()
    return [
        PartnerBooking(
            id="b_123",
            user_id="u_1",
            venue_id="v1",
            date=date.today().isoformat(),
            time_slots=[TimeSlot(id="ts1", start_time="10:00", end_time="11:00", price=500.0, is_available=False)],
            sport_id="s1",
            total_amount=500.0,
            status=BookingStatus.CONFIRMED,
            payment_status=PaymentStatus.PAID,
            participants=12,
            created_at=now,
            updated_at=now,
            guest_details=GuestDetails(name="Rahul Sharma", phone="+91 98765 43210"),
        ),
        PartnerBooking(
            id="b_124",
            user_id="u_2",
            venue_id="v1",
            date=(date.today() + timedelta(days=1)).isoformat(),
            time_slots=[TimeSlot(id="ts2", start_time="18:00", end_time="19:00", price=800.0, is_available=False)],
            sport_id="s2",
            total_amount=800.0,
            participants=14,
            created_at=now,
            updated_at=now,
            guest_details=GuestDetails(name="Amit Verma", phone="+91 99887 76655"),
        ),
    ]


def dummy_academies() -> List[Academy]:
    now = utc_timestamp()
    return [
        Academy(
            id="1",
            academy_name="Rising Stars Football Academy",
            sport_type="Football",
            address="Sector 21, Dwarka",
            city="Delhi",
            coach_name="Vikram Singh",
            contact_number="9876543210",
            facilities="Turf ground, floodlights, changing rooms",
            fee="2500",
            coaches=[Coach(id="c1", name="Vikram Singh", specialization="Goalkeeping", experience="8 years")],
            head_coach="c1",
            created_at=now,
            updated_at=now,
        ),
        Academy(
            id="2",
            academy_name="Smash Badminton Academy",
            sport_type="Badminton",
            address="Andheri West",
            city="Mumbai",
            coach_name="Priya Nair",
            contact_number="9123456780",
            facilities="Four wooden courts",
            fee="1800",
            created_at=now,
            updated_at=now,
        ),
    ]


def dummy_students() -> List[Student]:
    return [
        Student(id="s1", name="Aarav Mehta", age=10, father_name="Rohit Mehta",
                father_contact="9000000001", academy_id="1", enrollment_date="2024-04-01"),
        Student(id="s2", name="Kabir Das", age=12, father_name="Anil Das",
                father_contact="9000000002", academy_id="1", enrollment_date="2024-04-15"),
        Student(id="s3", name="Isha Rao", age=11, father_name="Suresh Rao",
                father_contact="9000000003", academy_id="2", enrollment_date="2024-05-02"),
    ]

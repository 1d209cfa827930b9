"""
Data models for the booking platform's entity families.

Every model is a plain dataclass. Entities carry an ``id`` plus optional
``created_at`` / ``updated_at`` ISO-8601 strings; value objects (addresses,
fees, time slots...) are nested dataclasses without identity. Relationships
between entities are always by identifier.
"""
from dataclasses import asdict, dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar, Union, get_args, get_origin, get_type_hints

M = TypeVar('M', bound='Model')


def _plain_dict(items: List[tuple]) -> Dict[str, Any]:
    return {key: value.value if isinstance(value, Enum) else value for key, value in items}


def _coerce(tp: Any, value: Any) -> Any:
    """Convert a JSON-shaped value into the annotated field type."""
    if value is None:
        return None

    origin = get_origin(tp)
    args = get_args(tp)

    if origin is Union:
        candidates = [arg for arg in args if arg is not type(None)]
        return _coerce(candidates[0], value) if candidates else value
    if origin in (list, List):
        return [_coerce(args[0], item) for item in value] if args else list(value)
    if origin in (dict, Dict):
        return dict(value)
    if isinstance(tp, type) and is_dataclass(tp) and isinstance(value, dict):
        return tp.from_dict(value)
    if isinstance(tp, type) and issubclass(tp, Enum):
        return tp(value)
    return value


@dataclass
class Model:
    """Base class giving every model a dict round-trip."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert the model to a dictionary."""
        return asdict(self, dict_factory=_plain_dict)

    def field_values(self) -> Dict[str, Any]:
        """Shallow mapping of field names to current values."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls: Type[M], data: Dict[str, Any]) -> M:
        """Create a model from a dictionary, ignoring unknown keys."""
        hints = get_type_hints(cls)
        kwargs = {
            f.name: _coerce(hints[f.name], data[f.name])
            for f in fields(cls)
            if f.name in data
        }
        return cls(**kwargs)


@dataclass
class Entity(Model):
    """A uniquely identified record of one entity family."""

    id: str = ""


# --------------------------------------------------------------------------
# Status vocabularies
# --------------------------------------------------------------------------

class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class EventStatus(str, Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RequestStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class RegistrationDomain(str, Enum):
    REGULAR = "regular"
    FOOTBALL_TOURNAMENT = "football_tournament"


class EnrollmentStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    INACTIVE = "inactive"


class DemoBookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# --------------------------------------------------------------------------
# Venues
# --------------------------------------------------------------------------

@dataclass
class Coordinates(Model):
    latitude: float = 0.0
    longitude: float = 0.0


@dataclass
class VenueAddress(Model):
    street: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""
    coordinates: Optional[Coordinates] = None


@dataclass
class ContactInfo(Model):
    phone: str = ""
    email: str = ""
    whatsapp: str = ""


@dataclass
class Amenity(Model):
    id: str = ""
    name: str = ""
    category: str = "basic"  # basic, sports_equipment, facilities, services
    icon: Optional[str] = None
    description: Optional[str] = None


@dataclass
class SportVariety(Model):
    id: str = ""
    name: str = ""  # e.g. "6x6 Turf", "Full Court"
    specifications: Dict[str, Any] = field(default_factory=dict)
    base_price: Optional[float] = None
    is_available: bool = True


@dataclass
class Sport(Model):
    id: str = ""
    name: str = ""
    category: str = "outdoor"  # indoor or outdoor
    varieties: List[SportVariety] = field(default_factory=list)


@dataclass
class TimeSlot(Model):
    id: str = ""
    start_time: str = ""  # HH:mm
    end_time: str = ""  # HH:mm
    is_available: bool = True
    price: float = 0.0
    price_type: str = "per_slot"  # per_hour, per_slot, per_person
    sport_id: Optional[str] = None
    sport_variety_id: Optional[str] = None


@dataclass
class OperatingHours(Model):
    open: str = "09:00"
    close: str = "22:00"
    is_open: bool = True


@dataclass
class WeeklyOperatingHours(Model):
    monday: OperatingHours = field(default_factory=OperatingHours)
    tuesday: OperatingHours = field(default_factory=OperatingHours)
    wednesday: OperatingHours = field(default_factory=OperatingHours)
    thursday: OperatingHours = field(default_factory=OperatingHours)
    friday: OperatingHours = field(default_factory=OperatingHours)
    saturday: OperatingHours = field(default_factory=OperatingHours)
    sunday: OperatingHours = field(default_factory=OperatingHours)


@dataclass
class VenuePolicies(Model):
    cancellation_policy: str = ""
    advance_booking_days: int = 30
    minimum_booking_hours: int = 1


@dataclass
class Venue(Entity):
    """A bookable sports venue."""

    name: str = ""
    description: str = ""
    address: VenueAddress = field(default_factory=VenueAddress)
    contact_info: ContactInfo = field(default_factory=ContactInfo)
    sports: List[Sport] = field(default_factory=list)
    amenities: List[Amenity] = field(default_factory=list)
    images: List[str] = field(default_factory=list)
    rating: float = 0.0
    review_count: int = 0
    operating_hours: WeeklyOperatingHours = field(default_factory=WeeklyOperatingHours)
    time_slots: List[TimeSlot] = field(default_factory=list)
    policies: VenuePolicies = field(default_factory=VenuePolicies)
    is_active: bool = True
    created_at: str = ""
    updated_at: str = ""


# --------------------------------------------------------------------------
# Events and bookings
# --------------------------------------------------------------------------

@dataclass
class EventFees(Model):
    amount: float = 0.0
    currency: str = "INR"
    type: str = "per_person"  # per_person, per_team, total


@dataclass
class Organizer(Model):
    name: str = ""
    contact: str = ""


@dataclass
class Event(Entity):
    """A public sports event held at a venue."""

    venue_id: str = ""
    name: str = ""
    description: Optional[str] = None
    event_type: str = "friendly"  # tournament, practice, friendly, training, league
    sport: Sport = field(default_factory=Sport)
    participation_type: str = "individual"  # individual or team
    team_size: Optional[int] = None
    max_participants: int = 0
    current_participants: int = 0
    date_time: str = ""
    duration: float = 1.0  # hours
    fees: EventFees = field(default_factory=EventFees)
    organizer: Organizer = field(default_factory=Organizer)
    requirements: List[str] = field(default_factory=list)
    status: EventStatus = EventStatus.UPCOMING
    is_public: bool = True
    registration_deadline: str = ""
    creator_id: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""


@dataclass
class Booking(Entity):
    """A user's booking of venue slots or an event."""

    user_id: str = ""
    venue_id: str = ""
    event_id: Optional[str] = None
    booking_type: str = "venue"  # venue or event
    date: str = ""  # YYYY-MM-DD
    time_slots: List[TimeSlot] = field(default_factory=list)
    sport_id: Optional[str] = None
    total_amount: float = 0.0
    status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    participants: int = 1
    special_requests: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""


@dataclass
class GuestDetails(Model):
    name: str = ""
    phone: str = ""


@dataclass
class PartnerBooking(Booking):
    """A booking as seen by the venue owner, with the guest's contact."""

    guest_details: GuestDetails = field(default_factory=GuestDetails)


@dataclass
class ManualBlock(Entity):
    """An owner override that takes a slot out of sale for one date."""

    venue_id: str = ""
    date: str = ""  # YYYY-MM-DD
    slot_id: str = ""
    reason: str = ""
    created_at: str = ""


# --------------------------------------------------------------------------
# Academies
# --------------------------------------------------------------------------

@dataclass
class Coach(Model):
    id: str = ""
    name: str = ""
    specialization: str = ""
    experience: str = ""
    contact: str = ""


@dataclass
class Academy(Entity):
    """A coaching academy."""

    academy_name: str = ""
    sport_type: str = ""
    address: str = ""
    coach_name: str = ""
    contact_number: str = ""
    facilities: str = ""
    fee: str = ""
    city: str = ""
    coaches: List[Coach] = field(default_factory=list)
    head_coach: Optional[str] = None
    photos: List[str] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""


@dataclass
class Student(Entity):
    name: str = ""
    age: int = 0
    father_name: str = ""
    father_contact: str = ""
    academy_id: str = ""
    enrollment_date: str = ""


@dataclass
class Attendance(Model):
    """One attendance mark, keyed by (student_id, date)."""

    student_id: str = ""
    date: str = ""
    present: bool = False


@dataclass
class Certificate(Entity):
    student_id: str = ""
    template: str = ""
    student_name: str = ""
    academy_name: str = ""
    achievement: str = ""
    date: str = ""
    certificate_number: str = ""


@dataclass
class Announcement(Entity):
    content: str = ""
    created_at: str = ""


# --------------------------------------------------------------------------
# Event registration requests
# --------------------------------------------------------------------------

@dataclass
class TeamMember(Model):
    id: str = ""
    name: str = ""
    contact: str = ""


@dataclass
class RegistrationRequest(Entity):
    """Common shape of every registration request for an event."""

    domain: RegistrationDomain = RegistrationDomain.REGULAR
    event_id: str = ""
    status: RequestStatus = RequestStatus.PENDING
    submitted_at: str = ""
    processed_at: Optional[str] = None
    processed_by: Optional[str] = None  # manager / organizer id
    notes: Optional[str] = None


@dataclass
class RegularIndividualRequest(RegistrationRequest):
    user_id: str = ""
    participation_type: str = "individual"
    participant_name: str = ""
    contact: str = ""
    email: str = ""


@dataclass
class RegularTeamRequest(RegistrationRequest):
    user_id: str = ""
    participation_type: str = "team"
    team_name: str = ""
    captain_name: Optional[str] = None
    captain_contact: str = ""
    captain_email: str = ""
    team_members: List[TeamMember] = field(default_factory=list)
    team_size: int = 0


@dataclass
class FootballTournamentRequest(RegistrationRequest):
    domain: RegistrationDomain = RegistrationDomain.FOOTBALL_TOURNAMENT
    team_id: str = ""
    team_name: str = ""
    captain_player_id: str = ""
    captain_name: str = ""


# --------------------------------------------------------------------------
# Parent-side academy records (persisted on device)
# --------------------------------------------------------------------------

@dataclass
class ChildProfile(Entity):
    father_name: str = ""
    mother_name: str = ""
    child_name: str = ""
    child_age: str = ""
    address: str = ""
    city: str = ""
    created_at: str = ""


@dataclass
class ParentProfile(ChildProfile):
    """The single parent profile kept on the device."""


@dataclass
class Enrollment(Entity):
    child_id: str = ""
    child_name: str = ""
    academy_id: str = ""
    academy_name: str = ""
    enrolled_at: str = ""
    status: EnrollmentStatus = EnrollmentStatus.PENDING


@dataclass
class DemoBooking(Entity):
    child_id: str = ""
    child_name: str = ""
    father_name: str = ""
    contact_number: str = ""
    academy_id: str = ""
    academy_name: str = ""
    booking_date: str = ""  # scheduled demo date
    status: DemoBookingStatus = DemoBookingStatus.CONFIRMED
    created_at: str = ""


@dataclass
class AcademyReview(Entity):
    academy_id: str = ""
    academy_name: str = ""
    child_id: str = ""
    child_name: str = ""
    reviewer_name: str = ""  # father's name
    rating: int = 0  # 1-5
    title: Optional[str] = None
    comment: str = ""
    created_at: str = ""


# --------------------------------------------------------------------------
# Football: players, teams and knockout tournaments
# --------------------------------------------------------------------------

class FootballPosition(str, Enum):
    GOALKEEPER = "Goalkeeper"
    RIGHT_BACK = "Right Back"
    LEFT_BACK = "Left Back"
    CENTRE_BACK = "Centre Back"
    DEFENSIVE_MIDFIELDER = "Defensive Midfielder"
    CENTRAL_MIDFIELDER = "Central Midfielder"
    ATTACKING_MIDFIELDER = "Attacking Midfielder"
    RIGHT_WINGER = "Right Winger"
    LEFT_WINGER = "Left Winger"
    STRIKER = "Striker"
    CENTRE_FORWARD = "Centre Forward"


class TeamStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DISBANDED = "disbanded"


class TournamentStage(str, Enum):
    ROUND_OF_32 = "round_of_32"
    ROUND_OF_16 = "round_of_16"
    QUARTER_FINAL = "quarter_final"
    SEMI_FINAL = "semi_final"
    FINAL = "final"


class TournamentStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class KnockoutTeamStatus(str, Enum):
    ACTIVE = "active"
    ELIMINATED = "eliminated"
    WINNER = "winner"


class FixtureStatus(str, Enum):
    UPCOMING = "upcoming"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class MatchStatus(str, Enum):
    SETUP = "setup"
    PLAYING = "playing"
    FINISHED = "finished"


class MatchEventType(str, Enum):
    GOAL = "goal"
    CARD = "card"
    SUBSTITUTION = "substitution"
    FOUL = "foul"
    CORNER = "corner"
    OFFSIDE = "offside"


class SeedingStrategy(str, Enum):
    RANDOM = "random"
    SEEDED = "seeded"


@dataclass
class FootballPlayer(Entity):
    name: str = ""
    position: FootballPosition = FootballPosition.STRIKER
    is_registered: bool = False
    profile_image: Optional[str] = None
    images: List[str] = field(default_factory=list)
    contact: Optional[str] = None
    preferred_foot: Optional[str] = None  # Left / Right / Both
    experience: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""


@dataclass
class FootballTeam(Entity):
    """A team holding its members by player id."""

    team_name: str = ""
    max_players: int = 11
    city: str = ""
    member_player_ids: List[str] = field(default_factory=list)
    owner_id: Optional[str] = None
    status: TeamStatus = TeamStatus.ACTIVE
    description: Optional[str] = None
    logo_url: Optional[str] = None
    achievements: List[str] = field(default_factory=list)
    matches_played: int = 0
    matches_won: int = 0
    matches_lost: int = 0
    matches_drawn: int = 0
    created_at: str = ""
    updated_at: str = ""


@dataclass
class Score(Model):
    home_score: int = 0
    away_score: int = 0


@dataclass
class PenaltyShootout(Model):
    home_shootout_score: int = 0
    away_shootout_score: int = 0
    is_completed: bool = False


@dataclass
class MatchEvent(Model):
    id: str = ""
    team_id: str = ""
    event_type: MatchEventType = MatchEventType.GOAL
    event_sub_type: Optional[str] = None  # "own_goal", "yellow", ...
    player_id: str = ""
    player_name: str = ""
    assist_player_id: Optional[str] = None
    assist_player_name: Optional[str] = None
    minute: int = 0
    seconds: int = 0
    is_extra_time: bool = False
    description: Optional[str] = None
    timestamp: str = ""


@dataclass
class KnockoutSettings(Model):
    venue: str = ""
    number_of_players: int = 11
    number_of_substitutes: int = 5
    number_of_referees: int = 1
    match_duration: int = 90  # minutes
    allow_extra_time: bool = True
    allow_penalty_shootout: bool = True


@dataclass
class KnockoutTournamentTeam(Entity):
    team_id: str = ""  # football team this entry was created from
    team_name: str = ""
    logo_url: Optional[str] = None
    seed_position: Optional[int] = None
    status: KnockoutTeamStatus = KnockoutTeamStatus.ACTIVE
    matches_played: int = 0
    goals_for: int = 0
    goals_against: int = 0


@dataclass
class KnockoutFixture(Entity):
    """One tie of the bracket. Later-round ties start with both sides TBD."""

    stage: TournamentStage = TournamentStage.FINAL
    match_number: int = 0
    round_number: int = 1
    home_team_id: str = ""
    away_team_id: str = ""
    home_team_name: str = "TBD"
    away_team_name: str = "TBD"
    status: FixtureStatus = FixtureStatus.UPCOMING
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    extra_time_score: Optional[Score] = None
    penalty_shootout: Optional[PenaltyShootout] = None
    winner: Optional[str] = None
    winner_name: Optional[str] = None
    venue: Optional[str] = None
    next_fixture_id: Optional[str] = None  # tie the winner advances to


@dataclass
class KnockoutBracket(Model):
    rounds: List[List[str]] = field(default_factory=list)  # fixture ids per round
    final_match: Optional[str] = None


@dataclass
class KnockoutTournament(Entity):
    name: str = ""
    description: Optional[str] = None
    settings: KnockoutSettings = field(default_factory=KnockoutSettings)
    teams: List[KnockoutTournamentTeam] = field(default_factory=list)
    fixtures: List[KnockoutFixture] = field(default_factory=list)
    current_stage: TournamentStage = TournamentStage.FINAL
    status: TournamentStatus = TournamentStatus.DRAFT
    total_teams: int = 0  # power of two
    current_round: int = 1
    total_rounds: int = 0
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    winner: Optional[str] = None
    winner_team_id: Optional[str] = None
    bracket: KnockoutBracket = field(default_factory=KnockoutBracket)
    created_at: str = ""
    updated_at: str = ""


@dataclass
class ActiveKnockoutMatch(Model):
    """The one knockout tie currently being scored."""

    fixture_id: str = ""
    tournament_id: str = ""
    home_team_id: str = ""
    away_team_id: str = ""
    home_team_name: str = ""
    away_team_name: str = ""
    home_team_players: List[str] = field(default_factory=list)
    away_team_players: List[str] = field(default_factory=list)
    home_captain: Optional[str] = None
    away_captain: Optional[str] = None
    referees: List[str] = field(default_factory=list)
    events: List[MatchEvent] = field(default_factory=list)
    home_score: int = 0
    away_score: int = 0
    start_time: str = ""
    current_minute: int = 0
    status: MatchStatus = MatchStatus.SETUP
    extra_time_score: Optional[Score] = None
    penalty_shootout: Optional[PenaltyShootout] = None

"""
Composition root for Courtside.

The Application builds exactly one instance of every domain store, wires the
event emitter between the organizer and public event stores, and picks the
key-value storage backing the persistent stores. Nothing else in the package
creates stores at import time.
"""

from typing import Any, Dict, Optional

from courtside.config import settings as default_settings
from courtside.config.logging_config import get_logger
from courtside.config.settings import Settings
from courtside.data.persistence import FileKeyValueStorage, KeyValueStorage, MemoryKeyValueStorage
from courtside.domain import dummy_data
from courtside.domain.academy_profiles import (
    ChildProfileStore,
    DemoBookingStore,
    EnrollmentStore,
    ParentProfileStore,
    ReviewStore,
)
from courtside.domain.academy_store import AcademyStore
from courtside.domain.announcement_store import AnnouncementStore
from courtside.domain.booking_store import BookingStore
from courtside.domain.event_manager_store import EventManagerStore
from courtside.domain.football_team_store import FootballTeamStore
from courtside.domain.knockout_tournament_store import KnockoutTournamentStore
from courtside.domain.partner_booking_store import PartnerBookingStore
from courtside.domain.registration_request_store import RegistrationRequestStore
from courtside.domain.signup_store import SignUpStore
from courtside.domain.sync import EventCatalogSync
from courtside.domain.venue_store import VenueStore
from courtside.events.event_interface import EventEmitter
from courtside.utils.error_handling import ErrorSeverity, safe_execute

logger = get_logger(__name__)


class Application:
    """
    Owner of all domain stores for one running session.

    Stores are plain attributes; callers receive them from the application
    instead of importing module-level instances.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        storage: Optional[KeyValueStorage] = None,
        emitter: Optional[EventEmitter] = None,
    ):
        """
        Initialize the application.

        Args:
            settings: Application settings; defaults to the environment-loaded settings
            storage: Key-value storage for persistent stores; chosen from settings when omitted
            emitter: Event emitter shared by publishing and subscribing stores
        """
        self.settings = settings or default_settings
        self.storage = storage if storage is not None else self._default_storage()
        self.emitter = emitter if emitter is not None else EventEmitter()
        seed = self.settings.seed_dummy_data

        # Partner-side stores
        self.venue_store = VenueStore()
        self.partner_booking_store = PartnerBookingStore()
        self.academy_store = AcademyStore()
        self.announcement_store = AnnouncementStore(seed_dummy_data=seed)

        # Player-side stores
        self.booking_store = BookingStore()
        self.event_manager_store = EventManagerStore(self.emitter)
        self.registration_request_store = RegistrationRequestStore()
        self.signup_store = SignUpStore()

        # Parent-side academy records
        self.child_profile_store = ChildProfileStore(self.storage)
        self.enrollment_store = EnrollmentStore(self.storage)
        self.demo_booking_store = DemoBookingStore(self.storage)
        self.review_store = ReviewStore(self.storage)
        self.parent_profile_store = ParentProfileStore(self.storage)

        # Football teams and knockout tournaments
        self.football_team_store = FootballTeamStore()
        self.knockout_tournament_store = KnockoutTournamentStore(self.football_team_store, self.storage)

        self.event_sync = EventCatalogSync(self.emitter, self.booking_store)

        if seed:
            safe_execute(
                self._seed,
                error_message="Failed to seed demo data",
                severity=ErrorSeverity.WARNING,
            )

        logger.info(f"{self.settings.app_name} {self.settings.app_version} initialized")

    def _default_storage(self) -> KeyValueStorage:
        if self.settings.storage.enabled:
            logger.debug(f"Using file storage at {self.settings.storage.data_dir}")
            return FileKeyValueStorage(self.settings.storage.data_dir)
        logger.debug("Storage disabled, keeping persistent stores in memory")
        return MemoryKeyValueStorage()

    def _seed(self) -> None:
        for academy in dummy_data.dummy_academies():
            self.academy_store.add_academy(academy)
        for student in dummy_data.dummy_students():
            self.academy_store.add_student(student)
        for booking in dummy_data.dummy_partner_bookings():
            self.partner_booking_store.add_booking(booking)
        self.venue_store.set_venues(dummy_data.dummy_venues())
        self.initialize_booking_store()

    def initialize_booking_store(self) -> bool:
        """
        Fill the public catalog with demo venues, events and bookings.

        Does nothing when the catalog already holds venues.

        Returns:
            bool: True if demo data was loaded
        """
        if self.booking_store.venues:
            return False
        self.booking_store.set_venues(dummy_data.dummy_venues())
        self.booking_store.set_events(dummy_data.dummy_events())
        self.booking_store.set_bookings(dummy_data.dummy_bookings())
        logger.info("Public catalog initialized with demo data")
        return True

    def reset_booking_store(self) -> None:
        """Empty the public catalog and clear its selections."""
        self.booking_store.set_venues([])
        self.booking_store.set_events([])
        self.booking_store.set_bookings([])
        self.booking_store.select_venue(None)
        self.booking_store.select_event(None)
        logger.info("Public catalog reset")

    def persistence_health(self) -> Dict[str, Dict[str, Any]]:
        """Health signal of every persistent store, keyed by store name."""
        stores = (
            self.child_profile_store,
            self.enrollment_store,
            self.demo_booking_store,
            self.review_store,
            self.parent_profile_store,
            self.knockout_tournament_store,
        )
        return {store.name: store.persistence.health() for store in stores if store.persistence is not None}

    def summary(self) -> Dict[str, Any]:
        """Counts of the main collections, for display."""
        return {
            "app": self.settings.app_name,
            "version": self.settings.app_version,
            "venues": len(self.booking_store.venues),
            "events": len(self.booking_store.events),
            "bookings": len(self.booking_store.bookings),
            "partner_venues": len(self.venue_store.list_venues()),
            "partner_bookings": len(self.partner_booking_store.bookings),
            "academies": len(self.academy_store.get_academies()),
            "announcements": len(self.announcement_store.posts),
            "managed_events": len(self.event_manager_store.managed_events),
            "child_profiles": len(self.child_profile_store.child_profiles),
            "enrollments": len(self.enrollment_store.enrollments),
            "football_teams": len(self.football_team_store.teams),
            "knockout_tournaments": len(self.knockout_tournament_store.tournaments),
            "persistence": self.persistence_health(),
        }

    def close(self) -> None:
        """Detach cross-store wiring."""
        self.event_sync.detach()
        logger.info("Application closed")

"""
Parent-side academy records that survive an app restart.

Each store hydrates its collection from key-value storage when it is built
and writes the whole collection back after every change.
"""
from dataclasses import replace
from typing import Any, List, Optional

from courtside.config.logging_config import get_logger
from courtside.data.models import (
    AcademyReview,
    ChildProfile,
    DemoBooking,
    DemoBookingStatus,
    Enrollment,
    EnrollmentStatus,
    ParentProfile,
)
from courtside.data.persistence import KeyValueStorage
from courtside.domain.base_store import PersistentStore
from courtside.utils.identifiers import utc_timestamp

logger = get_logger(__name__)


class ChildProfileStore(PersistentStore):
    name = "child_profiles"
    storage_key = "child-profiles-storage"
    collection_field = "childProfiles"

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        super().__init__(storage)
        self._profiles = self._repository("profiles", id_prefix="child")
        self._attach_persistence(self._profiles, ChildProfile)

    @property
    def child_profiles(self) -> List[ChildProfile]:
        return self._profiles.list()

    def add_child_profile(self, profile: ChildProfile) -> ChildProfile:
        return self._profiles.add(profile)

    def update_child_profile(self, profile_id: str, **changes: Any) -> Optional[ChildProfile]:
        return self._profiles.update(profile_id, changes)

    def delete_child_profile(self, profile_id: str) -> bool:
        return self._profiles.delete(profile_id)

    def get_child_profile(self, profile_id: str) -> Optional[ChildProfile]:
        return self._profiles.get_by_id(profile_id)

    def has_profiles(self) -> bool:
        return len(self._profiles) > 0


class EnrollmentStore(PersistentStore):
    name = "enrollments"
    storage_key = "enrollment-storage"
    collection_field = "enrollments"

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        super().__init__(storage)
        self._enrollments = self._repository("enrollments", id_prefix="enrollment")
        self._attach_persistence(self._enrollments, Enrollment)

    @property
    def enrollments(self) -> List[Enrollment]:
        return self._enrollments.list()

    def enroll_child(self, enrollment: Enrollment) -> Enrollment:
        """Store an enrollment with a fresh id and enrollment time."""
        return self._enrollments.add(replace(enrollment, id="", enrolled_at=utc_timestamp()))

    def get_enrollments_by_child(self, child_id: str) -> List[Enrollment]:
        return self._enrollments.query(child_id=child_id)

    def get_enrollments_by_academy(self, academy_id: str) -> List[Enrollment]:
        return self._enrollments.query(academy_id=academy_id)

    def is_child_enrolled(self, child_id: str, academy_id: str) -> bool:
        return bool(self._enrollments.query(child_id=child_id, academy_id=academy_id))

    def remove_enrollment(self, enrollment_id: str) -> bool:
        return self._enrollments.delete(enrollment_id)

    def update_enrollment_status(self, enrollment_id: str, status: EnrollmentStatus) -> Optional[Enrollment]:
        return self._enrollments.update(enrollment_id, {"status": status})


class DemoBookingStore(PersistentStore):
    name = "demo_bookings"
    storage_key = "demo-bookings-storage"
    collection_field = "demoBookings"

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        super().__init__(storage)
        self._bookings = self._repository("demo_bookings", id_prefix="demo")
        self._attach_persistence(self._bookings, DemoBooking)

    @property
    def demo_bookings(self) -> List[DemoBooking]:
        return self._bookings.list()

    def add_demo_booking(self, booking: DemoBooking) -> DemoBooking:
        return self._bookings.add(replace(booking, id="", created_at=""))

    def update_demo_booking_status(self, booking_id: str, status: DemoBookingStatus) -> Optional[DemoBooking]:
        return self._bookings.update(booking_id, {"status": status})

    def get_bookings_by_child_id(self, child_id: str) -> List[DemoBooking]:
        return self._bookings.query(child_id=child_id)

    def get_bookings_by_academy_id(self, academy_id: str) -> List[DemoBooking]:
        return self._bookings.query(academy_id=academy_id)

    def is_demo_booked(self, child_id: str, academy_id: str) -> bool:
        """True if the child holds a demo at the academy that was not cancelled."""
        return bool(self._bookings.query(
            lambda b: b.status != DemoBookingStatus.CANCELLED,
            child_id=child_id,
            academy_id=academy_id,
        ))


class ReviewStore(PersistentStore):
    """Academy reviews written by parents, newest first."""

    name = "reviews"
    storage_key = "academy-reviews-storage"
    collection_field = "reviews"

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        super().__init__(storage)
        self._reviews = self._repository("reviews", insert_at_front=True, id_prefix="review")
        self._attach_persistence(self._reviews, AcademyReview)

    @property
    def reviews(self) -> List[AcademyReview]:
        return self._reviews.list()

    def add_review(self, review: AcademyReview) -> AcademyReview:
        return self._reviews.add(replace(review, id="", created_at=""))

    def update_review(self, review_id: str, **changes: Any) -> Optional[AcademyReview]:
        return self._reviews.update(review_id, changes)

    def delete_review(self, review_id: str) -> bool:
        return self._reviews.delete(review_id)

    def get_reviews_by_academy(self, academy_id: str) -> List[AcademyReview]:
        return self._reviews.query(academy_id=academy_id)

    def get_reviews_by_child(self, child_id: str) -> List[AcademyReview]:
        return self._reviews.query(child_id=child_id)

    def get_average_rating_for_academy(self, academy_id: str) -> float:
        ratings = [r.rating for r in self.get_reviews_by_academy(academy_id)]
        if not ratings:
            return 0.0
        return sum(ratings) / len(ratings)


class ParentProfileStore(PersistentStore):
    """The one parent profile kept on the device, or None."""

    name = "parent_profile"
    storage_key = "parent-profile-storage"
    collection_field = "parentProfile"

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        super().__init__(storage)
        self.parent_profile: Optional[ParentProfile] = None
        if self.persistence is not None:
            stored = self.persistence.hydrate(ParentProfile.from_dict)
            self.parent_profile = stored[0] if stored else None

    def set_parent_profile(self, profile: ParentProfile) -> ParentProfile:
        if not profile.created_at:
            profile = replace(profile, created_at=utc_timestamp())
        self._set(profile)
        return profile

    def update_parent_profile(self, **changes: Any) -> Optional[ParentProfile]:
        """Merge changes into the profile; without a profile nothing happens."""
        if self.parent_profile is None:
            return None
        known = self.parent_profile.field_values()
        accepted = {k: v for k, v in changes.items() if k in known and k != "id"}
        self._set(replace(self.parent_profile, **accepted))
        return self.parent_profile

    def clear_parent_profile(self) -> None:
        self._set(None)

    def has_profile(self) -> bool:
        return self.parent_profile is not None

    def _set(self, profile: Optional[ParentProfile]) -> None:
        self.parent_profile = profile
        logger.debug(f"Parent profile {'cleared' if profile is None else 'saved'}")
        if self.persistence is not None:
            self.persistence.persist_single(profile)
        self._notify()

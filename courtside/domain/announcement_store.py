"""Academy announcement feed."""
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from courtside.data.models import Announcement
from courtside.domain.base_store import DomainStore
from courtside.utils.identifiers import utc_timestamp


def _hours_ago(hours: float) -> str:
    return utc_timestamp(datetime.now(timezone.utc) - timedelta(hours=hours))


def dummy_announcements() -> List[Announcement]:
    return [
        Announcement(
            id="1",
            content="Important: Due to heavy rains, the evening football batch (5 PM - 7 PM) is cancelled today. Please stay safe!",
            created_at=_hours_ago(2),
        ),
        Announcement(
            id="2",
            content="Schedule Update: Starting next Monday, the Morning Fitness batch will begin at 6:30 AM instead of 6:00 AM.",
            created_at=_hours_ago(24 * 2),
        ),
        Announcement(
            id="3",
            content="Reminder: The inter-academy tournament registration closes this Sunday. Make sure to submit your forms.",
            created_at=_hours_ago(24 * 5),
        ),
    ]


class AnnouncementStore(DomainStore):
    """Newest-first list of announcement posts.

    While the feed still shows placeholder posts, the first real post
    replaces them instead of being stacked on top.
    """

    name = "announcements"

    def __init__(self, seed_dummy_data: bool = True):
        super().__init__()
        self._posts = self._repository(
            "posts", insert_at_front=True, id_prefix="post", entity_cls=Announcement
        )
        self.is_dummy_data = seed_dummy_data
        if seed_dummy_data:
            self._posts.set_all(dummy_announcements())

    @property
    def posts(self) -> List[Announcement]:
        return self._posts.list()

    def add_post(self, content: str) -> Announcement:
        if self.is_dummy_data:
            self.is_dummy_data = False
            self._posts.clear()
        return self._posts.create(content=content)

    def delete_post(self, post_id: str) -> bool:
        return self._posts.delete(post_id)

    def get_post_by_id(self, post_id: str) -> Optional[Announcement]:
        return self._posts.get_by_id(post_id)

"""Registration requests submitted for managed events."""
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from courtside.data.models import RegistrationDomain, RegistrationRequest, RequestStatus
from courtside.domain.base_store import DomainStore
from courtside.utils.identifiers import utc_timestamp


class RegistrationRequestStore(DomainStore):
    """Pending, accepted and rejected registration requests across events."""

    name = "registration_requests"

    def __init__(self):
        super().__init__()
        self._requests = self._repository("requests", id_prefix="req")

    @property
    def requests(self) -> List[RegistrationRequest]:
        return self._requests.list()

    def add_request(self, request: RegistrationRequest) -> RegistrationRequest:
        if not request.submitted_at:
            request = replace(request, submitted_at=utc_timestamp())
        return self._requests.add(request)

    def update_request_status(
        self,
        request_id: str,
        status: RequestStatus,
        manager_id: str,
        notes: Optional[str] = None,
    ) -> Optional[RegistrationRequest]:
        """
        Accept or reject a request.

        Args:
            request_id: Request to process; unknown ids are ignored
            status: New status
            manager_id: Organizer processing the request
            notes: Optional note; an empty note keeps the previous one

        Returns:
            Optional[RegistrationRequest]: The processed request, None if not found
        """
        changes = {"status": status, "processed_at": utc_timestamp(), "processed_by": manager_id}
        if notes:
            changes["notes"] = notes
        return self._requests.update(request_id, changes)

    def delete_request(self, request_id: str) -> bool:
        return self._requests.delete(request_id)

    def delete_requests_by_event(self, event_id: str) -> int:
        return self._requests.delete_where(lambda r: r.event_id == event_id)

    def set_requests(self, requests: Iterable[RegistrationRequest]) -> None:
        self._requests.set_all(requests)

    def get_requests_by_event(self, event_id: str) -> List[RegistrationRequest]:
        return self._requests.query(event_id=event_id)

    def get_request_by_id(self, request_id: str) -> Optional[RegistrationRequest]:
        return self._requests.get_by_id(request_id)

    def get_requests_by_user(self, user_id: str) -> List[RegistrationRequest]:
        """Regular-domain requests filed by this user."""
        return self._requests.query(
            lambda r: getattr(r, "user_id", None) == user_id, domain=RegistrationDomain.REGULAR
        )

    def get_requests_by_domain(self, event_id: str, domain: RegistrationDomain) -> List[RegistrationRequest]:
        return self._requests.query(event_id=event_id, domain=domain)

    def get_requests_by_status(self, event_id: str, status: RequestStatus) -> List[RegistrationRequest]:
        return self._requests.query(event_id=event_id, status=status)

    def get_event_stats(self, event_id: str) -> Dict[str, int]:
        requests = self.get_requests_by_event(event_id)
        stats = {status.value: 0 for status in RequestStatus}
        for request in requests:
            stats[RequestStatus(request.status).value] += 1
        stats["total"] = len(requests)
        return stats

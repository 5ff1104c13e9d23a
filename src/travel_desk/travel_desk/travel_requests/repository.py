from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import DateRange
from ..core.enums import RequestKind, RequestStatus
from .model import NewTravelRequest, TravelRequest


class TravelRequestRepository(Protocol):
    """EMPTRF and HODTRF storage; `kind` selects the collection."""

    def create(self, request: NewTravelRequest) -> int:
        raise NotImplementedError

    def get(self, kind: RequestKind, request_id: int) -> Optional[TravelRequest]:
        raise NotImplementedError

    def list(
        self,
        kind: RequestKind,
        *,
        requester_id: Optional[str] = None,
        approver_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
        date_range: Optional[DateRange] = None,
        limit: int = 500,
    ) -> Sequence[TravelRequest]:
        raise NotImplementedError

    def decide(
        self,
        kind: RequestKind,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: str,
        expected: RequestStatus = RequestStatus.PENDING,
    ) -> bool:
        """Conditional update: write only while the stored status equals `expected`."""

        raise NotImplementedError

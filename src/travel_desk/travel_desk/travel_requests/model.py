from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..core.constants import DATE_FORMAT
from ..core.enums import RequestKind, RequestStatus


def _fmt(value: Optional[date]) -> Optional[str]:
    return value.strftime(DATE_FORMAT) if value else None


@dataclass(frozen=True)
class NewTravelRequest:
    """Typed trip fields shared by EMPTRF and HODTRF.

    For EMPTRF `requester_id` is the employee code and `approver_id` the HOD;
    for HODTRF `requester_id` is the HOD and there is no named approver.
    """

    kind: RequestKind
    requester_id: str
    date_of_request: date
    approver_id: Optional[str] = None
    requester_name: Optional[str] = None
    department: Optional[str] = None
    travel_date: Optional[date] = None
    return_date: Optional[date] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    purpose: Optional[str] = None
    mode_of_travel: Optional[str] = None
    remarks: Optional[str] = None
    extra: dict = field(default_factory=dict)


@dataclass(frozen=True)
class TravelRequest:
    kind: RequestKind
    request_id: int
    requester_id: str
    date_of_request: date
    status: RequestStatus
    approver_id: Optional[str] = None
    requester_name: Optional[str] = None
    department: Optional[str] = None
    travel_date: Optional[date] = None
    return_date: Optional[date] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    purpose: Optional[str] = None
    mode_of_travel: Optional[str] = None
    remarks: Optional[str] = None
    decision: Optional[RequestStatus] = None
    decided_by: Optional[str] = None
    decided_at: Optional[datetime] = None
    extra: dict = field(default_factory=dict)
    created_at: Optional[datetime] = None

    @property
    def hod_id(self) -> Optional[str]:
        if self.kind == RequestKind.HOD_TO_ADMIN:
            return self.requester_id
        return self.approver_id

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.request_id, "kind": self.kind.value}
        if self.kind == RequestKind.EMPLOYEE_TO_HOD:
            out["employeeCode"] = self.requester_id
            out["employeeName"] = self.requester_name
        else:
            out["hodName"] = self.requester_name
        out.update(
            {
                "hodId": self.hod_id,
                "department": self.department,
                "dateOfRequest": _fmt(self.date_of_request),
                "travelDate": _fmt(self.travel_date),
                "returnDate": _fmt(self.return_date),
                "origin": self.origin,
                "destination": self.destination,
                "purpose": self.purpose,
                "modeOfTravel": self.mode_of_travel,
                "remarks": self.remarks,
                "status": self.status.value,
                "decision": self.decision.value if self.decision else None,
                "decidedBy": self.decided_by,
                "extra": dict(self.extra),
            }
        )
        return out

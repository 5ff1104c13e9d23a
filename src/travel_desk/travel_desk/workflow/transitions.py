"""Travel request state machine.

pending -> approved
pending -> rejected

approved and rejected are terminal.
"""
from __future__ import annotations

from typing import Any

from ..core.enums import RequestKind, RequestStatus, Role
from ..core.exceptions import InvalidTransitionError, ValidationError

ALLOWED_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.PENDING: frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED}),
    RequestStatus.APPROVED: frozenset(),
    RequestStatus.REJECTED: frozenset(),
}

# Who decides, and who submits, each kind.
APPROVER_ROLE = {
    RequestKind.EMPLOYEE_TO_HOD: Role.HOD,
    RequestKind.HOD_TO_ADMIN: Role.ADMIN,
}

CREATOR_ROLE = {
    RequestKind.DRIVER_BOOKING: Role.HOD,
    RequestKind.EMPLOYEE_TO_HOD: Role.EMPLOYEE,
    RequestKind.HOD_TO_ADMIN: Role.HOD,
}

DECISIONS = frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED})


def parse_decision(value: Any) -> RequestStatus:
    text = str(value or "").strip().lower()
    try:
        decision = RequestStatus(text)
    except ValueError:
        raise ValidationError("Decision must be 'approved' or 'rejected'")
    if decision not in DECISIONS:
        raise ValidationError("Decision must be 'approved' or 'rejected'")
    return decision


def can_transition(current: RequestStatus, target: RequestStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def transition(current: RequestStatus, target: RequestStatus) -> RequestStatus:
    if not can_transition(current, target):
        raise InvalidTransitionError(f"Request is already {current.value}; cannot change it to {target.value}")
    return target

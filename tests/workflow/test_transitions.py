from __future__ import annotations

import pytest

from src.travel_desk.travel_desk.core.enums import RequestStatus
from src.travel_desk.travel_desk.core.exceptions import InvalidTransitionError, ValidationError
from src.travel_desk.travel_desk.workflow.transitions import parse_decision, transition


@pytest.mark.parametrize("target", [RequestStatus.APPROVED, RequestStatus.REJECTED])
def test_pending_can_be_decided(target):
    assert transition(RequestStatus.PENDING, target) == target


@pytest.mark.parametrize(
    "current,target",
    [
        (RequestStatus.APPROVED, RequestStatus.REJECTED),
        (RequestStatus.REJECTED, RequestStatus.APPROVED),
        (RequestStatus.APPROVED, RequestStatus.APPROVED),
        (RequestStatus.PENDING, RequestStatus.PENDING),
    ],
)
def test_other_edges_are_invalid(current, target):
    with pytest.raises(InvalidTransitionError):
        transition(current, target)


def test_parse_decision_normalises_case():
    assert parse_decision(" Approved ") == RequestStatus.APPROVED


@pytest.mark.parametrize("value", ["pending", "", None, "ok"])
def test_parse_decision_rejects_non_decisions(value):
    with pytest.raises(ValidationError):
        parse_decision(value)

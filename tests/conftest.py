from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest

from src.travel_desk.travel_desk.bookings.model import DriverBooking, NewDriverBooking
from src.travel_desk.travel_desk.common.datetime_utils import DateRange
from src.travel_desk.travel_desk.container import wire
from src.travel_desk.travel_desk.core.enums import RequestKind, RequestStatus, Role
from src.travel_desk.travel_desk.travel_requests.model import NewTravelRequest, TravelRequest
from src.travel_desk.travel_desk.users.model import User
from src.travel_desk.travel_desk.workflow.service import WorkflowService

NOW = datetime(2026, 10, 19, 9, 30, 0)


class InMemoryUsers:
    def __init__(self):
        self._next_id = 1
        self._by_id: dict[int, User] = {}

    def get_by_user_id(self, user_id):
        for u in self._by_id.values():
            if u.user_id == user_id:
                return u
        return None

    def create_user(self, *, user_id, name, role, department, password_hash):
        new_id = self._next_id
        self._next_id += 1
        self._by_id[new_id] = User(
            id=new_id,
            user_id=user_id,
            name=name,
            role=role,
            department=department,
            password_hash=password_hash,
        )
        return new_id

    def list_by_role(self, role=None):
        return [u for u in self._by_id.values() if role is None or u.role == role]


class InMemoryBookings:
    def __init__(self):
        self._next_id = 1
        self._rows: dict[int, DriverBooking] = {}
        self.update_calls = 0

    def create(self, booking: NewDriverBooking) -> int:
        bid = self._next_id
        self._next_id += 1
        self._rows[bid] = DriverBooking(
            booking_id=bid,
            driver_id=booking.driver_id,
            date=booking.date,
            passenger_name=booking.passenger_name,
            pickup_location=booking.pickup_location,
            drop_location=booking.drop_location,
            pickup_time=booking.pickup_time,
            purpose=booking.purpose,
            distance_traveled=booking.distance_traveled,
            toll_usage=booking.toll_usage,
            created_by=booking.created_by,
            extra=dict(booking.extra),
            created_at=NOW,
        )
        return bid

    def get(self, booking_id) -> Optional[DriverBooking]:
        return self._rows.get(int(booking_id))

    def list(self, *, driver_id=None, date_range: Optional[DateRange] = None, limit=500):
        out = [
            b
            for b in self._rows.values()
            if (driver_id is None or b.driver_id == driver_id) and (date_range is None or b.date in date_range)
        ]
        return out[:limit]

    def update_trip(self, booking_id, *, distance_traveled, toll_usage):
        self.update_calls += 1
        b = self._rows.get(int(booking_id))
        if not b:
            return False
        changes = {}
        if distance_traveled is not None:
            changes["distance_traveled"] = distance_traveled
        if toll_usage is not None:
            changes["toll_usage"] = toll_usage
        self._rows[b.booking_id] = replace(b, **changes)
        return True


class InMemoryTravelRequests:
    def __init__(self):
        self._next_id = 1
        self._rows: dict[tuple[RequestKind, int], TravelRequest] = {}
        self.decide_calls: list[dict] = []

    def create(self, request: NewTravelRequest) -> int:
        rid = self._next_id
        self._next_id += 1
        self._rows[(request.kind, rid)] = TravelRequest(
            kind=request.kind,
            request_id=rid,
            requester_id=request.requester_id,
            approver_id=request.approver_id,
            requester_name=request.requester_name,
            department=request.department,
            date_of_request=request.date_of_request,
            travel_date=request.travel_date,
            return_date=request.return_date,
            origin=request.origin,
            destination=request.destination,
            purpose=request.purpose,
            mode_of_travel=request.mode_of_travel,
            remarks=request.remarks,
            status=RequestStatus.PENDING,
            extra=dict(request.extra),
            created_at=NOW,
        )
        return rid

    def get(self, kind, request_id):
        return self._rows.get((kind, int(request_id)))

    def list(self, kind, *, requester_id=None, approver_id=None, status=None, date_range=None, limit=500):
        out = []
        for (k, _), r in self._rows.items():
            if k != kind:
                continue
            if requester_id is not None and r.requester_id != requester_id:
                continue
            if approver_id is not None and (kind != RequestKind.EMPLOYEE_TO_HOD or r.approver_id != approver_id):
                continue
            if status is not None and r.status != status:
                continue
            if date_range is not None and r.date_of_request not in date_range:
                continue
            out.append(r)
        return out[:limit]

    def decide(self, kind, *, request_id, status, decided_by, expected=RequestStatus.PENDING):
        self.decide_calls.append({"kind": kind, "request_id": int(request_id), "status": status})
        r = self._rows.get((kind, int(request_id)))
        if not r or r.status != expected:
            return False
        self._rows[(kind, int(request_id))] = replace(
            r, status=status, decision=status, decided_by=decided_by, decided_at=NOW
        )
        return True


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def users_repo():
    return InMemoryUsers()


@pytest.fixture
def bookings_repo():
    return InMemoryBookings()


@pytest.fixture
def requests_repo():
    return InMemoryTravelRequests()


@pytest.fixture
def workflow(requests_repo, bookings_repo, clock):
    return WorkflowService(requests_repo, bookings_repo, clock=clock)


@pytest.fixture
def container(users_repo, bookings_repo, requests_repo, clock):
    return wire(
        users_repo=users_repo,
        bookings_repo=bookings_repo,
        travel_requests_repo=requests_repo,
        clock=clock,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.travel_desk.travel_desk.main import create_app

    app = create_app(container)
    for user_id, name, role in (
        ("h1", "Demo HOD", Role.HOD),
        ("h2", "Other HOD", Role.HOD),
        ("e1", "Demo Employee", Role.EMPLOYEE),
        ("d1", "Demo Driver", Role.DRIVER),
    ):
        container.user_service.create_account(user_id=user_id, name=name, password="p", role=role, department="Ops")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user_id: str, password: str = "p"):
        client.get("/logout")
        return client.post("/api/login", data={"userId": user_id, "password": password})

    return _login

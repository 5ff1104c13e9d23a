from __future__ import annotations

from datetime import date
from urllib.parse import urlparse

import pytest

from src.travel_desk.travel_desk.bookings.model import NewDriverBooking
from src.travel_desk.travel_desk.core.enums import RequestKind, RequestStatus
from src.travel_desk.travel_desk.core.exceptions import StoreFailure

TODAY = date(2026, 10, 19)
TODAY_S = TODAY.isoformat()

DASHBOARDS = {
    "/admin/dashboard": "admin",
    "/hod/dashboard": "hod",
    "/employee/dashboard": "employee",
    "/driver/dashboard": "driver",
}

ACCOUNTS = {"admin": ("admin", "123"), "hod": ("h1", "p"), "employee": ("e1", "p"), "driver": ("d1", "p")}


def _path(resp) -> str:
    return urlparse(resp.headers["Location"]).path


def _submit_emp_trf(client, **overrides):
    body = {"employeeCode": "e1", "hodId": "h1", "dateOfRequest": TODAY_S}
    body.update(overrides)
    return client.post("/api/EMP/HOD/TRF", json=body)


@pytest.mark.parametrize("path", sorted(DASHBOARDS))
def test_anonymous_dashboard_redirects_to_landing(client, path):
    resp = client.get(path)
    assert resp.status_code == 302
    assert _path(resp) == "/"


@pytest.mark.parametrize(
    "path,role",
    [(p, r) for p, required in DASHBOARDS.items() for r in ACCOUNTS if r != required],
)
def test_wrong_role_dashboard_redirects_to_landing(client, login, path, role):
    login(*ACCOUNTS[role])
    resp = client.get(path)
    assert resp.status_code == 302
    assert _path(resp) == "/"


@pytest.mark.parametrize("role", sorted(ACCOUNTS))
def test_login_redirects_to_role_dashboard(client, login, role):
    resp = login(*ACCOUNTS[role])
    assert resp.status_code == 302
    assert _path(resp) == f"/{role}/dashboard"
    assert client.get(_path(resp)).status_code == 200


def test_login_accepts_json(client):
    resp = client.post("/api/login", json={"userId": "e1", "password": "p"})
    assert resp.status_code == 302
    assert _path(resp) == "/employee/dashboard"


def test_bad_credentials_are_401(client, login):
    assert login("e1", "nope").status_code == 401
    assert client.get("/employee/dashboard").status_code == 302


@pytest.mark.parametrize("body", [{"userId": 123, "password": "p"}, ["e1", "p"], "e1"])
def test_malformed_login_body_is_401(client, body):
    resp = client.post("/api/login", json=body)
    assert resp.status_code == 401
    assert client.get("/employee/dashboard").status_code == 302


def test_employee_request_reaches_hod_dashboard(client, login, requests_repo):
    login("e1", "p")
    resp = _submit_emp_trf(client)
    assert resp.status_code == 201
    form = resp.get_json()["form"]
    assert form["status"] == "pending"
    assert form["employeeCode"] == "e1"

    login("h1", "p")
    page = client.get("/hod/dashboard")
    assert page.status_code == 200
    assert f"/hod/decision/{form['id']}".encode() in page.data

    received = requests_repo.list(RequestKind.EMPLOYEE_TO_HOD, approver_id="h1", status=RequestStatus.PENDING)
    assert [r.request_id for r in received] == [form["id"]]


def test_employee_cannot_submit_for_someone_else(client, login):
    login("e1", "p")
    resp = _submit_emp_trf(client, employeeCode="e9")
    assert resp.status_code == 403


def test_missing_hod_is_400(client, login):
    login("e1", "p")
    resp = client.post("/api/EMP/HOD/TRF", json={"employeeCode": "e1"})
    assert resp.status_code == 400


def test_malformed_request_date_is_400(client, login, requests_repo):
    login("e1", "p")
    resp = _submit_emp_trf(client, dateOfRequest="2026-10-19garbage")
    assert resp.status_code == 400
    assert requests_repo.list(RequestKind.EMPLOYEE_TO_HOD) == []


def test_api_decision_then_redecision_conflicts(client, login):
    login("e1", "p")
    rid = _submit_emp_trf(client).get_json()["form"]["id"]

    login("h1", "p")
    resp = client.post(f"/api/EMP/HOD/TRF/{rid}/decision", json={"decision": "approved"})
    assert resp.status_code == 200
    form = resp.get_json()["form"]
    assert form["decision"] == form["status"] == "approved"

    again = client.post(f"/api/EMP/HOD/TRF/{rid}/decision", json={"decision": "rejected"})
    assert again.status_code == 409


def test_api_decision_on_missing_request_is_404(client, login, requests_repo):
    login("h1", "p")
    resp = client.post("/api/EMP/HOD/TRF/12345/decision", json={"decision": "approved"})
    assert resp.status_code == 404
    assert requests_repo.decide_calls == []


def test_form_decision_redirects_to_dashboard(client, login, requests_repo):
    login("e1", "p")
    rid = _submit_emp_trf(client).get_json()["form"]["id"]

    login("h1", "p")
    resp = client.post(f"/hod/decision/{rid}", data={"decision": "rejected"})
    assert resp.status_code == 302
    assert _path(resp) == "/hod/dashboard"
    assert requests_repo.get(RequestKind.EMPLOYEE_TO_HOD, rid).status == RequestStatus.REJECTED

    assert client.post("/hod/decision/999", data={"decision": "approved"}).status_code == 404


def test_employee_cannot_decide(client, login):
    login("e1", "p")
    rid = _submit_emp_trf(client).get_json()["form"]["id"]
    resp = client.post(f"/hod/decision/{rid}", data={"decision": "approved"})
    assert resp.status_code == 302
    assert _path(resp) == "/"


def test_hod_request_is_decided_by_admin(client, login):
    login("h1", "p")
    resp = client.post("/api/HOD/ADMIN/TRF", json={"destination": "Delhi"})
    assert resp.status_code == 201
    rid = resp.get_json()["form"]["id"]
    assert resp.get_json()["form"]["hodId"] == "h1"

    login("admin", "123")
    page = client.get("/admin/dashboard")
    assert b"Delhi" in page.data

    resp = client.post(f"/admin/decision/{rid}", data={"decision": "approved"})
    assert _path(resp) == "/admin/dashboard"
    assert b"Delhi" in client.get("/admin/hodtrfs").data

    api = client.post(f"/api/HOD/TRF/{rid}/decision", json={"decision": "rejected"})
    assert api.status_code == 409


def test_hod_dashboard_date_filter(client, login):
    login("h1", "p")
    client.post("/api/HOD/ADMIN/TRF", json={"destination": "Mysore", "dateOfRequest": "2026-10-01"})

    assert b"Mysore" not in client.get("/hod/dashboard").data
    page = client.get("/hod/dashboard?startDate=2026-10-01&endDate=2026-10-02")
    assert b"Mysore" in page.data


def test_rejected_date_filter_shows_applied_range(client, login):
    login("h1", "p")
    page = client.get("/hod/dashboard?startDate=2026-10-05&endDate=2026-10-01")
    assert page.status_code == 200
    assert b"End date must not be before start date" in page.data
    assert f'value="{TODAY_S}"'.encode() in page.data
    assert b"2026-10-05" not in page.data


def test_driver_updates_own_booking(client, login, bookings_repo):
    bid = bookings_repo.create(NewDriverBooking(driver_id="d1", date=TODAY))

    login("d1", "p")
    resp = client.post(
        "/api/driver/updateBooking",
        data={"bookingId": str(bid), "distanceTraveled": "12.5", "tollUsage": "1"},
    )
    assert resp.status_code == 200
    assert bookings_repo.get(bid).distance_traveled == 12.5

    missing = client.post("/api/driver/updateBooking", data={"bookingId": "999", "distanceTraveled": "1"})
    assert missing.status_code == 404


def test_update_booking_with_bad_id_is_400(client, login):
    login("d1", "p")
    resp = client.post("/api/driver/updateBooking", data={"bookingId": "abc", "distanceTraveled": "1"})
    assert resp.status_code == 400


def test_update_booking_does_not_hide_store_errors(client, login, bookings_repo, monkeypatch):
    bid = bookings_repo.create(NewDriverBooking(driver_id="d1", date=TODAY))

    def corrupt(*args, **kwargs):
        raise ValueError("Expecting value: line 1 column 1")

    monkeypatch.setattr(bookings_repo, "get", corrupt)
    login("d1", "p")
    with pytest.raises(ValueError):
        client.post("/api/driver/updateBooking", data={"bookingId": str(bid), "distanceTraveled": "1"})


def test_hod_creates_booking_visible_to_driver(client, login):
    login("h1", "p")
    resp = client.post("/api/users/hod/bookings", json={"driverId": "d1", "date": TODAY_S, "passengerName": "Asha"})
    assert resp.status_code == 201

    login("d1", "p")
    assert b"Asha" in client.get("/driver/dashboard").data
    assert b"Asha" in client.get("/driver/history").data


def test_store_failure_is_a_generic_500(client, login, requests_repo, monkeypatch):
    def broken(*args, **kwargs):
        raise StoreFailure("connection refused by db-01:3306")

    monkeypatch.setattr(requests_repo, "create", broken)
    login("e1", "p")
    resp = _submit_emp_trf(client)
    assert resp.status_code == 500
    assert b"db-01" not in resp.data


def test_dashboard_degrades_to_empty_on_store_failure(client, login, requests_repo, monkeypatch):
    def broken(*args, **kwargs):
        raise StoreFailure("down")

    monkeypatch.setattr(requests_repo, "list", broken)
    login("h1", "p")
    resp = client.get("/hod/dashboard")
    assert resp.status_code == 200
    assert b"Could not load dashboard data" in resp.data


def test_admin_provisions_users(client, login, users_repo):
    login("admin", "123")
    resp = client.post(
        "/admin/users",
        data={"userId": "d2", "name": "Second Driver", "password": "p", "role": "driver", "department": "Transport"},
    )
    assert resp.status_code == 302
    assert users_repo.get_by_user_id("d2").role.value == "driver"

import io
from datetime import datetime

import pytest

from src.hrms.hrms.attendance import service as attendance_service_module
from src.hrms.hrms.attendance.model import GeoPoint
from src.hrms.hrms.main import create_app, status_for
from src.hrms.hrms.core.exceptions import (
    AlreadyCheckedInError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    OutOfRangeError,
    WeeklyOffError,
)

MONDAY_MORNING = datetime(2025, 1, 6, 9, 15, 0)


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(attendance_service_module, "now_local", lambda: MONDAY_MORNING)
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


def _login_as(client, user_id: int, role: str = "employee", organization_id: int = 1):
    with client.session_transaction() as s:
        s["user_id"] = user_id
        s["organization_id"] = organization_id
        s["role"] = role


def test_error_status_mapping():
    assert status_for(OutOfRangeError(142, 100)) == 400
    assert status_for(WeeklyOffError()) == 400
    assert status_for(AuthorizationError("x")) == 403
    assert status_for(NotFoundError("x")) == 404
    assert status_for(AlreadyCheckedInError()) == 409
    assert status_for(ConflictError("x")) == 409


def test_login_and_logout(client):
    res = client.post("/auth/login", json={"email": "alice@example.com", "password": "password123"})
    assert res.status_code == 200
    assert res.get_json()["user"]["role"] == "employee"

    me = client.get("/users/me")
    assert me.status_code == 200
    assert me.get_json()["data"]["employeeId"] == "EMP002"

    client.post("/auth/logout")
    assert client.get("/users/me").status_code == 401


def test_login_with_bad_password(client):
    res = client.post("/auth/login", json={"email": "alice@example.com", "password": "nope"})
    assert res.status_code == 401
    assert res.get_json() == {"success": False, "message": "Invalid email or password"}


def test_request_id_is_echoed(client):
    res = client.post("/auth/logout", headers={"X-Request-ID": "req-123"})
    assert res.headers["X-Request-ID"] == "req-123"


def test_check_in_and_out_flow(client, monkeypatch, repos):
    _login_as(client, 2)

    res = client.post(
        "/attendance/check-in",
        data={
            "latitude": "12.9716",
            "longitude": "77.5946",
            "address": "MG Road",
            "selfie": (io.BytesIO(b"fake-jpeg"), "me.jpg", "image/jpeg"),
        },
        content_type="multipart/form-data",
    )
    assert res.status_code == 201
    body = res.get_json()["data"]
    assert body["attendanceStatus"] == "on-time"
    assert body["checkInSelfie"] == "/uploads/selfies/selfie_2_1.jpg"
    assert repos.selfies.calls[0][1].data == b"fake-jpeg"

    dup = client.post("/attendance/check-in", data={"latitude": "12.9716", "longitude": "77.5946"})
    assert dup.status_code == 409

    monkeypatch.setattr(attendance_service_module, "now_local", lambda: MONDAY_MORNING.replace(hour=18, minute=0))
    out = client.post("/attendance/check-out", json={"latitude": 12.9716, "longitude": 77.5946})
    assert out.status_code == 200
    assert out.get_json()["data"]["totalHours"] == 8.75


def test_check_in_out_of_range(client):
    _login_as(client, 2)

    res = client.post("/attendance/check-in", data={"latitude": "12.97288", "longitude": "77.5946"})

    assert res.status_code == 400
    assert "your distance: 142m, allowed: 100m" in res.get_json()["message"]


def test_check_in_requires_coordinates(client):
    _login_as(client, 2)

    assert client.post("/attendance/check-in", data={"latitude": "12.9716"}).status_code == 400
    assert client.post("/attendance/check-in", data={"latitude": "abc", "longitude": "1"}).status_code == 400


def test_check_in_requires_login(client):
    assert client.post("/attendance/check-in", data={"latitude": "1", "longitude": "1"}).status_code == 401


def test_employee_only_sees_own_records(client, container):
    container.attendance_service.check_in(
        3, 1, GeoPoint(0.0, 0.0), now=MONDAY_MORNING
    )
    _login_as(client, 2)
    client.post("/attendance/check-in", data={"latitude": "12.9716", "longitude": "77.5946"})

    res = client.get("/attendance?userId=3")
    assert res.status_code == 200
    assert [r["userId"] for r in res.get_json()["data"]] == [2]

    _login_as(client, 1, role="admin")
    res = client.get("/attendance?userId=3")
    assert [r["userId"] for r in res.get_json()["data"]] == [3]
    assert len(client.get("/attendance").get_json()["data"]) == 2


def test_attendance_list_rejects_bad_dates(client):
    _login_as(client, 1, role="admin")

    assert client.get("/attendance?startDate=06-01-2025").status_code == 400
    assert client.get("/attendance?startDate=2025-01-08&endDate=2025-01-01").status_code == 400


def test_export_csv(client):
    _login_as(client, 2)
    client.post("/attendance/check-in", data={"latitude": "12.9716", "longitude": "77.5946"})

    res = client.get("/attendance/export?startDate=2025-01-01&endDate=2025-01-31")

    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    assert "attendance_20250101_20250131.csv" in res.headers["Content-Disposition"]
    text = res.data.decode("utf-8-sig")
    assert text.splitlines()[0].startswith("date,employee_id,full_name")
    assert "2025-01-06" in text


def test_admin_only_endpoints(client):
    _login_as(client, 2)

    assert client.get("/users").status_code == 403
    assert client.get("/dashboard").status_code == 403
    assert client.get("/attendance/map-locations").status_code == 403
    assert client.post("/shift", json={}).status_code == 403


def test_shift_endpoints(client):
    _login_as(client, 1, role="admin")

    res = client.post(
        "/shift",
        json={"name": "Early", "startTime": "07:00", "endTime": "15:00", "lateTime": "07:10", "days": [0, 1, 1, 1, 1, 1, 1]},
    )
    assert res.status_code == 201
    shift_id = res.get_json()["data"]["id"]

    listed = client.get("/shift").get_json()["data"]
    assert listed[0]["id"] == "default"
    assert listed[1]["name"] == "Early"

    assert client.post("/shift/assign", json={"userId": 2, "shiftId": shift_id}).status_code == 200
    assert client.delete(f"/shift/{shift_id}").status_code == 400
    assert client.delete("/shift/default").status_code == 400

    _login_as(client, 2)
    assert client.get("/shift/me").get_json()["data"]["name"] == "Early"

    _login_as(client, 1, role="admin")
    assert client.delete("/shift/assign/2").status_code == 200
    assert client.delete(f"/shift/{shift_id}").status_code == 200
    assert client.get(f"/shift/{shift_id}").status_code == 404


def test_user_management_endpoints(client):
    _login_as(client, 1, role="admin")

    res = client.post("/users", json={"email": "eve@example.com", "firstName": "Eve", "lastName": "Pham"})
    assert res.status_code == 201
    new_id = res.get_json()["data"]["id"]

    dup = client.post("/users", json={"email": "eve@example.com", "firstName": "Eve", "lastName": "Pham"})
    assert dup.status_code == 409

    assert client.patch(f"/users/{new_id}/remote", json={"remote": True}).get_json()["data"]["remote"] is True
    assert client.patch(f"/users/{new_id}/status", json={"status": "inactive"}).get_json()["data"]["status"] == "inactive"
    assert client.patch(f"/users/{new_id}/status", json={"status": "gone"}).status_code == 400
    assert client.patch("/users/4/remote", json={"remote": True}).status_code == 403


def test_organization_and_dashboard(client):
    _login_as(client, 1, role="admin")

    res = client.put("/organization/office-location", json={"latitude": 10.77, "longitude": 106.7, "radius": 50})
    assert res.status_code == 200
    assert res.get_json()["data"]["officeLocation"]["radius"] == 50.0

    org = client.get("/organization").get_json()["data"]
    assert org["companyName"] == "Acme"

    dash = client.get("/dashboard")
    assert dash.status_code == 200
    assert dash.get_json()["data"]["users"]["total"] == 3


def test_numeric_shift_time_is_bad_request(client):
    _login_as(client, 1, role="admin")

    res = client.post(
        "/shift",
        json={"name": "Odd", "startTime": 900, "endTime": "17:00", "lateTime": "09:30", "days": [0, 1, 1, 1, 1, 1, 0]},
    )

    assert res.status_code == 400
    assert res.get_json()["success"] is False

from __future__ import annotations

import importlib

import pytest

from src.care_clock.care_clock.container import wire_container
from src.care_clock.care_clock.main import create_app

INSIDE = {"latitude": 40.7128, "longitude": -74.0042}
OUTSIDE = {"latitude": 40.7128, "longitude": -73.9960}


@pytest.fixture
def client(employees_repo, facilities_repo, entries_repo, signups_repo):
    settings = importlib.import_module("config.testing")
    container = wire_container(
        employees_repo=employees_repo,
        facilities_repo=facilities_repo,
        time_entries_repo=entries_repo,
        signups_repo=signups_repo,
        settings=settings,
    )
    app = create_app(container, settings_module="config.testing")
    return app.test_client()


def test_clock_in_inside_perimeter_then_status(client):
    resp = client.post("/api/time-entries", json={"employeeId": "EMP001", "type": "CLOCK_IN", **INSIDE})
    assert resp.status_code == 200
    assert resp.get_json()["timeEntry"]["type"] == "CLOCK_IN"

    status = client.get("/api/time-entries/status?employeeId=EMP001").get_json()["clockStatus"]
    assert status["status"] == "ON_DUTY"
    assert status["isClockedIn"] is True


def test_clock_in_outside_perimeter_is_forbidden(client, entries_repo):
    resp = client.post("/api/time-entries", json={"employeeId": "EMP001", "type": "CLOCK_IN", **OUTSIDE})

    body = resp.get_json()
    assert resp.status_code == 403
    assert body["success"] is False
    assert body["code"] == "OUTSIDE_PERIMETER"
    assert body["distanceMeters"] > 200
    assert entries_repo.events == []


def test_time_entry_validation_errors(client):
    assert client.post("/api/time-entries", json={"employeeId": "EMP001"}).status_code == 400
    assert client.post("/api/time-entries", json={"employeeId": "NOPE", "type": "CLOCK_IN", **INSIDE}).status_code == 404
    assert client.post("/api/time-entries", json={"employeeId": "EMP001", "type": "CLOCK_OUT"}).status_code == 400


def test_history_and_shifts(client):
    client.post("/api/time-entries", json={"employeeId": "EMP001", "type": "CLOCK_IN", **INSIDE})
    client.post("/api/time-entries", json={"employeeId": "EMP001", "type": "CLOCK_OUT"})

    history = client.get("/api/time-entries?employeeId=EMP001").get_json()
    assert sorted(e["type"] for e in history["timeEntries"]) == ["CLOCK_IN", "CLOCK_OUT"]

    shifts = client.get("/api/time-entries/shifts?employeeId=EMP001").get_json()
    assert len(shifts["shifts"]) == 1
    assert shifts["anomalies"] == []
    assert shifts["openClockIn"] is None


def test_facility_settings_roundtrip(client):
    body = client.get("/api/facility-settings").get_json()
    assert body["facility"]["name"] == "Riverside Care Home"

    resp = client.put(
        "/api/facility-settings",
        json={"latitude": 40.7128, "longitude": -73.9960, "radius": 500, "facilityName": "Harbor House"},
    )
    assert resp.status_code == 200
    assert resp.get_json()["facility"]["name"] == "Harbor House"

    distance = client.get("/api/facility-settings/distance?latitude=40.7128&longitude=-74.0060").get_json()
    assert distance["withinPerimeter"] is False

    assert client.put("/api/facility-settings", json={"latitude": 91, "longitude": 0, "radius": 100}).status_code == 400


def test_employee_crud(client):
    resp = client.post(
        "/api/employees",
        json={"name": "Cy Okafor", "email": "CY@example.com", "password": "secret1", "department": "Kitchen"},
    )
    assert resp.status_code == 201
    created = resp.get_json()["employee"]
    assert "password" not in created and "passwordHash" not in created

    code = created["employeeId"]
    assert client.get(f"/api/employees/{code}").status_code == 200
    assert client.put(f"/api/employees/{code}", json={"position": "Cook"}).get_json()["employee"]["position"] == "Cook"
    assert client.delete(f"/api/employees/{code}").status_code == 200
    assert client.get(f"/api/employees/{code}").status_code == 404

    duplicate = client.post(
        "/api/employees", json={"name": "Ada", "email": "emp001@example.com", "password": "secret1"}
    )
    assert duplicate.status_code == 409


def test_signup_flow(client):
    resp = client.post(
        "/api/signup-requests",
        json={"name": "Dana Reyes", "email": "dana@example.com", "phone": "555-0100", "experience": "3 years"},
    )
    request_id = resp.get_json()["requestId"]

    listed = client.get("/api/signup-requests?status=PENDING").get_json()
    assert listed["count"] == 1

    decided = client.put(f"/api/signup-requests/{request_id}/status", json={"status": "APPROVED"}).get_json()
    assert decided["signupRequest"]["status"] == "APPROVED"
    assert decided["signupRequest"]["employeeId"].startswith("EMP")

    again = client.put(f"/api/signup-requests/{request_id}/status", json={"status": "REJECTED"})
    assert again.status_code == 400


def test_analytics_overall_and_employee(client):
    client.post("/api/time-entries", json={"employeeId": "EMP002", "type": "CLOCK_IN", **INSIDE})

    overall = client.get("/api/analytics").get_json()["data"]
    assert overall["realTimeStatus"]["activeStaff"] == 1
    assert overall["overallStats"]["totalClockIns"] == 1

    employee = client.get("/api/analytics?employeeId=EMP002").get_json()["data"]
    assert employee["clockStatus"]["status"] == "ON_DUTY"
    assert employee["employeeStats"]["clockIns"] == 1


def test_time_entries_without_employee_lists_all_staff(client):
    client.post("/api/time-entries", json={"employeeId": "EMP001", "type": "CLOCK_IN", **INSIDE})
    client.post("/api/time-entries", json={"employeeId": "EMP002", "type": "CLOCK_IN", **INSIDE})

    body = client.get("/api/time-entries").get_json()

    assert body["success"] is True
    assert body["count"] == 2
    assert sorted(e["employeeId"] for e in body["timeEntries"]) == ["EMP001", "EMP002"]
    assert {e["staffName"] for e in body["timeEntries"]} == {"Ada Lovelace", "Bo Chen"}

    future = client.get("/api/time-entries?startDate=2999-01-01").get_json()
    assert future["count"] == 0

from __future__ import annotations

import pytest

from attendance_engine.main import create_app


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


def test_list_employees_and_departments(client):
    employees = client.get("/api/employees").get_json()
    assert [e["employee_id"] for e in employees] == [1, 2, 3, 4, 5]

    departments = client.get("/api/departments").get_json()
    assert {d["name"] for d in departments} == {"Operations", "Unassigned"}


def test_classify_endpoint(client):
    resp = client.post(
        "/api/attendance/classify",
        json={
            "check_in_time": "2025-01-06T09:20:00",
            "check_out_time": "2025-01-06T17:00:00",
            "expected_work_hours": 8,
            "schedule_start": "2025-01-06T09:00:00",
            "schedule_end": "2025-01-06T17:00:00",
            "flex_allowance_minutes": 15,
        },
    )
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["data"]["attendance_code"] == "L"
    assert body["data"]["late_minutes"] == 5
    assert body["data"]["display_status"] == "Late"
    assert body["data"]["work_duration_minutes"] == 460


def test_classify_endpoint_rejects_reversed_times(client):
    resp = client.post(
        "/api/attendance/classify",
        json={"check_in_time": "2025-01-06T17:00:00", "check_out_time": "2025-01-06T09:00:00", "is_flexible_schedule": True},
    )
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_record_day_and_history(client):
    resp = client.put(
        "/api/employees/1/attendance/2025-01-06",
        json={"check_in_time": "2025-01-06T09:00:00", "check_out_time": "2025-01-06T17:00:00"},
    )
    assert resp.status_code == 200
    assert resp.get_json()["data"]["attendance_code"] == "P"

    history = client.get("/api/employees/1/attendance?limit=5").get_json()["data"]
    assert history[0]["date"] == "2025-01-06"


def test_record_day_without_schedule_is_unprocessable(client):
    resp = client.put("/api/employees/4/attendance/2025-01-06", json={})
    assert resp.status_code == 422


def test_record_day_bad_date(client):
    assert client.put("/api/employees/1/attendance/06-01-2025", json={}).status_code == 400


def test_check_out_without_check_in(client):
    assert client.post("/api/employees/1/check-out").status_code == 400


def test_expected_hours_endpoint(client):
    body = client.get("/api/employees/1/expected-hours?date=2025-01-11").get_json()
    assert body["data"]["expected_work_hours"] == 0.0
    assert client.get("/api/employees/999/expected-hours?date=2025-01-06").status_code == 404


def test_schedule_crud(client):
    resp = client.post(
        "/api/schedules",
        json={"name": "Evening", "start_time": "14:00", "end_time": "22:00", "working_days": "1111100"},
    )
    assert resp.status_code == 201
    schedule_id = resp.get_json()["data"]["schedule_id"]

    names = [s["name"] for s in client.get("/api/schedules").get_json()["data"]]
    assert "Evening" in names

    assert client.post(f"/api/schedules/{schedule_id}/assign", json={"employee_id": 4}).status_code == 200
    assert client.put("/api/employees/4/attendance/2025-01-06", json={}).get_json()["data"]["attendance_code"] == "A"

    assert client.delete(f"/api/schedules/{schedule_id}").status_code == 200
    assert client.delete(f"/api/schedules/{schedule_id}").status_code == 404


def test_schedule_invalid_payload(client):
    resp = client.post("/api/schedules", json={"name": "Broken", "start_time": "9am", "end_time": "17:00"})
    assert resp.status_code == 400


def test_calendar_endpoints(client):
    resp = client.post("/api/calendar", json={"date": "2025-01-07", "name": "Holiday", "entry_type": "Holiday"})
    assert resp.status_code == 201

    entries = client.get("/api/calendar?start=2025-01-01&end=2025-01-31").get_json()["data"]
    assert entries[0]["entry_type"] == "Holiday"

    assert client.post("/api/calendar", json={"date": "2025-01-07", "entry_type": "Party"}).status_code == 400


def test_statistics_and_report_endpoints(client):
    client.put(
        "/api/employees/1/attendance/2025-01-06",
        json={"check_in_time": "2025-01-06T09:30:00", "check_out_time": "2025-01-06T17:00:00"},
    )

    stats = client.get("/api/employees/1/statistics?start=2025-01-06&end=2025-01-10").get_json()["data"]
    assert stats == {
        "total_working_days": 5,
        "days_present": 1,
        "days_absent": 4,
        "late_arrivals": 1,
        "early_departures": 0,
    }

    report = client.get("/api/employees/1/report?start=2025-01-06&end=2025-01-07").get_json()["data"]
    assert report["summary"]["codes"] == {"A": 1, "L": 1}

    csv = client.get("/api/employees/1/report?start=2025-01-06&end=2025-01-07&format=csv")
    assert csv.status_code == 200
    assert csv.mimetype == "text/csv"
    assert client.get("/api/employees/1/report?start=2025-01-06&end=2025-01-07&format=pdf").status_code == 400


def test_record_day_rejects_offset_timestamps(client, repos):
    resp = client.put(
        "/api/employees/1/attendance/2025-01-06",
        json={"check_in_time": "2025-01-06T09:20:00+00:00", "check_out_time": "2025-01-06T17:00:00+00:00"},
    )
    assert resp.status_code == 400
    assert "UTC offset" in resp.get_json()["message"]
    assert repos.attendance.saves == 0


def test_classify_rejects_mixed_timestamp_formats(client):
    resp = client.post(
        "/api/attendance/classify",
        json={
            "check_in_time": "2025-01-06T09:00:00+02:00",
            "check_out_time": "2025-01-06T17:00:00",
            "is_flexible_schedule": True,
            "expected_work_hours": 8,
        },
    )
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_history_failure_returns_json_error(client, container, monkeypatch):
    def broken(employee_id, *, limit):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(container.attendance_service, "get_history_ui", broken)
    resp = client.get("/api/employees/1/attendance")

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "System error while loading attendance history"}


def test_attendance_window(client):
    body = client.get("/api/employees/1/attendance-window?date=2025-01-06").get_json()["data"]
    assert body["is_working_day"] is True
    assert body["latest_check_in"] == "2025-01-06T09:15:00"
    assert body["earliest_check_out"] == "2025-01-06T16:45:00"

    client.post("/api/calendar", json={"date": "2025-01-07", "name": "Holiday", "entry_type": "Holiday"})
    holiday = client.get("/api/employees/1/attendance-window?date=2025-01-07").get_json()["data"]
    assert holiday["is_working_day"] is False
    assert holiday["latest_check_in"] is None

    assert client.get("/api/employees/4/attendance-window?date=2025-01-06").status_code == 422
    assert client.get("/api/employees/999/attendance-window?date=2025-01-06").status_code == 404

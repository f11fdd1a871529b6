from __future__ import annotations

from datetime import timedelta

import pytest
from flask import Flask

from src.worktime.worktime.main import create_app, register_routes


@pytest.fixture
def client(container):
    app = Flask(__name__)
    app.config["TESTING"] = True
    register_routes(app, container)
    return app.test_client()


def test_checkin_checkout_flow(client, clock, fixed_now):
    res = client.post("/api/users/1/checkin")
    assert res.status_code == 201
    assert res.get_json()["session"]["check_out"] is None

    assert client.post("/api/users/1/checkin").status_code == 409

    clock.current = fixed_now + timedelta(minutes=45)
    res = client.post("/api/users/1/checkout")
    assert res.status_code == 200
    assert res.get_json()["session"]["total_worked_minutes"] == 45

    today = client.get("/api/users/1/today").get_json()
    assert today["elapsed_minutes"] == 45
    assert today["committed_minutes"] == 480


def test_manual_entry_validation(client):
    res = client.post(
        "/api/users/1/attendance",
        json={"date": "2024-06-10", "check_in": "17:00", "check_out": "09:00"},
    )
    assert res.status_code == 400
    assert res.get_json()["success"] is False

    res = client.post(
        "/api/users/1/attendance",
        json={"date": "2024-06-10", "check_in": "09:00", "check_out": "17:30"},
    )
    assert res.status_code == 201
    session_id = res.get_json()["session"]["session_id"]

    res = client.patch(f"/api/attendance/{session_id}", json={"check_out": "18:00"})
    assert res.get_json()["session"]["total_worked_minutes"] == 540

    assert client.delete(f"/api/attendance/{session_id}").status_code == 200
    assert client.delete(f"/api/attendance/{session_id}").status_code == 404


def test_settings_and_report(client):
    res = client.patch(
        "/api/users/1/settings",
        json={"weekly_off_days": ["Sunday"], "rounding_rule": "5", "committed_hours_per_day": 7.5},
    )
    user = res.get_json()["user"]
    assert user["weekly_off_days"] == ["Sunday"]
    assert user["rounding_rule"] == "5"
    assert user["committed_hours_per_day"] == 7.5

    res = client.get("/api/users/1/report?view=custom&start=2024-06-15&end=2024-06-16")
    body = res.get_json()
    assert res.status_code == 200
    assert body["summary"]["working_days"] == 1
    assert body["summary"]["off_days"] == 1
    assert body["text"]["short"] == "7h 30m"


def test_report_downloads(client):
    res = client.get("/api/users/1/report.csv?view=daily")
    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    assert "attendance_20240612_20240612.csv" in res.headers["Content-Disposition"]
    assert res.data.startswith(b"\xef\xbb\xbfDate,")

    res = client.get("/api/users/1/report.xlsx?view=weekly")
    assert res.status_code == 200
    assert res.data[:2] == b"PK"


def test_bad_input_and_unknown_user(client):
    assert client.get("/api/users/1/report?view=custom&start=bad").status_code == 400
    assert client.get("/api/users/99/settings").status_code == 404
    assert client.post("/api/users/1/holidays", json={"date": "2024-06-14", "title": "Off"}).status_code == 201
    assert client.post("/api/users/1/holidays", json={"date": "2024-06-14", "title": "Off"}).status_code == 400


def test_create_app_uses_testing_settings(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")

    app = create_app(container)

    assert app.config["TESTING"] is True
    assert app.secret_key == "test-secret"
    res = app.test_client().get("/api/users/1/settings")
    assert res.get_json()["user"]["weekly_off_days"] == ["Saturday", "Sunday"]


def test_rejected_settings_update_changes_nothing(client):
    res = client.patch(
        "/api/users/1/settings",
        json={"weekly_off_days": ["Friday"], "rounding_rule": "7"},
    )
    assert res.status_code == 400

    user = client.get("/api/users/1/settings").get_json()["user"]
    assert user["weekly_off_days"] == ["Saturday", "Sunday"]
    assert user["rounding_rule"] == "none"

    res = client.patch(
        "/api/users/1/settings",
        json={"weekly_off_days": ["Friday"], "committed_hours_per_day": 30},
    )
    assert res.status_code == 400
    assert client.get("/api/users/1/settings").get_json()["user"]["weekly_off_days"] == ["Saturday", "Sunday"]


@pytest.mark.parametrize("body", [["x"], "x", 3])
def test_non_object_json_body_is_a_bad_request(client, body):
    res = client.post("/api/users/1/attendance", json=body)
    assert res.status_code == 400
    assert res.get_json()["message"] == "JSON object expected"


def test_non_string_date_is_a_bad_request(client):
    res = client.post("/api/users/1/holidays", json={"date": 20240614, "title": "Off"})
    assert res.status_code == 400

from __future__ import annotations

import pytest

from smart_attendance import create_app


@pytest.fixture
def client():
    app = create_app("config.testing")
    return app.test_client()


def add_member(client, name: str) -> str:
    res = client.post("/api/roster", json={"name": name})
    assert res.status_code == 201
    return res.get_json()["person"]["person_id"]


def test_scan_dashboard_and_override_flow(client):
    alice = add_member(client, "Alice")
    bob = add_member(client, "Bob")

    res = client.post(
        "/api/sessions",
        json={
            "date": "2024-03-01",
            "image_ref": "scan.jpg",
            "proposals": [{"person_id": alice, "present": True, "confidence": 90}],
            "adjustments": {bob: "late"},
        },
    )
    assert res.status_code == 201

    summary = client.get("/api/dashboard?date=2024-03-01").get_json()["summary"]
    assert (summary["present"], summary["late"], summary["absent"], summary["total"]) == (1, 1, 0, 2)

    res = client.post("/api/overrides", json={"person_id": bob, "date": "2024-03-01", "status": "present"})
    assert res.status_code == 200

    body = client.get("/api/dashboard?date=2024-03-01").get_json()
    assert body["summary"]["present"] == 2
    assert {m["name"] for m in body["members"]["present"]} == {"Alice", "Bob"}


def test_month_report_and_csv_download(client):
    alice = add_member(client, "Doe, Jane")
    client.post("/api/overrides/toggle", json={"person_id": alice, "date": "2024-02-29"})

    body = client.get("/api/months/2024-02").get_json()
    assert len(body["days"]) == 29
    assert body["rows"][0]["statuses"][-1] == "present"

    res = client.get("/reports/summary/2024-02.csv")
    assert res.status_code == 200
    assert "attendance-summary-2024-02.csv" in res.headers["Content-Disposition"]
    assert '"Doe, Jane",1,0,0,1' in res.get_data(as_text=True)


def test_errors_are_reported_as_json(client):
    res = client.get("/api/months/2024-13")
    assert res.status_code == 400
    assert res.get_json()["success"] is False

    res = client.post("/api/overrides", json={"person_id": "nobody", "date": "2024-03-01", "status": "present"})
    assert res.status_code == 404

    res = client.get("/api/dashboard?date=2024-03-01&policy=sometimes")
    assert res.status_code == 400

    res = client.delete("/api/roster/nobody")
    assert res.status_code == 404


def test_scan_rejects_string_present_flag(client):
    alice = add_member(client, "Alice")

    res = client.post(
        "/api/sessions",
        json={"date": "2024-03-01", "proposals": [{"person_id": alice, "present": "false", "confidence": 10}]},
    )

    assert res.status_code == 400
    assert client.get("/api/sessions?date=2024-03-01").get_json()["sessions"] == []


def test_session_history_reports_observation_total(client):
    alice = add_member(client, "Alice")
    add_member(client, "Bob")
    client.post(
        "/api/sessions",
        json={"date": "2024-03-01", "proposals": [{"person_id": alice, "present": True, "confidence": 90}]},
    )
    client.post("/api/overrides", json={"person_id": alice, "date": "2024-03-02", "status": "late"})

    stats = client.get("/api/sessions").get_json()["stats"]

    assert (stats["total_scans"], stats["present"], stats["late"], stats["absent"]) == (2, 1, 1, 1)
    assert stats["total"] == 3

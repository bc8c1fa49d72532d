"""Tests for the work-session timer endpoints."""


def _start(client, **body):
    response = client.post("/api/sessions", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def test_start_and_list(client):
    session = _start(client, device="dell", notes="deep work", date="2025-05-01")
    assert session["date"] == "2025-05-01"
    assert session["device"] == "dell"
    assert session["endAt"] is None
    assert session["status"] == "active"

    response = client.get("/api/sessions", params={"date": "2025-05-01"})
    assert response.status_code == 200
    data = response.json()
    assert data["date"] == "2025-05-01"
    assert [s["id"] for s in data["sessions"]] == [session["id"]]

    other_day = client.get("/api/sessions", params={"date": "2025-05-02"}).json()
    assert other_day["sessions"] == []


def test_start_defaults_to_today(client):
    session = _start(client)
    today = client.get("/api/sessions").json()
    assert today["date"] == session["date"]
    assert [s["id"] for s in today["sessions"]] == [session["id"]]


def test_stop_records_duration(client):
    session = _start(client, date="2025-05-01")

    response = client.post(f"/api/sessions/{session['id']}/stop")
    assert response.status_code == 200
    data = response.json()
    assert data["endAt"] is not None
    assert data["durationSeconds"] >= 0
    for field in ("startAt", "endAt", "createdAt"):
        assert data[field].endswith("Z") or data[field].endswith("+00:00"), field

    response = client.post(f"/api/sessions/{session['id']}/stop")
    assert response.status_code == 400
    assert response.json() == {"error": "Session already stopped"}


def test_delete_hides_session(client):
    session = _start(client, date="2025-05-01")

    response = client.post(f"/api/sessions/{session['id']}/delete")
    assert response.status_code == 200
    assert response.json() == {"success": True, "id": session["id"]}

    data = client.get("/api/sessions", params={"date": "2025-05-01"}).json()
    assert data["sessions"] == []


def test_missing_session_and_bad_date(client):
    assert client.post("/api/sessions/nope/stop").status_code == 404
    assert client.post("/api/sessions/nope/delete").status_code == 404

    response = client.get("/api/sessions", params={"date": "05/01/2025"})
    assert response.status_code == 400
    assert "YYYY-MM-DD" in response.json()["error"]

"""Smoke tests for the application shell."""


def test_root_and_health(client):
    assert client.get("/").json() == {"message": "Planner API"}
    assert client.get("/health").json() == {"status": "healthy"}


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nowhere")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}

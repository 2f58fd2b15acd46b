"""Tests for the health endpoint and response headers."""


def test_health_reports_database(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["components"] == {"database": "healthy"}


def test_security_headers(client):
    response = client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_unknown_route_uses_message_body(client):
    response = client.get("/api/v1/nowhere")

    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}

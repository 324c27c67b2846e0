"""
Tests for the main application endpoints.
"""
from sqlalchemy.exc import OperationalError


def test_root_endpoint(client):
    """
    Test the root endpoint returns a welcome message.
    """
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert "version" in data


def test_health_check(client):
    """
    Test the health check endpoint returns a healthy status.
    """
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "database" in data


def test_request_id_headers(client):
    response = client.get("/", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"
    assert "X-Process-Time" in response.headers


def test_unknown_route_uses_message_body(client):
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


class UnreachableEngine:
    def connect(self):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


def test_health_check_reports_database_failure(client, monkeypatch):
    monkeypatch.setattr("src.main.engine", UnreachableEngine())
    response = client.get("/health")
    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy", "database": "disconnected"}

"""
Tests for root and health endpoints.
"""

from jobboard.core.storage import MemoryStorage, get_storage
from main import app


class BrokenCheckStorage(MemoryStorage):
    def check(self):
        raise RuntimeError("bucket unreachable")


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_detailed_health(client):
    response = client.get("/health/detailed")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["checks"]["database"]["status"] == "healthy"
    assert data["checks"]["storage"]["status"] == "healthy"


def test_detailed_health_reports_storage_failure(client):
    app.dependency_overrides[get_storage] = lambda: BrokenCheckStorage()

    data = client.get("/health/detailed").json()

    assert data["status"] == "unhealthy"
    assert data["checks"]["storage"]["status"] == "unhealthy"
    assert "bucket unreachable" in data["checks"]["storage"]["message"]


def test_unknown_route(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json()["type"] == "NotFound"

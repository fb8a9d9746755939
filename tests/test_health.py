# =============================================================================
# tests/test_health.py - Health and Wiring Tests
# =============================================================================
# Tests for the /test greeting, /health endpoints, CORS and startup.
#
# Run with: pytest tests/test_health.py -v
# =============================================================================

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.exceptions import StorageInitError
from app.main import app


class TestEndpoints:

    def test_greeting(self, client):
        response = client.get("/test")

        assert response.status_code == 200
        assert response.json() == {"message": f"Hello from {settings.SERVICE_NAME}"}

    def test_health(self, client):
        body = client.get("/health").json()

        assert body["status"] == "healthy"
        assert body["environment"] == settings.ENVIRONMENT

    def test_ready(self, client):
        body = client.get("/health/ready").json()

        assert body["status"] == "ready"
        assert body["checks"]["storage"] == "healthy"

    def test_degraded_when_root_missing(self, client, storage_root):
        storage_root.rmdir()

        body = client.get("/health/ready").json()

        assert body["status"] == "degraded"
        assert body["checks"]["storage"].startswith("unhealthy")

    def test_live(self, client):
        assert client.get("/health/live").json()["status"] == "alive"


class TestWiring:

    def test_cors_allows_configured_origin(self, client):
        origin = settings.cors_origins_list[0]

        response = client.options(
            "/project/apply",
            headers={
                "Origin": origin,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == origin

    def test_cors_rejects_other_origin(self, client):
        response = client.options(
            "/project/apply",
            headers={
                "Origin": "https://evil.example",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert "access-control-allow-origin" not in response.headers

    def test_startup_creates_storage_root(self, tmp_path, monkeypatch):
        root = tmp_path / "fresh" / "project-apply"
        monkeypatch.setattr(settings, "APPLICATION_ROOT", str(root))

        with TestClient(app):
            assert root.is_dir()

    def test_startup_aborts_when_root_cannot_be_created(self, tmp_path, monkeypatch):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        monkeypatch.setattr(settings, "APPLICATION_ROOT", str(blocker / "project-apply"))

        with pytest.raises(StorageInitError):
            with TestClient(app):
                pass

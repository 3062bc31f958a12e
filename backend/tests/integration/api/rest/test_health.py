"""Integration tests for health endpoints and CORS setup."""

from rehearsal import __version__
from rehearsal.config import Settings
from rehearsal.main import get_allowed_origins


class TestHealthEndpoints:
    """Test health check endpoints."""

    def test_health_check(self, client):
        """Test basic health check."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "rehearsal-backend"
        assert data["version"] == __version__

    def test_request_id_is_echoed(self, client):
        """Test that the request id header is returned."""
        response = client.get("/health", headers={"x-request-id": "req-42"})
        assert response.headers["x-request-id"] == "req-42"

    def test_request_id_is_generated(self, client):
        """Test that a request id is generated when none is sent."""
        response = client.get("/health")
        assert response.headers["x-request-id"]


class TestAllowedOrigins:
    """Test CORS origin selection."""

    def test_development_allows_any_origin(self):
        """Development accepts every origin."""
        config = Settings(_env_file=None, environment="development", cors_allow_origins="http://a.test")
        assert get_allowed_origins(config) == ["*"]

    def test_production_uses_configured_origins(self):
        """Other environments only allow the configured list."""
        config = Settings(
            _env_file=None,
            environment="production",
            cors_allow_origins="http://b.test, http://a.test, http://a.test",
        )
        assert get_allowed_origins(config) == ["http://a.test", "http://b.test"]

    def test_production_without_origins_allows_none(self):
        """No configured origins means no cross-origin access."""
        config = Settings(_env_file=None, environment="production", cors_allow_origins="")
        assert get_allowed_origins(config) == []

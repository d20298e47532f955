"""
Tests for health check endpoints.
"""

from contextlib import contextmanager

from sqlalchemy.exc import OperationalError


class TestHealthEndpoints:
    """Test health check API endpoints."""

    def test_health_check(self, client):
        """Basic health check should return healthy status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "catalog-api"

    def test_detailed_health_check(self, client):
        """Detailed health check reports the database."""
        response = client.get("/api/health/detailed")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["database"]["status"] == "healthy"

    def test_detailed_health_check_database_down(self, client, monkeypatch):
        """An unreachable database degrades the service to 503."""
        from catalog_api.routers.public import health

        class BrokenSession:
            def execute(self, statement):
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        @contextmanager
        def broken_db_context():
            yield BrokenSession()

        monkeypatch.setattr(health, "get_db_context", broken_db_context)

        response = client.get("/api/health/detailed")
        assert response.status_code == 503
        assert response.json()["status"] == "degraded"

    def test_security_headers(self, client):
        response = client.get("/api/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_correlation_id_is_echoed(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

"""Tests for the FastAPI application wiring.

Covers health endpoints, correlation IDs, error envelopes and route
registration.
"""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from listings.api.dependencies import ServiceContainer
from listings.api.main import create_app


class TestHealthCheck:
    """Tests for the /api/ping and /api/health endpoints."""

    def test_ping_returns_ok(self, client: TestClient) -> None:
        response = client.get("/api/ping")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "listings-api"
        assert "timestamp" in data

    def test_health_endpoint_returns_healthy(self, client: TestClient) -> None:
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"
        assert data["environment"] == "test"


class TestCorrelationId:
    """Tests for the correlation ID middleware."""

    def test_generated_when_missing(self, client: TestClient) -> None:
        response = client.get("/api/ping")
        assert response.headers["X-Correlation-ID"]

    def test_echoed_when_sent(self, client: TestClient) -> None:
        response = client.get("/api/ping", headers={"X-Correlation-ID": "req-42"})
        assert response.headers["X-Correlation-ID"] == "req-42"


class TestErrorEnvelopes:
    """Tests for the exception handlers."""

    def test_listing_error(self, client: TestClient) -> None:
        response = client.get("/api/properties/mine")

        assert response.status_code == 401
        data = response.json()
        assert data["success"] is False
        assert data["error_code"] == "ERR_AUTH_001"
        assert data["recovery"] == "Log in and try again"

    def test_request_validation_error(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        wizard_id = client.post("/api/listings/wizard", headers=auth_headers).json()["wizard_id"]

        response = client.post(
            f"/api/listings/wizard/{wizard_id}/goto", json={}, headers=auth_headers
        )

        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "ERR_VALIDATION"
        assert data["details"][0]["loc"] == ["body", "step"]

    def test_unhandled_error_hides_details(
        self, container: ServiceContainer, auth_headers: dict[str, str]
    ) -> None:
        app = create_app(container)

        @app.get("/api/boom")
        async def boom() -> None:
            raise RuntimeError("secret internals")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/boom")

        assert response.status_code == 500
        assert response.json()["error_code"] == "ERR_INTERNAL"
        assert "secret" not in response.text


class TestRoutesRegistered:
    """Tests that all expected routes are registered."""

    def test_routes(self, container: ServiceContainer) -> None:
        app: FastAPI = create_app(container)
        paths = {route.path for route in app.routes}

        assert "/api/health" in paths
        assert "/api/auth/signup" in paths
        assert "/api/auth/login" in paths
        assert "/api/listings/wizard" in paths
        assert "/api/listings/wizard/{wizard_id}/submit" in paths
        assert "/api/listings/wizard/{wizard_id}/photos/{image_id}" in paths
        assert "/api/properties/mine" in paths
        assert "/api/properties/{property_id}/status" in paths

    def test_container_on_app_state(self, container: ServiceContainer) -> None:
        app = create_app(container)
        assert app.state.container is container

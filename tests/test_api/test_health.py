"""Tests for health check endpoint."""

import pytest
from fastapi.testclient import TestClient

from project_hub.main import create_app


class TestHealthEndpoint:
    """Test health check endpoint."""

    @pytest.fixture
    def client(self, settings):
        """Create test client; the lifespan opens a throwaway database."""
        app = create_app(settings)
        with TestClient(app) as client:
            yield client

    def test_health_check_returns_200(self, client):
        """Health endpoint returns 200 OK."""
        response = client.get("/health")

        assert response.status_code == 200

    def test_health_check_response_body(self, client):
        """Health endpoint returns expected body."""
        response = client.get("/health")
        data = response.json()

        assert data["status"] == "healthy"
        assert "version" in data

    def test_lifespan_creates_schema(self, client):
        """Startup creates the tables, so commands work on an empty file."""
        response = client.post("/api/mcp/project-hub/list_projects")

        assert response.status_code == 200
        assert response.json() == {"projects": []}

    def test_cors_headers(self, client):
        response = client.options(
            "/api/mcp/project-hub/list_projects",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

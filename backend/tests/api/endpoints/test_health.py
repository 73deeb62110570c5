"""
Tests for api.health module.
"""

import shutil
import tempfile
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.dependencies import get_data_source_registry
from api.health import router
from core.config import Settings, get_settings
from services.data_source_registry import DataSourceRegistry
from services.error_handler import get_error_handler


class TestHealthEndpoints:
    """Test health check endpoints."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = tempfile.mkdtemp()
        self.test_settings = Settings(DEBUG=True, CITY_NAME="Delhi")

    def teardown_method(self):
        """Clean up test environment."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    @pytest.fixture
    def app(self):
        app = FastAPI()
        app.include_router(router)
        app.dependency_overrides[get_settings] = lambda: self.test_settings
        return app

    @pytest.fixture
    def client(self, app):
        """Create test client."""
        return TestClient(app)

    def test_health_check_success(self, client):
        """Test successful health check."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()

        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert data["service"] == "City Operations Engine"
        assert data["city"] == "Delhi"
        assert data["version"] == "1.0.0"

    def test_readiness_check_all_ready(self, client):
        """Test readiness check with the bundled registry."""
        response = client.get("/ready")

        assert response.status_code == 200
        data = response.json()

        assert data["status"] == "ready"
        checks = data["checks"]
        assert checks["zones"]["status"] == "ready"
        assert checks["zones"]["details"] == "11 zones loaded"
        assert checks["data_sources"]["status"] == "ready"
        assert checks["live_feeds"]["status"] == "ready"

    def test_readiness_check_without_sources(self, app, client):
        """Test readiness check when the registry failed to load."""
        missing = str(Path(self.temp_dir) / "missing.yml")
        app.dependency_overrides[get_data_source_registry] = lambda: DataSourceRegistry(config_path=missing)

        response = client.get("/ready")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "not_ready"
        assert data["checks"]["data_sources"]["status"] == "not_ready"

    def test_error_statistics(self, client):
        """Test errors recorded by any service handler are reported."""
        get_error_handler("health-test").handle_error(ValueError("bad input"), error_code="INVALID_INPUT",
                                                      operation_name="validate")

        response = client.get("/errors")

        assert response.status_code == 200
        stats = response.json()["services"]["health-test"]
        assert stats["summary"]["service"] == "health-test"
        assert stats["by_category"]["validation"] >= 1
        assert stats["recent_errors"][-1]["operation"] == "validate"


class TestApplicationRoutes:
    """Test the assembled application."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["service"] == "City Operations Engine"

    def test_health_mounted_under_api(self, client):
        assert client.get("/api/health").status_code == 200

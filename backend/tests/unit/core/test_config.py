"""
Tests for core.config module.
"""

import os
import pytest
from unittest.mock import patch
from pydantic import ValidationError

from core.config import DEFAULT_DATA_SOURCES_PATH, Settings, get_settings


class TestSettings:
    """Test the Settings class."""

    def test_default_settings(self):
        """Test default settings values."""
        settings = Settings(_env_file=None)

        assert settings.DEBUG is True
        assert settings.HOST == "0.0.0.0"
        assert settings.PORT == 8000
        assert settings.CITY_NAME == "Delhi"
        assert settings.CITY_TIMEZONE == "Asia/Kolkata"
        assert settings.OPEN_METEO_BASE_URL == "https://api.open-meteo.com/v1"
        assert settings.AIR_QUALITY_BASE_URL == "https://air-quality-api.open-meteo.com/v1"
        assert settings.FETCH_TIMEOUT_SECONDS == 10.0
        assert settings.FALLBACK_AQI == 150.0
        assert settings.DATA_SOURCES_CONFIG_PATH == DEFAULT_DATA_SOURCES_PATH
        assert settings.ERROR_LOG_DIR is None

    def test_environment_variable_override(self):
        """Test that environment variables override defaults."""
        with patch.dict(os.environ, {
            'DEBUG': 'false',
            'PORT': '9000',
            'CITY_TIMEZONE': 'UTC',
            'FETCH_TIMEOUT_SECONDS': '2.5',
            'FALLBACK_AQI': '100'
        }):
            settings = Settings(_env_file=None)

            assert settings.DEBUG is False
            assert settings.PORT == 9000
            assert settings.CITY_TIMEZONE == "UTC"
            assert settings.FETCH_TIMEOUT_SECONDS == 2.5
            assert settings.FALLBACK_AQI == 100.0

    def test_allowed_origins_list(self):
        """Test comma-separated origins are split and stripped."""
        settings = Settings(ALLOWED_ORIGINS="http://a.test, http://b.test,,")

        assert settings.allowed_origins_list == ["http://a.test", "http://b.test"]

    def test_allowed_origins_accepts_list(self):
        settings = Settings(ALLOWED_ORIGINS=["http://a.test", "http://b.test"])

        assert settings.ALLOWED_ORIGINS == "http://a.test,http://b.test"
        assert len(settings.allowed_origins_list) == 2

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(FETCH_TIMEOUT_SECONDS=0)

    def test_data_sources_file_ships_with_package(self):
        assert os.path.exists(DEFAULT_DATA_SOURCES_PATH)


class TestGetSettings:
    """Test the get_settings function."""

    def test_get_settings_cached(self):
        """Test that get_settings returns the same instance."""
        assert get_settings() is get_settings()

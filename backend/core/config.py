"""
Configuration management for the City Operations Engine.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


DEFAULT_DATA_SOURCES_PATH = str(Path(__file__).parent / "data_sources.yml")


class Settings(BaseSettings):
    """Application settings."""

    # Basic app settings
    DEBUG: bool = Field(default=True)
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # CORS settings
    ALLOWED_ORIGINS: str = Field(default="http://localhost:5173,http://127.0.0.1:5173")

    @field_validator('ALLOWED_ORIGINS', mode='before')
    @classmethod
    def parse_allowed_origins(cls, v):
        if isinstance(v, list):
            return ','.join(v)
        return v

    @property
    def allowed_origins_list(self) -> List[str]:
        """Get ALLOWED_ORIGINS as a list."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(',') if origin.strip()]

    # City settings
    CITY_NAME: str = Field(default="Delhi")
    CITY_TIMEZONE: str = Field(default="Asia/Kolkata")

    # Upstream data feeds (Open-Meteo, no key required)
    OPEN_METEO_BASE_URL: str = Field(default="https://api.open-meteo.com/v1")
    AIR_QUALITY_BASE_URL: str = Field(default="https://air-quality-api.open-meteo.com/v1")
    FETCH_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)
    WEATHER_ZONE_ID: str = Field(default="central")

    # Aggregation fallbacks
    FALLBACK_AQI: float = Field(default=150.0, ge=0)

    # Registry and logs
    DATA_SOURCES_CONFIG_PATH: str = Field(default=DEFAULT_DATA_SOURCES_PATH)
    ERROR_LOG_DIR: Optional[str] = Field(default=None)

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "ignore"
    }


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()

"""
Pytest configuration and shared fixtures for the backend test suite.
"""

from datetime import datetime
from typing import List
from unittest.mock import AsyncMock, Mock
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_city_data_service
from core.config import Settings
from main import create_application
from models.schemas import (
    AirQualityData, HealthData, PowerData, SafetyData, TrafficData,
    WaterData, WeatherSnapshot, RiskLevel
)
from services.city_data_service import CityDataService
from services.engine import TimeContext

IST = ZoneInfo("Asia/Kolkata")
FIXED_TIMESTAMP = datetime(2024, 7, 15, 14, 5, tzinfo=IST)


def constant_random(value: float = 0.5):
    """Random source returning the same fraction for every seed."""
    return lambda seed: value


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with safe defaults."""
    return Settings(
        DEBUG=True,
        HOST="127.0.0.1",
        PORT=8001,
        FETCH_TIMEOUT_SECONDS=0.5,
        ALLOWED_ORIGINS="http://localhost:3000"
    )


@pytest.fixture
def summer_afternoon() -> TimeContext:
    """Mid-July, 2:05 PM: off-peak traffic, power peak, summer."""
    return TimeContext(timestamp=FIXED_TIMESTAMP)


@pytest.fixture
def winter_night() -> TimeContext:
    """January, 1:30 AM: night traffic, high call and risk hours."""
    return TimeContext(timestamp=datetime(2024, 1, 10, 1, 30, tzinfo=IST))


@pytest.fixture
def morning_peak() -> TimeContext:
    """8:35 AM: commuter and water usage peak."""
    return TimeContext(timestamp=datetime(2024, 3, 4, 8, 35, tzinfo=IST))


@pytest.fixture
def sample_air_quality() -> List[AirQualityData]:
    return [
        AirQualityData(zone="central", aqi=120, pm25=45, pm10=90, no2=30, so2=8, co=1, o3=50,
                       timestamp=FIXED_TIMESTAMP),
        AirQualityData(zone="east", aqi=180, pm25=80, pm10=150, no2=42, so2=11, co=2, o3=35,
                       timestamp=FIXED_TIMESTAMP),
    ]


@pytest.fixture
def sample_weather() -> WeatherSnapshot:
    return WeatherSnapshot(
        time=FIXED_TIMESTAMP,
        temperature_2m=36.4,
        relative_humidity_2m=48.0,
        wind_speed_10m=11.2,
        weather_code=2,
        description="Partly cloudy",
    )


def make_traffic(zone: str, congestion: int, incidents: int = 0) -> TrafficData:
    return TrafficData(zone=zone, congestion_index=congestion, avg_speed=round(60 - congestion * 0.5),
                       incidents=incidents, timestamp=FIXED_TIMESTAMP)


def make_power(zone: str, demand: int, supply: int, outages: int = 0, renewable: int = 10) -> PowerData:
    return PowerData(zone=zone, demand=demand, supply=supply, peak_load=round(demand * 1.2),
                     outages=outages, renewable_percent=renewable, timestamp=FIXED_TIMESTAMP)


def make_water(zone: str, supply: int, demand: int, reservoir: int = 70, leakages: int = 0) -> WaterData:
    return WaterData(zone=zone, supply=supply, demand=demand, reservoir_level=reservoir,
                     leakages=leakages, timestamp=FIXED_TIMESTAMP)


def make_health(zone: str, beds: int, occupied: int, response_time: int) -> HealthData:
    return HealthData(zone=zone, hospital_beds=beds, beds_occupied=occupied, ambulances=30,
                      avg_response_time=response_time, emergency_calls=80, timestamp=FIXED_TIMESTAMP)


def make_safety(zone: str, crime_index: int) -> SafetyData:
    return SafetyData(zone=zone, crime_index=crime_index, incidents=2, patrol_units=15, response_time=8,
                      risk_level=RiskLevel.MEDIUM, timestamp=FIXED_TIMESTAMP)


@pytest.fixture
def mock_meteo_client(sample_air_quality, sample_weather):
    """Open-Meteo client double returning canned readings."""
    client = Mock()
    client.fetch_air_quality = AsyncMock(return_value=sample_air_quality)
    client.fetch_weather = AsyncMock(return_value=sample_weather)
    client.close = AsyncMock()
    return client


@pytest.fixture
def city_service(mock_meteo_client, test_settings) -> CityDataService:
    return CityDataService(client=mock_meteo_client, settings=test_settings)


@pytest.fixture
def app(city_service):
    """Create FastAPI test application with the city service overridden."""
    application = create_application()
    application.dependency_overrides[get_city_data_service] = lambda: city_service
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    """Create test client for FastAPI app."""
    return TestClient(app)

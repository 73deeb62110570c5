"""
Open-Meteo feed client for the City Operations Engine.

Fetches current air quality for every zone and current weather at the
city reference point. Free API, no key required. Failures never
propagate: a failed zone is dropped from the air quality list and a
failed weather call yields ``None``.
"""

import asyncio
from typing import Any, Dict, List, Optional, Sequence

import aiohttp
import structlog

from core.config import Settings, get_settings
from core.zones import ZONES, get_zone
from models.schemas import AirQualityData, WeatherSnapshot, Zone
from services.engine import calculate_aqi, round_half_up
from services.error_handler import ErrorHandler, get_error_handler

logger = structlog.get_logger(__name__)

AIR_QUALITY_FIELDS = (
    "pm2_5,pm10,nitrogen_dioxide,sulphur_dioxide,carbon_monoxide,"
    "ozone,european_aqi,us_aqi"
)
WEATHER_FIELDS = "temperature_2m,relative_humidity_2m,wind_speed_10m,weather_code"

# WMO weather interpretation codes
WEATHER_DESCRIPTIONS: Dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow",
    73: "Moderate snow",
    75: "Heavy snow",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

UPSTREAM_FAILURES = (aiohttp.ClientError, asyncio.TimeoutError, KeyError, TypeError, ValueError)


def get_weather_description(code: int) -> str:
    """Human-readable description for a WMO weather code."""
    return WEATHER_DESCRIPTIONS.get(code, "Unknown")


class UpstreamError(Exception):
    """Non-success HTTP status from an upstream feed."""

    def __init__(self, url: str, status: int):
        super().__init__(f"Upstream returned HTTP {status} for {url}")
        self.url = url
        self.status = status


class OpenMeteoClient:
    """Async client for the Open-Meteo air quality and forecast APIs."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[aiohttp.ClientSession] = None,
        error_handler: Optional[ErrorHandler] = None,
    ):
        self.settings = settings or get_settings()
        self.session = session
        self._owns_session = session is None
        self.error_handler = error_handler or get_error_handler(
            "open_meteo", log_dir=self.settings.ERROR_LOG_DIR
        )

    async def __aenter__(self) -> "OpenMeteoClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session with the configured timeout."""
        if self.session is None or self.session.closed:
            timeout = aiohttp.ClientTimeout(total=self.settings.FETCH_TIMEOUT_SECONDS)
            self.session = aiohttp.ClientSession(
                timeout=timeout,
                headers={"Accept": "application/json"},
            )
            self._owns_session = True
        return self.session

    async def close(self) -> None:
        if self._owns_session and self.session is not None and not self.session.closed:
            await self.session.close()

    async def _request_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        session = await self._get_session()
        async with session.get(url, params=params) as response:
            if not 200 <= response.status < 300:
                raise UpstreamError(url, response.status)
            return await response.json()

    async def _get_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """GET a JSON document, bounded by the fetch timeout."""
        return await asyncio.wait_for(
            self._request_json(url, params),
            timeout=self.settings.FETCH_TIMEOUT_SECONDS,
        )

    @staticmethod
    def parse_air_quality(zone_id: str, payload: Dict[str, Any]) -> AirQualityData:
        """Map an air quality response onto a zone reading."""
        current = payload["current"]
        pm25 = current["pm2_5"]
        us_aqi = current.get("us_aqi")
        return AirQualityData(
            zone=zone_id,
            aqi=round_half_up(us_aqi) if us_aqi else calculate_aqi(pm25),
            pm25=round_half_up(pm25),
            pm10=round_half_up(current["pm10"]),
            no2=round_half_up(current["nitrogen_dioxide"]),
            so2=round_half_up(current["sulphur_dioxide"]),
            co=round_half_up(current["carbon_monoxide"] / 1000),  # ug/m3 -> ppm
            o3=round_half_up(current["ozone"]),
            timestamp=current["time"],
            source="Open-Meteo",
        )

    @staticmethod
    def parse_weather(payload: Dict[str, Any]) -> WeatherSnapshot:
        current = payload["current"]
        code = int(current["weather_code"])
        return WeatherSnapshot(
            time=current["time"],
            temperature_2m=current["temperature_2m"],
            relative_humidity_2m=current["relative_humidity_2m"],
            wind_speed_10m=current["wind_speed_10m"],
            weather_code=code,
            description=get_weather_description(code),
        )

    async def fetch_zone_air_quality(self, zone: Zone) -> Optional[AirQualityData]:
        """Fetch current air quality for one zone; ``None`` on failure."""
        params = {
            "latitude": str(zone.latitude),
            "longitude": str(zone.longitude),
            "current": AIR_QUALITY_FIELDS,
            "timezone": self.settings.CITY_TIMEZONE,
        }
        url = f"{self.settings.AIR_QUALITY_BASE_URL.rstrip('/')}/air-quality"
        try:
            payload = await self._get_json(url, params)
            return self.parse_air_quality(zone.id, payload)
        except UpstreamError as e:
            self.error_handler.handle_error(
                e, error_code="UPSTREAM_HTTP_ERROR", operation_name="fetch_zone_air_quality",
                additional_data={"zone": zone.id, "status": e.status},
            )
        except UPSTREAM_FAILURES as e:
            self.error_handler.handle_error(
                e, operation_name="fetch_zone_air_quality", additional_data={"zone": zone.id},
            )
        return None

    async def fetch_air_quality(self, zones: Sequence[Zone] = ZONES) -> List[AirQualityData]:
        """
        Fetch air quality for all zones in parallel.

        Returns:
            Readings for the zones that succeeded, in zone order. Empty when
            every request failed.
        """
        results = await asyncio.gather(*(self.fetch_zone_air_quality(zone) for zone in zones))
        readings = [r for r in results if r is not None]

        if not readings:
            logger.warning("All air quality requests failed", zones=len(zones))
        elif len(readings) < len(zones):
            logger.info("Partial air quality data", received=len(readings), requested=len(zones))
        return readings

    async def fetch_weather(self, zone: Optional[Zone] = None) -> Optional[WeatherSnapshot]:
        """Fetch current weather at the reference zone; ``None`` on failure."""
        zone = zone or get_zone(self.settings.WEATHER_ZONE_ID) or ZONES[0]
        params = {
            "latitude": str(zone.latitude),
            "longitude": str(zone.longitude),
            "current": WEATHER_FIELDS,
            "timezone": self.settings.CITY_TIMEZONE,
        }
        url = f"{self.settings.OPEN_METEO_BASE_URL.rstrip('/')}/forecast"
        try:
            payload = await self._get_json(url, params)
            return self.parse_weather(payload)
        except UpstreamError as e:
            self.error_handler.handle_error(
                e, error_code="UPSTREAM_HTTP_ERROR", operation_name="fetch_weather",
                additional_data={"status": e.status},
            )
        except UPSTREAM_FAILURES as e:
            self.error_handler.handle_error(e, operation_name="fetch_weather")
        return None

"""
City data service.

Entry points used by the API layer: per-domain generation, scenario
simulation, the composite city health index and the dashboard KPIs.
Live feeds are fetched concurrently; synthetic domains are generated
from one shared time context per call.
"""

import asyncio
from datetime import datetime
from typing import List, Optional, Sequence

import structlog

from core.config import Settings, get_settings
from core.zones import ZONES
from models.schemas import (
    AirQualityData, CityHealthIndex, Domain, DomainSnapshots, KPIRecord,
    ScenarioImpact, ScenarioParameters, WeatherSnapshot, Zone
)
from services.engine import RandomSource, TimeContext, resolve_time_context, seeded_random
from services.generators import generate_all, generate_domain
from services.metrics import build_dashboard_kpis, build_zone_overview, compute_city_health_index
from services.open_meteo_client import OpenMeteoClient
from services.scenarios import ScenarioService

logger = structlog.get_logger(__name__)


class CityDataService:
    """Aggregates synthetic domain models with the live Open-Meteo feeds."""

    def __init__(
        self,
        client: Optional[OpenMeteoClient] = None,
        settings: Optional[Settings] = None,
        zones: Sequence[Zone] = ZONES,
        random_source: RandomSource = seeded_random,
    ):
        self.settings = settings or get_settings()
        self.client = client or OpenMeteoClient(settings=self.settings)
        self.zones = zones
        self.random_source = random_source
        self.scenarios = ScenarioService(zones=zones, random_source=random_source)

    def _context(self, now: Optional[datetime]) -> TimeContext:
        return resolve_time_context(now)

    def generate_domain(self, domain: Domain, now: Optional[datetime] = None) -> List:
        """Fresh records for one domain."""
        return generate_domain(domain, self._context(now), self.zones, self.random_source)

    def generate_snapshots(self, now: Optional[datetime] = None) -> DomainSnapshots:
        """Fresh records for every domain from one time context."""
        return generate_all(self._context(now), self.zones, self.random_source)

    def simulate(self, params: ScenarioParameters, now: Optional[datetime] = None) -> ScenarioImpact:
        """Project a scenario onto freshly generated city state."""
        return self.scenarios.simulate(params, context=self._context(now))

    async def fetch_air_quality(self) -> List[AirQualityData]:
        return await self.client.fetch_air_quality(self.zones)

    async def fetch_weather(self) -> Optional[WeatherSnapshot]:
        return await self.client.fetch_weather()

    async def compute_index(self, now: Optional[datetime] = None) -> CityHealthIndex:
        """
        Compute the composite city health index.

        An empty air quality feed is scored with the configured fallback AQI.
        """
        context = self._context(now)
        air_quality = await self.fetch_air_quality()
        snapshots = generate_all(context, self.zones, self.random_source)

        index = compute_city_health_index(
            air_quality=air_quality,
            traffic=snapshots.traffic,
            power=snapshots.power,
            water=snapshots.water,
            health=snapshots.health,
            safety=snapshots.safety,
            fallback_aqi=self.settings.FALLBACK_AQI,
            timestamp=context.timestamp,
        )
        logger.info(
            "City health index computed",
            overall=index.overall,
            air_quality_zones=len(air_quality),
        )
        return index

    async def compute_kpis(self, now: Optional[datetime] = None) -> List[KPIRecord]:
        """Dashboard KPIs; air quality and weather are fetched concurrently."""
        context = self._context(now)
        air_quality, weather = await asyncio.gather(self.fetch_air_quality(), self.fetch_weather())
        snapshots = generate_all(context, self.zones, self.random_source)

        kpis = build_dashboard_kpis(
            air_quality=air_quality,
            weather=weather,
            traffic=snapshots.traffic,
            power=snapshots.power,
            water=snapshots.water,
            now=context.timestamp,
        )
        logger.info("Dashboard KPIs computed", weather_available=weather is not None)
        return kpis

    async def zone_overview(self, now: Optional[datetime] = None):
        """Per-zone table joining every domain with the live AQI."""
        context = self._context(now)
        air_quality = await self.fetch_air_quality()
        snapshots = generate_all(context, self.zones, self.random_source)
        return build_zone_overview(snapshots, air_quality, self.zones)

    async def close(self) -> None:
        await self.client.close()

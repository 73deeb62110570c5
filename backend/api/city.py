"""
City data endpoints: zones, per-domain records, summaries and live feeds.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
import structlog

from api.dependencies import get_city_data_service, get_data_source_registry
from core.config import get_settings
from core.zones import ZONES, get_zone, zone_ids
from models.schemas import (
    AirQualityData, DataSource, Domain, WeatherSnapshot, Zone
)
from services.city_data_service import CityDataService
from services.data_source_registry import DataSourceRegistry, get_source_badge
from services.engine import get_aqi_category
from services.error_handler import get_error_handler
from services.metrics import overview_records, summarize_power, summarize_traffic, summarize_water

logger = structlog.get_logger(__name__)
router = APIRouter()

SUMMARIZERS = {
    Domain.TRAFFIC: summarize_traffic,
    Domain.POWER: summarize_power,
    Domain.WATER: summarize_water,
}


def _parse_domain(domain: str) -> Domain:
    try:
        return Domain(domain)
    except ValueError as e:
        handler = get_error_handler("api")
        error = handler.handle_error(
            e,
            error_code="UNKNOWN_DOMAIN",
            operation_name="parse_domain",
            additional_data={"domain": domain}
        )
        raise HTTPException(
            status_code=404,
            detail=handler.create_api_response(error, include_technical=get_settings().DEBUG)
        )



def _with_category(reading: AirQualityData) -> Dict[str, Any]:
    category = get_aqi_category(reading.aqi)
    return {**reading.model_dump(mode="json"), "category": category.label, "aqi_status": category.status.value}


def _with_badge(source: DataSource) -> Dict[str, Any]:
    return {**source.model_dump(mode="json"), "badge": get_source_badge(source.type)}


@router.get("/zones", response_model=List[Zone])
async def list_zones() -> List[Zone]:
    """Static zone reference list."""
    return list(ZONES)


@router.get("/zones/overview")
async def zone_overview(service: CityDataService = Depends(get_city_data_service)) -> List[Dict[str, Any]]:
    """One row per zone joining every domain and the live AQI."""
    overview = await service.zone_overview()
    return overview_records(overview)


@router.get("/zones/{zone_id}", response_model=Zone)
async def zone_detail(zone_id: str) -> Zone:
    """Reference data for one zone."""
    zone = get_zone(zone_id)
    if zone is None:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown zone '{zone_id}'. Use one of: {', '.join(zone_ids())}"
        )
    return zone


@router.get("/domains/{domain}")
async def domain_records(domain: str, service: CityDataService = Depends(get_city_data_service)) -> List[Dict[str, Any]]:
    """Freshly generated records for one domain, in zone order."""
    records = service.generate_domain(_parse_domain(domain))
    return [record.model_dump(mode="json") for record in records]


@router.get("/domains/{domain}/summary")
async def domain_summary(domain: str, service: CityDataService = Depends(get_city_data_service)) -> Dict[str, Any]:
    """City-wide roll-up for traffic, power or water."""
    parsed = _parse_domain(domain)
    summarizer = SUMMARIZERS.get(parsed)
    if summarizer is None:
        raise HTTPException(status_code=404, detail=f"No summary available for domain '{domain}'")
    return summarizer(service.generate_domain(parsed)).model_dump(mode="json")


@router.get("/air-quality")
async def air_quality(service: CityDataService = Depends(get_city_data_service)) -> List[Dict[str, Any]]:
    """Live air quality per zone with its display category; zones whose fetch failed are omitted."""
    readings = await service.fetch_air_quality()
    return [_with_category(reading) for reading in readings]


@router.get("/weather", response_model=Optional[WeatherSnapshot])
async def weather(service: CityDataService = Depends(get_city_data_service)) -> Optional[WeatherSnapshot]:
    """Current weather, or null when the feed is unavailable."""
    return await service.fetch_weather()


@router.get("/data-sources")
async def data_sources(
    module: Optional[str] = None,
    registry: DataSourceRegistry = Depends(get_data_source_registry),
) -> List[Dict[str, Any]]:
    """Registered data sources with their display badge, optionally only those feeding ``module``."""
    sources = registry.for_module(module) if module else registry.sources
    return [_with_badge(source) for source in sources]


@router.get("/data-sources/{source_id}")
async def data_source_detail(
    source_id: str,
    registry: DataSourceRegistry = Depends(get_data_source_registry),
) -> Dict[str, Any]:
    source = registry.get(source_id)
    if source is None:
        raise HTTPException(status_code=404, detail=f"Unknown data source '{source_id}'")
    return _with_badge(source)

"""
City Health Composite Scorer

Rolls the air quality feed and the five synthetic domains up into five
component scores and one weighted overall score.
"""

from datetime import datetime
from typing import Dict, Optional, Sequence

from models.schemas import (
    AirQualityData, CityHealthComponents, CityHealthIndex, HealthData,
    PowerData, SafetyData, TrafficData, WaterData
)
from services.engine import clamp, mean_or, round_half_up, safe_ratio

DEFAULT_FALLBACK_AQI = 150.0

COMPONENT_WEIGHTS: Dict[str, float] = {
    "environment": 0.25,
    "infrastructure": 0.25,
    "safety": 0.15,
    "health": 0.20,
    "governance": 0.15,
}


def _score(value: float) -> int:
    return int(clamp(round_half_up(value), 0, 100))


def environment_score(air_quality: Sequence[AirQualityData], fallback_aqi: float = DEFAULT_FALLBACK_AQI) -> int:
    """Lower AQI is better; an empty feed is scored as AQI ``fallback_aqi``."""
    avg_aqi = mean_or([d.aqi for d in air_quality], default=fallback_aqi)
    return _score(100 - avg_aqi / 5)


def infrastructure_score(traffic: Sequence[TrafficData], power: Sequence[PowerData]) -> int:
    """Traffic flow and power stability, weighted equally."""
    avg_congestion = mean_or([d.congestion_index for d in traffic])
    power_deficit = sum(max(0, d.demand - d.supply) for d in power)
    total_demand = sum(d.demand for d in power)
    deficit_ratio = safe_ratio(power_deficit, total_demand, default=0.0)
    return _score((100 - avg_congestion) * 0.5 + (1 - deficit_ratio) * 100 * 0.5)


def safety_score(safety: Sequence[SafetyData]) -> int:
    return _score(100 - mean_or([d.crime_index for d in safety]))


def health_score(health: Sequence[HealthData]) -> int:
    """Bed availability and ambulance response time, weighted equally."""
    # Zones without beds count as fully occupied
    avg_occupancy = mean_or([safe_ratio(d.beds_occupied, d.hospital_beds, default=1.0) for d in health])
    avg_response_time = mean_or([d.avg_response_time for d in health])
    return _score((1 - avg_occupancy) * 50 + (1 - avg_response_time / 30) * 50)


def governance_score(water: Sequence[WaterData], power: Sequence[PowerData]) -> int:
    """Water supply efficiency and low outage counts."""
    water_deficit = sum(max(0, d.demand - d.supply) for d in water)
    total_water_demand = sum(d.demand for d in water)
    deficit_ratio = safe_ratio(water_deficit, total_water_demand, default=0.0)
    total_outages = sum(d.outages for d in power)
    return _score((1 - deficit_ratio) * 60 + max(0, 100 - total_outages * 3) * 0.4)


def score_overall(components: CityHealthComponents) -> int:
    """Weighted sum of the component scores."""
    total = sum(getattr(components, name) * weight for name, weight in COMPONENT_WEIGHTS.items())
    return _score(total)


def compute_city_health_index(
    air_quality: Sequence[AirQualityData],
    traffic: Sequence[TrafficData],
    power: Sequence[PowerData],
    water: Sequence[WaterData],
    health: Sequence[HealthData],
    safety: Sequence[SafetyData],
    fallback_aqi: float = DEFAULT_FALLBACK_AQI,
    timestamp: Optional[datetime] = None,
) -> CityHealthIndex:
    """
    Compute the composite city health index.

    Args:
        air_quality: Air quality readings, possibly empty
        traffic: Traffic records
        power: Power records
        water: Water records (feeds the governance component)
        health: Health records
        safety: Safety records
        fallback_aqi: AQI assumed when no air quality readings are available
        timestamp: Timestamp of the index, defaults to now

    Returns:
        CityHealthIndex with every score rounded and bounded to 0-100
    """
    components = CityHealthComponents(
        environment=environment_score(air_quality, fallback_aqi),
        infrastructure=infrastructure_score(traffic, power),
        safety=safety_score(safety),
        health=health_score(health),
        governance=governance_score(water, power),
    )
    return CityHealthIndex(
        overall=score_overall(components),
        components=components,
        timestamp=timestamp or datetime.now(),
    )

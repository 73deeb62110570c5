"""
KPI Summarizer

Reduces the domain snapshots and the live feeds to the fixed, ordered set
of indicator cards shown at the top of the dashboard.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from models.schemas import (
    AirQualityData, KPIRecord, KPIStatus, PowerData, TrafficData,
    TrendDirection, WaterData, WeatherSnapshot
)
from services.engine import mean_or, round_half_up, safe_ratio

UNAVAILABLE = "N/A"
LIVE_SOURCE = "Open-Meteo"
MODEL_SOURCE = "Model"


def _status_at_most(value: float, good: float, warning: float) -> KPIStatus:
    """Lower is better."""
    if value <= good:
        return KPIStatus.GOOD
    if value <= warning:
        return KPIStatus.WARNING
    return KPIStatus.CRITICAL


def _status_at_least(ratio: float, good: float, warning: float) -> KPIStatus:
    """Higher is better."""
    if ratio >= good:
        return KPIStatus.GOOD
    if ratio >= warning:
        return KPIStatus.WARNING
    return KPIStatus.CRITICAL


def aqi_kpi(air_quality: Sequence[AirQualityData], now: datetime) -> KPIRecord:
    if not air_quality:
        return KPIRecord(
            id="aqi", label="Air Quality Index", value=UNAVAILABLE, unit="AQI",
            status=KPIStatus.WARNING, trend=TrendDirection.STABLE,
            last_updated=now, source=LIVE_SOURCE,
        )
    avg_aqi = round_half_up(mean_or([d.aqi for d in air_quality]))
    return KPIRecord(
        id="aqi", label="Air Quality Index", value=avg_aqi, unit="AQI",
        status=_status_at_most(avg_aqi, 100, 200), trend=TrendDirection.STABLE,
        last_updated=now, source=LIVE_SOURCE,
    )


def traffic_kpi(traffic: Sequence[TrafficData], now: datetime) -> KPIRecord:
    avg_congestion = round_half_up(mean_or([d.congestion_index for d in traffic]))
    return KPIRecord(
        id="traffic", label="Traffic Congestion", value=avg_congestion, unit="%",
        status=_status_at_most(avg_congestion, 40, 60),
        trend=TrendDirection.UP if avg_congestion > 50 else TrendDirection.DOWN,
        last_updated=now, source=MODEL_SOURCE,
    )


def power_kpi(power: Sequence[PowerData], now: datetime) -> KPIRecord:
    # No demand means nothing is unmet
    ratio = safe_ratio(sum(d.supply for d in power), sum(d.demand for d in power), default=1.0)
    return KPIRecord(
        id="power", label="Power Availability", value=round_half_up(ratio * 100), unit="%",
        status=_status_at_least(ratio, 0.98, 0.95),
        last_updated=now, source=MODEL_SOURCE,
    )


def water_kpi(water: Sequence[WaterData], now: datetime) -> KPIRecord:
    ratio = safe_ratio(sum(d.supply for d in water), sum(d.demand for d in water), default=1.0)
    return KPIRecord(
        id="water", label="Water Supply Ratio", value=round_half_up(ratio * 100), unit="%",
        status=_status_at_least(ratio, 0.85, 0.70),
        last_updated=now, source=MODEL_SOURCE,
    )


def temperature_kpi(weather: WeatherSnapshot) -> KPIRecord:
    return KPIRecord(
        id="temperature", label="Temperature", value=round_half_up(weather.temperature_2m), unit="°C",
        status=_status_at_most(weather.temperature_2m, 35, 42),
        last_updated=weather.time, source=LIVE_SOURCE,
    )


def outages_kpi(power: Sequence[PowerData], now: datetime) -> KPIRecord:
    total_outages = sum(d.outages for d in power)
    return KPIRecord(
        id="outages", label="Active Outages", value=total_outages, unit="incidents",
        status=_status_at_most(total_outages, 5, 15),
        last_updated=now, source=MODEL_SOURCE,
    )


def build_dashboard_kpis(
    air_quality: Sequence[AirQualityData],
    weather: Optional[WeatherSnapshot],
    traffic: Sequence[TrafficData],
    power: Sequence[PowerData],
    water: Sequence[WaterData],
    now: Optional[datetime] = None,
) -> List[KPIRecord]:
    """
    Build the five dashboard KPIs.

    The fifth card is the live temperature when a weather reading is
    available and the active outage count otherwise.
    """
    now = now or datetime.now()
    kpis = [
        aqi_kpi(air_quality, now),
        traffic_kpi(traffic, now),
        power_kpi(power, now),
        water_kpi(water, now),
    ]
    kpis.append(temperature_kpi(weather) if weather is not None else outages_kpi(power, now))
    return kpis

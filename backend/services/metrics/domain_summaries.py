"""
Domain Summaries Service

City-wide roll-ups of the per-zone domain records using pandas, plus a
zone overview table joining every domain on the zone id.
"""

from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
from pydantic import BaseModel

from core.zones import ZONES, zone_name
from models.schemas import (
    AirQualityData, DomainSnapshots, PowerData, PowerSummary, TrafficData,
    TrafficSummary, WaterData, WaterSummary, Zone, ZoneDeficit
)
from services.engine import get_aqi_category, round_half_up, safe_ratio


def records_to_frame(records: Sequence[BaseModel]) -> pd.DataFrame:
    """Convert a list of records to a DataFrame (one row per record)."""
    return pd.DataFrame([record.model_dump() for record in records])


def _mean(df: pd.DataFrame, column: str) -> int:
    if df.empty:
        return 0
    return round_half_up(float(df[column].mean()))


def _ratio_percent(supply: float, demand: float) -> int:
    return round_half_up(safe_ratio(supply, demand, default=1.0) * 100)


def summarize_power(power: Sequence[PowerData], top_n: int = 3) -> PowerSummary:
    """Totals, renewable share and the zones with the largest supply deficit."""
    df = records_to_frame(power)
    if df.empty:
        return PowerSummary(
            total_demand=0, total_supply=0, total_outages=0,
            avg_renewable_percent=0, supply_ratio_percent=100,
        )

    df["deficit"] = df["demand"] - df["supply"]
    deficit_rows = df[df["deficit"] > 0].sort_values("deficit", ascending=False, kind="stable").head(top_n)

    return PowerSummary(
        total_demand=int(df["demand"].sum()),
        total_supply=int(df["supply"].sum()),
        total_outages=int(df["outages"].sum()),
        avg_renewable_percent=_mean(df, "renewable_percent"),
        supply_ratio_percent=_ratio_percent(df["supply"].sum(), df["demand"].sum()),
        deficit_zones=[
            ZoneDeficit(zone=row.zone, name=zone_name(row.zone), deficit=int(row.deficit))
            for row in deficit_rows.itertuples()
        ],
    )


def summarize_water(water: Sequence[WaterData]) -> WaterSummary:
    """Totals, reservoir level and per-zone supply ratio."""
    df = records_to_frame(water)
    if df.empty:
        return WaterSummary(
            total_supply=0, total_demand=0, total_leakages=0,
            avg_reservoir_level=0, supply_ratio_percent=100,
        )

    return WaterSummary(
        total_supply=int(df["supply"].sum()),
        total_demand=int(df["demand"].sum()),
        total_leakages=int(df["leakages"].sum()),
        avg_reservoir_level=_mean(df, "reservoir_level"),
        supply_ratio_percent=_ratio_percent(df["supply"].sum(), df["demand"].sum()),
        zone_supply_ratios={
            row.zone: _ratio_percent(row.supply, row.demand) for row in df.itertuples()
        },
    )


def summarize_traffic(traffic: Sequence[TrafficData], top_n: int = 3) -> TrafficSummary:
    """Average congestion and speed, incidents and the most congested zones."""
    df = records_to_frame(traffic)
    if df.empty:
        return TrafficSummary(avg_congestion=0, avg_speed=0, total_incidents=0)

    most_congested = df.sort_values("congestion_index", ascending=False, kind="stable").head(top_n)
    return TrafficSummary(
        avg_congestion=_mean(df, "congestion_index"),
        avg_speed=_mean(df, "avg_speed"),
        total_incidents=int(df["incidents"].sum()),
        most_congested_zones=most_congested["zone"].tolist(),
    )


def build_zone_overview(
    snapshots: DomainSnapshots,
    air_quality: Optional[Sequence[AirQualityData]] = None,
    zones: Sequence[Zone] = ZONES,
) -> pd.DataFrame:
    """
    Join zone metadata with every domain snapshot.

    Returns:
        DataFrame with one row per zone, in zone order. Zones without an
        air quality reading have a null ``aqi`` and null
        ``aqi_category``/``aqi_status``.
    """
    overview = pd.DataFrame([
        {"zone": z.id, "name": z.name, "code": z.code, "population": z.population, "area": z.area}
        for z in zones
    ])

    columns = {
        "traffic": ["congestion_index", "avg_speed"],
        "power": ["demand", "supply", "outages"],
        "water": ["supply", "demand", "reservoir_level"],
        "health": ["hospital_beds", "beds_occupied", "avg_response_time"],
        "safety": ["crime_index", "risk_level"],
    }
    for domain, fields in columns.items():
        df = records_to_frame(getattr(snapshots, domain))
        if df.empty:
            continue
        df = df[["zone"] + fields].rename(columns={f: f"{domain}_{f}" for f in fields})
        overview = overview.merge(df, on="zone", how="left")

    aqi_frame = records_to_frame(air_quality or [])
    if aqi_frame.empty:
        overview["aqi"] = np.nan
    else:
        overview = overview.merge(aqi_frame[["zone", "aqi"]], on="zone", how="left")

    overview["aqi_category"] = overview["aqi"].map(
        lambda aqi: None if pd.isna(aqi) else get_aqi_category(aqi).label
    )
    overview["aqi_status"] = overview["aqi"].map(
        lambda aqi: None if pd.isna(aqi) else get_aqi_category(aqi).status.value
    )

    if "safety_risk_level" in overview:
        overview["safety_risk_level"] = overview["safety_risk_level"].map(
            lambda level: getattr(level, "value", level)
        )
    return overview


def overview_records(overview: pd.DataFrame) -> List[dict]:
    """JSON-safe rows of a zone overview (NaN becomes None)."""
    return overview.astype(object).where(overview.notna(), None).to_dict(orient="records")

"""
Pydantic schemas for the City Operations Engine.

These schemas define the value objects produced and consumed by the
engine: zone reference data, per-domain metric records, scenario inputs
and projections, the composite city health index and dashboard KPIs.
All of them are immutable once constructed.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field


class FrozenModel(BaseModel):
    """Base class for immutable value objects."""
    model_config = ConfigDict(frozen=True)


class Domain(str, Enum):
    """Synthetic metric domains."""
    TRAFFIC = "traffic"
    POWER = "power"
    WATER = "water"
    HEALTH = "health"
    SAFETY = "safety"


class RiskLevel(str, Enum):
    """Qualitative safety risk level."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class KPIStatus(str, Enum):
    """Status classification for indicator cards."""
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


class TrendDirection(str, Enum):
    """Trend direction for indicator cards."""
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class EventType(str, Enum):
    """Categorical city event used by the scenario simulator."""
    NONE = "none"
    FESTIVAL = "festival"
    EMERGENCY = "emergency"
    STRIKE = "strike"


class DataSourceType(str, Enum):
    """Provenance of a data source."""
    REAL = "REAL"
    MODEL = "MODEL"
    HYBRID = "HYBRID"


# ===== Zone Reference =====

class Zone(FrozenModel):
    """Administrative zone of the city."""
    id: str
    name: str
    code: str
    population: int
    area: float  # sq km
    coordinates: Tuple[float, float]  # (lng, lat)

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]


# ===== Domain Metric Records =====

class TrafficData(FrozenModel):
    """Traffic metrics for one zone."""
    zone: str
    congestion_index: int = Field(ge=0, le=100)
    avg_speed: int  # km/h
    incidents: int
    timestamp: datetime


class PowerData(FrozenModel):
    """Power grid metrics for one zone."""
    zone: str
    demand: int  # MW
    supply: int  # MW
    peak_load: int  # MW
    outages: int
    renewable_percent: int
    timestamp: datetime


class WaterData(FrozenModel):
    """Water supply metrics for one zone."""
    zone: str
    supply: int  # MGD
    demand: int  # MGD
    reservoir_level: int  # percentage
    leakages: int
    timestamp: datetime


class HealthData(FrozenModel):
    """Health infrastructure metrics for one zone."""
    zone: str
    hospital_beds: int
    beds_occupied: int
    ambulances: int
    avg_response_time: int  # minutes
    emergency_calls: int
    timestamp: datetime


class SafetyData(FrozenModel):
    """Public safety metrics for one zone."""
    zone: str
    crime_index: int = Field(ge=0, le=100)
    incidents: int
    patrol_units: int
    response_time: int  # minutes
    risk_level: RiskLevel
    timestamp: datetime


class DomainSnapshots(FrozenModel):
    """One generation pass over every domain, sharing a time context."""
    traffic: List[TrafficData]
    power: List[PowerData]
    water: List[WaterData]
    health: List[HealthData]
    safety: List[SafetyData]


# ===== External Feeds =====

class AirQualityData(FrozenModel):
    """Current air quality reading for one zone."""
    zone: str
    aqi: int
    pm25: int
    pm10: int
    no2: int
    so2: int
    co: int  # ppm
    o3: int
    timestamp: datetime
    source: str = "Open-Meteo"


class WeatherSnapshot(FrozenModel):
    """Current weather at the city reference point."""
    time: datetime
    temperature_2m: float
    relative_humidity_2m: float
    wind_speed_10m: float
    weather_code: int
    description: str = "Unknown"


class AQICategory(FrozenModel):
    """AQI band with display label and status."""
    min: int
    max: int
    label: str
    status: KPIStatus


# ===== Scenario Models =====

class ScenarioParameters(FrozenModel):
    """What-if stressors applied to the current city state."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    rainfall_increase: float = 0.0  # percentage
    traffic_surge: float = 0.0  # percentage
    power_demand_spike: float = 0.0  # percentage
    temperature_change: float = 0.0  # degrees Celsius
    event_type: EventType = EventType.NONE


class ScenarioImpact(FrozenModel):
    """Projected impact of a scenario."""
    flood_risk: int = Field(ge=0, le=100)
    traffic_delay_percent: int = Field(ge=0, le=100)
    power_shortfall: int = Field(ge=0)  # MW
    water_stress_index: int = Field(ge=0, le=100)
    emergency_load_increase: int = Field(ge=0)  # percentage
    affected_zones: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


# ===== City Health Models =====

class CityHealthComponents(FrozenModel):
    """Normalized component scores of the city health index."""
    environment: int = Field(ge=0, le=100)
    infrastructure: int = Field(ge=0, le=100)
    safety: int = Field(ge=0, le=100)
    health: int = Field(ge=0, le=100)
    governance: int = Field(ge=0, le=100)


class CityHealthIndex(FrozenModel):
    """Composite city health score."""
    overall: int = Field(ge=0, le=100)
    components: CityHealthComponents
    timestamp: datetime


# ===== Dashboard Models =====

class KPIRecord(FrozenModel):
    """Top-level indicator card."""
    id: str
    label: str
    value: Union[int, float, str]
    unit: Optional[str] = None
    status: KPIStatus
    trend: Optional[TrendDirection] = None
    last_updated: datetime
    source: Optional[str] = None


class DataSource(FrozenModel):
    """Registry entry describing where a figure comes from."""
    id: str
    name: str
    type: DataSourceType
    description: str
    url: Optional[str] = None
    update_frequency: str
    notes: Optional[str] = None
    modules: List[str] = Field(default_factory=list)
    requires_key: bool = False


class DataSourcesConfig(BaseModel):
    """Complete data-source registry file."""
    sources: List[DataSource]


# ===== Domain Summaries =====

class ZoneDeficit(FrozenModel):
    """Supply shortfall for a single zone."""
    zone: str
    name: str
    deficit: int


class PowerSummary(FrozenModel):
    """City-wide roll-up of power records."""
    total_demand: int
    total_supply: int
    total_outages: int
    avg_renewable_percent: int
    supply_ratio_percent: int
    deficit_zones: List[ZoneDeficit] = Field(default_factory=list)


class WaterSummary(FrozenModel):
    """City-wide roll-up of water records."""
    total_supply: int
    total_demand: int
    total_leakages: int
    avg_reservoir_level: int
    supply_ratio_percent: int
    zone_supply_ratios: Dict[str, int] = Field(default_factory=dict)


class TrafficSummary(FrozenModel):
    """City-wide roll-up of traffic records."""
    avg_congestion: int
    avg_speed: int
    total_incidents: int
    most_congested_zones: List[str] = Field(default_factory=list)

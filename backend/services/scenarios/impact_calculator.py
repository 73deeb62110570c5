"""
Scenario impact calculator.

Projects the effect of a what-if scenario onto the current traffic, power
and water state. The calculation is a pure function of its inputs; callers
supply the snapshots to project against.
"""

from typing import Dict, List, Sequence, Tuple

from models.schemas import (
    EventType, PowerData, ScenarioImpact, ScenarioParameters, TrafficData, WaterData
)
from services.engine import clamp, mean_or, round_half_up, safe_ratio

BASE_FLOOD_RISK = 15
HEAVY_RAINFALL_THRESHOLD = 50
HEAVY_RAINFALL_FLOOD_BONUS = 20
HEAVY_RAINFALL_EMERGENCY_LOAD = 40
WATER_STRESS_OFFSET = 25

# Cooling load per degree of warming
POWER_MW_PER_DEGREE = 50
WATER_MGD_PER_DEGREE = 20

EVENT_EMERGENCY_LOAD: Dict[EventType, int] = {
    EventType.NONE: 0,
    EventType.FESTIVAL: 30,
    EventType.EMERGENCY: 80,
    EventType.STRIKE: 20,
}

LOW_LYING_ZONES: Tuple[str, ...] = ("east", "northeast", "shahdara", "northwest")
GRID_CRITICAL_ZONES: Tuple[str, ...] = ("central", "south", "west")
WATER_CRITICAL_ZONES: Tuple[str, ...] = ("northwest", "southwest")

# (threshold, recommendations) in check order
FLOOD_RECOMMENDATIONS = (40, (
    "Activate flood control measures in low-lying areas",
    "Pre-position NDRF teams in East and Northeast Delhi",
))
TRAFFIC_RECOMMENDATIONS = (60, (
    "Implement odd-even traffic restrictions",
    "Deploy additional traffic police at major junctions",
))
POWER_RECOMMENDATIONS = (300, (
    "Initiate load shedding protocol in non-essential areas",
    "Request additional power from Northern Grid",
))
WATER_RECOMMENDATIONS = (50, (
    "Implement water rationing in affected zones",
    "Deploy water tankers to high-stress areas",
))
EMERGENCY_RECOMMENDATIONS = (50, (
    "Activate all available ambulances",
    "Set up temporary medical camps",
))


def flood_risk(rainfall_increase: float) -> float:
    """Every 20% of extra rainfall adds 15 risk points, plus a heavy-rain bonus."""
    risk = min(100, BASE_FLOOD_RISK + (rainfall_increase / 20) * 15)
    if rainfall_increase > HEAVY_RAINFALL_THRESHOLD:
        risk += HEAVY_RAINFALL_FLOOD_BONUS
    return clamp(risk, 0, 100)


def traffic_delay(traffic: Sequence[TrafficData], traffic_surge: float, rainfall_increase: float) -> float:
    base_delay = mean_or([t.congestion_index for t in traffic], default=0.0)
    return clamp(base_delay + traffic_surge + rainfall_increase * 0.3, 0, 100)


def power_shortfall(power: Sequence[PowerData], demand_spike: float, temperature_change: float) -> float:
    total_demand = sum(p.demand for p in power)
    total_supply = sum(p.supply for p in power)
    additional_demand = total_demand * (demand_spike / 100)
    cooling_demand = max(0.0, temperature_change) * POWER_MW_PER_DEGREE
    return max(0.0, total_demand + additional_demand + cooling_demand - total_supply)


def water_stress(water: Sequence[WaterData], temperature_change: float) -> float:
    total_demand = sum(w.demand for w in water)
    total_supply = sum(w.supply for w in water)
    extra_demand = max(0.0, temperature_change) * WATER_MGD_PER_DEGREE
    deficit_ratio = safe_ratio(total_demand + extra_demand - total_supply, total_demand, default=0.0)
    return clamp(deficit_ratio * 100 + WATER_STRESS_OFFSET, 0, 100)


def emergency_load(event_type: EventType, rainfall_increase: float) -> float:
    load = EVENT_EMERGENCY_LOAD[EventType(event_type)]
    if rainfall_increase > HEAVY_RAINFALL_THRESHOLD:
        load += HEAVY_RAINFALL_EMERGENCY_LOAD
    return max(0, load)


def affected_zones(flood: float, shortfall: float, stress: float) -> List[str]:
    zones: List[str] = []
    if flood > 50:
        zones.extend(LOW_LYING_ZONES)
    if shortfall > 500:
        zones.extend(GRID_CRITICAL_ZONES)
    if stress > 60:
        zones.extend(WATER_CRITICAL_ZONES)
    return list(dict.fromkeys(zones))


def recommendations(flood: float, delay: float, shortfall: float, stress: float, load: float) -> List[str]:
    checks = (
        (flood, FLOOD_RECOMMENDATIONS),
        (delay, TRAFFIC_RECOMMENDATIONS),
        (shortfall, POWER_RECOMMENDATIONS),
        (stress, WATER_RECOMMENDATIONS),
        (load, EMERGENCY_RECOMMENDATIONS),
    )
    result: List[str] = []
    for value, (threshold, messages) in checks:
        if value > threshold:
            result.extend(messages)
    return result


def simulate_scenario(
    params: ScenarioParameters,
    traffic: Sequence[TrafficData],
    power: Sequence[PowerData],
    water: Sequence[WaterData],
) -> ScenarioImpact:
    """
    Project a scenario onto the supplied city state.

    Args:
        params: Scenario stressors; not range-validated
        traffic: Current traffic records
        power: Current power records
        water: Current water records

    Returns:
        ScenarioImpact with every numeric rounded and clamped to its bounds
    """
    flood = flood_risk(params.rainfall_increase)
    delay = traffic_delay(traffic, params.traffic_surge, params.rainfall_increase)
    shortfall = power_shortfall(power, params.power_demand_spike, params.temperature_change)
    stress = water_stress(water, params.temperature_change)
    load = emergency_load(params.event_type, params.rainfall_increase)

    return ScenarioImpact(
        flood_risk=round_half_up(flood),
        traffic_delay_percent=round_half_up(delay),
        power_shortfall=round_half_up(shortfall),
        water_stress_index=round_half_up(stress),
        emergency_load_increase=round_half_up(load),
        affected_zones=affected_zones(flood, shortfall, stress),
        recommendations=recommendations(flood, delay, shortfall, stress, load),
    )

"""
Traffic congestion model.

Congestion is derived from zone road density and commercial activity,
scaled by time of day. Peak congestion follows the 8-10 AM and 5-8 PM
commuter windows. This is a model, not live traffic telemetry.
"""

import math
from typing import Dict, List, Optional, Sequence

from core.zones import ZONES
from models.schemas import TrafficData, Zone
from services.engine import RandomSource, TimeContext, clamp, resolve_time_context, round_half_up, seeded_random

# Base congestion per zone (road density + commercial activity)
ZONE_TRAFFIC_BASE: Dict[str, float] = {
    "central": 75,    # high commercial density, narrow roads
    "newdelhi": 70,
    "south": 65,
    "east": 60,
    "west": 55,
    "north": 50,
    "northeast": 55,
    "northwest": 45,  # outer ring
    "southeast": 50,
    "southwest": 45,
    "shahdara": 60,
}
DEFAULT_TRAFFIC_BASE = 50

NIGHT_MULTIPLIER = 0.3
PEAK_MULTIPLIER = 1.4
OFF_PEAK_MULTIPLIER = 0.7

VARIANCE_SPREAD = 15
INCIDENT_SEED_OFFSET = 100


def peak_multiplier(context: TimeContext) -> float:
    """Time-of-day multiplier applied to base congestion."""
    if context.is_night_time:
        return NIGHT_MULTIPLIER
    if context.is_peak_hour:
        return PEAK_MULTIPLIER
    return OFF_PEAK_MULTIPLIER


def average_speed(congestion_index: int) -> int:
    """Average speed falls linearly with congestion."""
    return round_half_up(60 - congestion_index * 0.5)


def generate_traffic_data(
    context: Optional[TimeContext] = None,
    zones: Sequence[Zone] = ZONES,
    random_source: RandomSource = seeded_random,
) -> List[TrafficData]:
    """Generate one traffic record per zone, in zone order."""
    context = context or resolve_time_context()
    seed = context.time_seed
    multiplier = peak_multiplier(context)

    records = []
    for idx, zone in enumerate(zones):
        base = ZONE_TRAFFIC_BASE.get(zone.id, DEFAULT_TRAFFIC_BASE)
        variance = random_source(seed + idx) * VARIANCE_SPREAD - VARIANCE_SPREAD / 2
        congestion = clamp(round_half_up(base * multiplier + variance), 0, 100)

        records.append(TrafficData(
            zone=zone.id,
            congestion_index=congestion,
            avg_speed=average_speed(congestion),
            incidents=math.floor(random_source(seed + idx + INCIDENT_SEED_OFFSET) * 5),
            timestamp=context.timestamp,
        ))
    return records

"""
Water supply model.

Roughly 900 MGD of supply against 1,200 MGD of demand, with demand
peaking 6-9 AM and 6-9 PM. Zone split follows service-area population
and industrial use.
"""

import math
from typing import Dict, List, Optional, Sequence

from core.zones import ZONES
from models.schemas import WaterData, Zone
from services.engine import RandomSource, TimeContext, resolve_time_context, round_half_up, seeded_random

ZONE_WATER_SHARE: Dict[str, float] = {
    "central": 0.06,
    "newdelhi": 0.04,
    "south": 0.14,
    "east": 0.10,
    "west": 0.12,
    "north": 0.08,
    "northeast": 0.11,
    "northwest": 0.15,
    "southeast": 0.08,
    "southwest": 0.10,
    "shahdara": 0.07,
}
DEFAULT_WATER_SHARE = 0.08

BASE_SUPPLY_MGD = 900
BASE_DEMAND_MGD = 1200


def usage_factor(context: TimeContext) -> float:
    return 1.2 if context.is_water_peak_usage else 0.9


def generate_water_data(
    context: Optional[TimeContext] = None,
    zones: Sequence[Zone] = ZONES,
    random_source: RandomSource = seeded_random,
) -> List[WaterData]:
    """Generate one water record per zone, in zone order."""
    context = context or resolve_time_context()
    seed = context.time_seed
    base_demand = BASE_DEMAND_MGD * usage_factor(context)

    records = []
    for idx, zone in enumerate(zones):
        share = ZONE_WATER_SHARE.get(zone.id, DEFAULT_WATER_SHARE)
        records.append(WaterData(
            zone=zone.id,
            supply=round_half_up(BASE_SUPPLY_MGD * share * (0.9 + random_source(seed + idx) * 0.2)),
            demand=round_half_up(base_demand * share * (0.9 + random_source(seed + idx + 50) * 0.2)),
            reservoir_level=round_half_up(55 + random_source(seed + idx + 100) * 30),
            leakages=math.floor(random_source(seed + idx + 150) * 8),
            timestamp=context.timestamp,
        ))
    return records

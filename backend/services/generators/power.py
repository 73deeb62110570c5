"""
Power grid model.

City-wide base demand of 5,500 MW adjusted for season and time of day,
split across zones by a population/commercial share table. Supply tracks
demand within +/-2%.
"""

import math
from typing import Dict, List, Optional, Sequence

from core.zones import ZONES
from models.schemas import PowerData, Zone
from services.engine import RandomSource, TimeContext, resolve_time_context, round_half_up, seeded_random

ZONE_DEMAND_SHARE: Dict[str, float] = {
    "central": 0.12,   # high commercial
    "newdelhi": 0.08,  # government + hotels
    "south": 0.15,
    "east": 0.10,      # industrial
    "west": 0.12,
    "north": 0.08,
    "northeast": 0.10,
    "northwest": 0.12,
    "southeast": 0.06,
    "southwest": 0.05,
    "shahdara": 0.07,
}
DEFAULT_DEMAND_SHARE = 0.08

BASE_DEMAND_MW = 5500
PEAK_LOAD_FACTOR = 1.3
OFF_PEAK_LOAD_FACTOR = 0.9
SUMMER_FACTOR = 1.3
WINTER_FACTOR = 0.9


def total_city_demand(context: TimeContext) -> float:
    """City-wide demand in MW for the given time."""
    load_factor = PEAK_LOAD_FACTOR if context.is_power_peak else OFF_PEAK_LOAD_FACTOR
    seasonal_factor = SUMMER_FACTOR if context.is_summer else WINTER_FACTOR
    return BASE_DEMAND_MW * load_factor * seasonal_factor


def generate_power_data(
    context: Optional[TimeContext] = None,
    zones: Sequence[Zone] = ZONES,
    random_source: RandomSource = seeded_random,
) -> List[PowerData]:
    """Generate one power record per zone, in zone order."""
    context = context or resolve_time_context()
    seed = context.time_seed
    total_demand = total_city_demand(context)

    records = []
    for idx, zone in enumerate(zones):
        share = ZONE_DEMAND_SHARE.get(zone.id, DEFAULT_DEMAND_SHARE)
        demand = round_half_up(total_demand * share * (0.9 + random_source(seed + idx) * 0.2))
        supply = round_half_up(demand * (0.98 + random_source(seed + idx + 50) * 0.04))

        records.append(PowerData(
            zone=zone.id,
            demand=demand,
            supply=supply,
            peak_load=round_half_up(demand * 1.2),
            outages=math.floor(random_source(seed + idx + 200) * 3),
            renewable_percent=round_half_up(8 + random_source(seed + idx + 300) * 7),
            timestamp=context.timestamp,
        ))
    return records

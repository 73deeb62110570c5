"""
Health infrastructure model.

About 50,000 government hospital beds distributed by major hospital
locations. Emergency calls rise between 8 PM and 2 AM.
"""

from typing import Dict, List, Optional, Sequence

from core.zones import ZONES
from models.schemas import HealthData, Zone
from services.engine import RandomSource, TimeContext, resolve_time_context, round_half_up, seeded_random

ZONE_BED_SHARE: Dict[str, float] = {
    "central": 0.15,
    "newdelhi": 0.12,
    "south": 0.12,
    "east": 0.10,
    "west": 0.10,
    "north": 0.08,
    "northeast": 0.08,
    "northwest": 0.10,
    "southeast": 0.06,
    "southwest": 0.05,
    "shahdara": 0.06,
}
DEFAULT_BED_SHARE = 0.08

TOTAL_BEDS = 50000
HIGH_CALL_MULTIPLIER = 1.4


def generate_health_data(
    context: Optional[TimeContext] = None,
    zones: Sequence[Zone] = ZONES,
    random_source: RandomSource = seeded_random,
) -> List[HealthData]:
    """Generate one health record per zone, in zone order."""
    context = context or resolve_time_context()
    seed = context.time_seed
    call_multiplier = HIGH_CALL_MULTIPLIER if context.is_high_call_hour else 1.0

    records = []
    for idx, zone in enumerate(zones):
        beds = round_half_up(TOTAL_BEDS * ZONE_BED_SHARE.get(zone.id, DEFAULT_BED_SHARE))
        occupancy_rate = 0.7 + random_source(seed + idx) * 0.2

        records.append(HealthData(
            zone=zone.id,
            hospital_beds=beds,
            beds_occupied=round_half_up(beds * occupancy_rate),
            ambulances=round_half_up(20 + random_source(seed + idx + 50) * 30),
            avg_response_time=round_half_up(8 + random_source(seed + idx + 100) * 12),
            emergency_calls=round_half_up((50 + random_source(seed + idx + 150) * 100) * call_multiplier),
            timestamp=context.timestamp,
        ))
    return records

"""
Public safety model.

Crime index per zone from normalized district crime statistics, raised
during the 8 PM - 4 AM window.
"""

import math
from typing import Dict, List, Optional, Sequence

from core.zones import ZONES
from models.schemas import RiskLevel, SafetyData, Zone
from services.engine import RandomSource, TimeContext, resolve_time_context, round_half_up, seeded_random

ZONE_CRIME_BASE: Dict[str, float] = {
    "central": 45,
    "newdelhi": 35,
    "south": 40,
    "east": 50,
    "west": 42,
    "north": 55,
    "northeast": 60,
    "northwest": 48,
    "southeast": 38,
    "southwest": 35,
    "shahdara": 52,
}
DEFAULT_CRIME_BASE = 45

HIGH_RISK_MULTIPLIER = 1.3
LOW_RISK_MULTIPLIER = 0.8


def classify_risk(crime_index: int) -> RiskLevel:
    if crime_index > 55:
        return RiskLevel.HIGH
    if crime_index > 40:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def generate_safety_data(
    context: Optional[TimeContext] = None,
    zones: Sequence[Zone] = ZONES,
    random_source: RandomSource = seeded_random,
) -> List[SafetyData]:
    """Generate one safety record per zone, in zone order."""
    context = context or resolve_time_context()
    seed = context.time_seed
    multiplier = HIGH_RISK_MULTIPLIER if context.is_high_risk_hour else LOW_RISK_MULTIPLIER

    records = []
    for idx, zone in enumerate(zones):
        base = ZONE_CRIME_BASE.get(zone.id, DEFAULT_CRIME_BASE)
        # Risk level is classified on the uncapped index
        crime_index = round_half_up(base * multiplier * (0.9 + random_source(seed + idx) * 0.2))

        records.append(SafetyData(
            zone=zone.id,
            crime_index=min(100, crime_index),
            incidents=math.floor(random_source(seed + idx + 50) * 10),
            patrol_units=round_half_up(10 + random_source(seed + idx + 100) * 20),
            response_time=round_half_up(5 + random_source(seed + idx + 150) * 10),
            risk_level=classify_risk(crime_index),
            timestamp=context.timestamp,
        ))
    return records

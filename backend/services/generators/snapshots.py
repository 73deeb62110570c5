"""
Bundled generation across all domains from one shared time context.
"""

from typing import Callable, Dict, List, Optional, Sequence

from core.zones import ZONES
from models.schemas import Domain, DomainSnapshots, Zone
from services.engine import RandomSource, TimeContext, resolve_time_context, seeded_random

from .health import generate_health_data
from .power import generate_power_data
from .safety import generate_safety_data
from .traffic import generate_traffic_data
from .water import generate_water_data

GENERATORS: Dict[Domain, Callable[..., List]] = {
    Domain.TRAFFIC: generate_traffic_data,
    Domain.POWER: generate_power_data,
    Domain.WATER: generate_water_data,
    Domain.HEALTH: generate_health_data,
    Domain.SAFETY: generate_safety_data,
}


def generate_domain(
    domain: Domain,
    context: Optional[TimeContext] = None,
    zones: Sequence[Zone] = ZONES,
    random_source: RandomSource = seeded_random,
) -> List:
    """Generate the records of a single domain."""
    generator = GENERATORS[Domain(domain)]
    return generator(context=context, zones=zones, random_source=random_source)


def generate_all(
    context: Optional[TimeContext] = None,
    zones: Sequence[Zone] = ZONES,
    random_source: RandomSource = seeded_random,
) -> DomainSnapshots:
    """Generate every domain against the same time context."""
    context = context or resolve_time_context()
    return DomainSnapshots(
        traffic=generate_traffic_data(context, zones, random_source),
        power=generate_power_data(context, zones, random_source),
        water=generate_water_data(context, zones, random_source),
        health=generate_health_data(context, zones, random_source),
        safety=generate_safety_data(context, zones, random_source),
    )

"""
Per-domain synthetic metric generators.

Each generator maps the zone reference list and a time context to one
record per zone, ordered like the zone list.
"""

from .health import generate_health_data
from .power import generate_power_data
from .safety import generate_safety_data
from .snapshots import GENERATORS, generate_all, generate_domain
from .traffic import generate_traffic_data
from .water import generate_water_data

__all__ = [
    "GENERATORS",
    "generate_all",
    "generate_domain",
    "generate_health_data",
    "generate_power_data",
    "generate_safety_data",
    "generate_traffic_data",
    "generate_water_data",
]

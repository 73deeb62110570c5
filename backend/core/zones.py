"""
Static zone reference for the city.

The reference list is loaded once and never mutated; every domain record
joins back to it through the zone id.
"""

from typing import Dict, Optional, Tuple

from models.schemas import Zone


ZONES: Tuple[Zone, ...] = (
    Zone(id="north", name="North Delhi", code="NDL", population=887978, area=59.57, coordinates=(77.2167, 28.7041)),
    Zone(id="south", name="South Delhi", code="SDL", population=2731929, area=250, coordinates=(77.2273, 28.5355)),
    Zone(id="east", name="East Delhi", code="EDL", population=1707725, area=64, coordinates=(77.3060, 28.6280)),
    Zone(id="west", name="West Delhi", code="WDL", population=2543243, area=129, coordinates=(77.0688, 28.6517)),
    Zone(id="central", name="Central Delhi", code="CDL", population=582320, area=25, coordinates=(77.2090, 28.6358)),
    Zone(id="newdelhi", name="New Delhi", code="NWD", population=257803, area=35, coordinates=(77.2090, 28.6139)),
    Zone(id="northeast", name="North East Delhi", code="NED", population=2241624, area=60, coordinates=(77.2636, 28.6916)),
    Zone(id="northwest", name="North West Delhi", code="NWD", population=3656539, area=440, coordinates=(77.0919, 28.7325)),
    Zone(id="southeast", name="South East Delhi", code="SED", population=1343515, area=43, coordinates=(77.2778, 28.5503)),
    Zone(id="southwest", name="South West Delhi", code="SWD", population=2292958, area=420, coordinates=(77.0573, 28.5644)),
    Zone(id="shahdara", name="Shahdara", code="SHD", population=2328152, area=25, coordinates=(77.2917, 28.6731)),
)

_ZONES_BY_ID: Dict[str, Zone] = {zone.id: zone for zone in ZONES}

if len(_ZONES_BY_ID) != len(ZONES):
    raise RuntimeError("Zone identifiers must be unique")


def get_zone(zone_id: str) -> Optional[Zone]:
    """Look up a zone by id."""
    return _ZONES_BY_ID.get(zone_id)


def zone_ids() -> Tuple[str, ...]:
    """Zone ids in reference order."""
    return tuple(zone.id for zone in ZONES)


def zone_name(zone_id: str) -> str:
    """Display name for a zone id, falling back to the id itself."""
    zone = _ZONES_BY_ID.get(zone_id)
    return zone.name if zone else zone_id

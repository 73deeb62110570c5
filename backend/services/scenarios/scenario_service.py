"""
Stateless Scenario Service

Wraps the impact calculator with snapshot generation. All operations are
stateless; the current city state is either supplied by the caller or
regenerated for the requested time.
"""

from typing import Optional, Sequence

import structlog

from core.zones import ZONES
from models.schemas import DomainSnapshots, ScenarioImpact, ScenarioParameters, Zone
from services.engine import RandomSource, TimeContext, resolve_time_context, seeded_random
from services.generators import generate_power_data, generate_traffic_data, generate_water_data

from .impact_calculator import simulate_scenario

logger = structlog.get_logger(__name__)


class ScenarioService:
    """
    Stateless service for what-if scenario projection.

    Holds only read-only collaborators (zone list and random source), so one
    instance can serve concurrent requests.
    """

    def __init__(self, zones: Sequence[Zone] = ZONES, random_source: RandomSource = seeded_random):
        self.zones = zones
        self.random_source = random_source

    def simulate(
        self,
        params: ScenarioParameters,
        snapshots: Optional[DomainSnapshots] = None,
        context: Optional[TimeContext] = None,
    ) -> ScenarioImpact:
        """
        Project a scenario onto current city state.

        Args:
            params: Scenario stressors
            snapshots: Existing domain snapshots to project against
            context: Time context used when snapshots have to be generated

        Returns:
            Projected scenario impact
        """
        if snapshots is not None:
            traffic, power, water = snapshots.traffic, snapshots.power, snapshots.water
        else:
            context = context or resolve_time_context()
            traffic = generate_traffic_data(context, self.zones, self.random_source)
            power = generate_power_data(context, self.zones, self.random_source)
            water = generate_water_data(context, self.zones, self.random_source)

        impact = simulate_scenario(params, traffic, power, water)
        logger.info(
            "Scenario simulated",
            event_type=params.event_type.value,
            flood_risk=impact.flood_risk,
            power_shortfall=impact.power_shortfall,
            affected_zones=len(impact.affected_zones),
            recommendations=len(impact.recommendations),
        )
        return impact

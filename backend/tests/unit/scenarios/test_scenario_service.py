"""
Tests for the stateless ScenarioService.
"""

from conftest import constant_random, make_power, make_traffic, make_water
from models.schemas import DomainSnapshots, ScenarioParameters
from services.generators import generate_all
from services.scenarios import ScenarioService, simulate_scenario


class TestScenarioService:
    """Test ScenarioService snapshot handling."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = ScenarioService(random_source=constant_random(0.5))

    def test_uses_supplied_snapshots(self):
        snapshots = DomainSnapshots(
            traffic=[make_traffic("central", 70)],
            power=[make_power("central", 1000, 400)],
            water=[make_water("central", 50, 50)],
            health=[],
            safety=[],
        )
        impact = self.service.simulate(ScenarioParameters(), snapshots=snapshots)

        assert impact.traffic_delay_percent == 70
        assert impact.power_shortfall == 600
        assert impact.affected_zones == ["central", "south", "west"]

    def test_regenerates_for_context(self, summer_afternoon):
        params = ScenarioParameters(rainfall_increase=30, traffic_surge=15)
        snapshots = generate_all(summer_afternoon, random_source=constant_random(0.5))

        expected = simulate_scenario(params, snapshots.traffic, snapshots.power, snapshots.water)
        assert self.service.simulate(params, context=summer_afternoon) == expected

    def test_repeatable_within_context(self, morning_peak):
        params = ScenarioParameters(power_demand_spike=25)

        first = self.service.simulate(params, context=morning_peak)
        second = self.service.simulate(params, context=morning_peak)
        assert first == second

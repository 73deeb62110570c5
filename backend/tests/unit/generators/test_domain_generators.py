"""
Tests for the per-domain synthetic generators.
"""

import pytest

from conftest import constant_random
from core.zones import ZONES, zone_ids
from models.schemas import Domain, DomainSnapshots, RiskLevel
from services.engine import seeded_random
from services.generators import (
    GENERATORS, generate_all, generate_domain, generate_health_data, generate_power_data,
    generate_safety_data, generate_traffic_data, generate_water_data
)
from services.generators.power import total_city_demand
from services.generators.safety import classify_risk
from services.generators.traffic import average_speed, peak_multiplier


class TestCommonProperties:
    """Properties shared by every generator."""

    @pytest.mark.parametrize("domain", list(Domain))
    def test_one_record_per_zone_in_order(self, domain, summer_afternoon):
        records = generate_domain(domain, summer_afternoon)

        assert [r.zone for r in records] == list(zone_ids())
        assert all(r.timestamp == summer_afternoon.timestamp for r in records)

    @pytest.mark.parametrize("domain", list(Domain))
    def test_deterministic_for_same_context(self, domain, morning_peak):
        assert generate_domain(domain, morning_peak) == generate_domain(domain, morning_peak)

    def test_registry_covers_every_domain(self):
        assert set(GENERATORS) == set(Domain)

    def test_subset_of_zones(self, summer_afternoon):
        records = generate_traffic_data(summer_afternoon, zones=ZONES[:3])
        assert [r.zone for r in records] == ["north", "south", "east"]

    def test_generate_all_shares_context(self, winter_night):
        snapshots = generate_all(winter_night)

        assert isinstance(snapshots, DomainSnapshots)
        for domain in Domain:
            records = getattr(snapshots, domain.value)
            assert len(records) == len(ZONES)
            assert {r.timestamp for r in records} == {winter_night.timestamp}


class TestTrafficGenerator:
    """Test the traffic congestion model."""

    def test_peak_multiplier(self, morning_peak, winter_night, summer_afternoon):
        assert peak_multiplier(morning_peak) == 1.4
        assert peak_multiplier(winter_night) == 0.3
        assert peak_multiplier(summer_afternoon) == 0.7

    def test_congestion_and_speed_bounds(self, morning_peak):
        for record in generate_traffic_data(morning_peak):
            assert 0 <= record.congestion_index <= 100
            assert record.avg_speed == average_speed(record.congestion_index)
            assert 0 <= record.incidents <= 4

    def test_peak_congestion_saturates(self, morning_peak):
        records = generate_traffic_data(morning_peak, random_source=constant_random(0.5))
        central = records[zone_ids().index("central")]

        # 75 * 1.4 = 105 before clamping
        assert central.congestion_index == 100
        assert central.avg_speed == 10
        assert central.incidents == 2

    def test_night_congestion(self, winter_night):
        records = generate_traffic_data(winter_night, random_source=constant_random(0.5))
        central = records[zone_ids().index("central")]

        assert central.congestion_index == 23
        assert central.avg_speed == 49

    def test_unknown_zone_uses_default_base(self, summer_afternoon):
        zone = ZONES[0].model_copy(update={"id": "riverside"})
        record = generate_traffic_data(summer_afternoon, zones=[zone], random_source=constant_random(0.5))[0]

        assert record.congestion_index == 35


class TestPowerGenerator:
    """Test the power grid model."""

    def test_total_city_demand(self, summer_afternoon, winter_night):
        assert total_city_demand(summer_afternoon) == pytest.approx(5500 * 1.3 * 1.3)
        assert total_city_demand(winter_night) == pytest.approx(5500 * 0.9 * 0.9)

    def test_peak_load_and_supply_band(self, summer_afternoon):
        for record in generate_power_data(summer_afternoon):
            assert record.peak_load == int(record.demand * 1.2 + 0.5)
            assert record.demand * 0.97 <= record.supply <= record.demand * 1.03
            assert 0 <= record.outages <= 2
            assert 8 <= record.renewable_percent <= 15

    def test_central_demand_share(self, summer_afternoon):
        records = generate_power_data(summer_afternoon, random_source=constant_random(0.5))
        central = records[zone_ids().index("central")]

        assert central.demand == 1115
        assert central.supply == 1115
        assert central.outages == 1


class TestWaterGenerator:
    """Test the water supply model."""

    def test_ranges(self, morning_peak):
        for record in generate_water_data(morning_peak):
            assert 55 <= record.reservoir_level <= 85
            assert 0 <= record.leakages <= 7
            assert record.supply > 0
            assert record.demand > 0

    def test_peak_usage_raises_demand(self, morning_peak, summer_afternoon):
        fixed = constant_random(0.5)
        peak = generate_water_data(morning_peak, random_source=fixed)
        off_peak = generate_water_data(summer_afternoon, random_source=fixed)

        assert sum(r.demand for r in peak) > sum(r.demand for r in off_peak)
        assert [r.supply for r in peak] == [r.supply for r in off_peak]

    def test_central_values(self, morning_peak):
        records = generate_water_data(morning_peak, random_source=constant_random(0.5))
        central = records[zone_ids().index("central")]

        assert central.supply == 54
        assert central.demand == 86
        assert central.reservoir_level == 70
        assert central.leakages == 4


class TestHealthGenerator:
    """Test the health infrastructure model."""

    def test_occupancy_band(self, summer_afternoon):
        for record in generate_health_data(summer_afternoon):
            assert record.hospital_beds * 0.69 <= record.beds_occupied <= record.hospital_beds * 0.91
            assert 20 <= record.ambulances <= 50
            assert 8 <= record.avg_response_time <= 20

    def test_total_beds(self, summer_afternoon):
        records = generate_health_data(summer_afternoon)
        assert sum(r.hospital_beds for r in records) == 51000

    def test_high_call_hours(self, summer_afternoon, winter_night):
        fixed = constant_random(0.5)
        day = generate_health_data(summer_afternoon, random_source=fixed)
        night = generate_health_data(winter_night, random_source=fixed)

        assert day[0].emergency_calls == 100
        assert night[0].emergency_calls == 140


class TestSafetyGenerator:
    """Test the public safety model."""

    @pytest.mark.parametrize("crime_index,expected", [
        (30, RiskLevel.LOW),
        (40, RiskLevel.LOW),
        (41, RiskLevel.MEDIUM),
        (55, RiskLevel.MEDIUM),
        (56, RiskLevel.HIGH),
        (130, RiskLevel.HIGH),
    ])
    def test_classify_risk(self, crime_index, expected):
        assert classify_risk(crime_index) is expected

    def test_ranges(self, winter_night):
        for record in generate_safety_data(winter_night):
            assert 0 <= record.crime_index <= 100
            assert 0 <= record.incidents <= 9
            assert 10 <= record.patrol_units <= 30
            assert 5 <= record.response_time <= 15

    def test_risk_hours(self, summer_afternoon, winter_night):
        fixed = constant_random(0.5)
        northeast = zone_ids().index("northeast")
        day = generate_safety_data(summer_afternoon, random_source=fixed)[northeast]
        night = generate_safety_data(winter_night, random_source=fixed)[northeast]

        assert day.crime_index == 48
        assert day.risk_level is RiskLevel.MEDIUM
        assert night.crime_index == 78
        assert night.risk_level is RiskLevel.HIGH

    def test_default_random_source(self, summer_afternoon):
        assert generate_safety_data(summer_afternoon) == generate_safety_data(
            summer_afternoon, random_source=seeded_random
        )

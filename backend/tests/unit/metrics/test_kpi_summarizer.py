"""
Tests for the dashboard KPI summarizer.
"""

from conftest import FIXED_TIMESTAMP, make_power, make_traffic, make_water
from models.schemas import KPIStatus, TrendDirection
from services.metrics import build_dashboard_kpis
from services.metrics.kpi_summarizer import (
    UNAVAILABLE, aqi_kpi, outages_kpi, power_kpi, temperature_kpi, traffic_kpi, water_kpi
)


class TestIndividualKpis:
    """Test each indicator card."""

    def test_aqi_kpi(self, sample_air_quality):
        kpi = aqi_kpi(sample_air_quality, FIXED_TIMESTAMP)

        assert kpi.value == 150
        assert kpi.status is KPIStatus.WARNING
        assert kpi.source == "Open-Meteo"

    def test_aqi_kpi_unavailable(self):
        kpi = aqi_kpi([], FIXED_TIMESTAMP)

        assert kpi.value == UNAVAILABLE
        assert kpi.status is KPIStatus.WARNING

    def test_traffic_kpi(self):
        busy = traffic_kpi([make_traffic("central", 70), make_traffic("east", 40)], FIXED_TIMESTAMP)
        quiet = traffic_kpi([make_traffic("central", 30)], FIXED_TIMESTAMP)

        assert busy.value == 55
        assert busy.status is KPIStatus.WARNING
        assert busy.trend is TrendDirection.UP
        assert quiet.status is KPIStatus.GOOD
        assert quiet.trend is TrendDirection.DOWN

    def test_power_kpi(self):
        kpi = power_kpi([make_power("central", 500, 490), make_power("east", 500, 490)], FIXED_TIMESTAMP)

        assert kpi.value == 98
        assert kpi.status is KPIStatus.GOOD

    def test_power_kpi_critical(self):
        kpi = power_kpi([make_power("central", 100, 90)], FIXED_TIMESTAMP)
        assert kpi.status is KPIStatus.CRITICAL

    def test_power_kpi_no_demand(self):
        kpi = power_kpi([], FIXED_TIMESTAMP)

        assert kpi.value == 100
        assert kpi.status is KPIStatus.GOOD

    def test_water_kpi(self):
        kpi = water_kpi([make_water("central", supply=80, demand=100)], FIXED_TIMESTAMP)

        assert kpi.value == 80
        assert kpi.status is KPIStatus.WARNING

    def test_temperature_kpi(self, sample_weather):
        kpi = temperature_kpi(sample_weather)

        assert kpi.value == 36
        assert kpi.unit == "°C"
        assert kpi.status is KPIStatus.WARNING
        assert kpi.last_updated == sample_weather.time

    def test_outages_kpi(self):
        kpi = outages_kpi([make_power("central", 100, 100, outages=2) for _ in range(4)], FIXED_TIMESTAMP)

        assert kpi.value == 8
        assert kpi.status is KPIStatus.WARNING


class TestBuildDashboardKpis:
    """Test the ordered KPI set."""

    def setup_method(self):
        """Set up test fixtures."""
        self.traffic = [make_traffic("central", 45)]
        self.power = [make_power("central", 100, 100, outages=1)]
        self.water = [make_water("central", 90, 100)]

    def test_five_cards_with_weather(self, sample_air_quality, sample_weather):
        kpis = build_dashboard_kpis(sample_air_quality, sample_weather, self.traffic, self.power,
                                    self.water, now=FIXED_TIMESTAMP)

        assert [k.id for k in kpis] == ["aqi", "traffic", "power", "water", "temperature"]

    def test_outages_replace_missing_weather(self, sample_air_quality):
        kpis = build_dashboard_kpis(sample_air_quality, None, self.traffic, self.power,
                                    self.water, now=FIXED_TIMESTAMP)

        assert [k.id for k in kpis] == ["aqi", "traffic", "power", "water", "outages"]
        assert kpis[-1].value == 1

    def test_everything_missing(self):
        kpis = build_dashboard_kpis([], None, [], [], [])

        assert len(kpis) == 5
        assert kpis[0].value == UNAVAILABLE
        assert kpis[1].value == 0

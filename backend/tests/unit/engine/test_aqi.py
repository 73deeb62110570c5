"""
Tests for AQI conversion and categories.
"""

import pytest

from models.schemas import KPIStatus
from services.engine import AQI_CATEGORIES, calculate_aqi, get_aqi_category
from services.engine.aqi import truncate_pm25


class TestCalculateAqi:
    """Test PM2.5 to AQI conversion."""

    @pytest.mark.parametrize("pm25,expected", [
        (0.0, 0),
        (6.0, 25),
        (12.0, 50),
        (12.1, 51),
        (35.4, 100),
        (35.5, 101),
        (500.4, 500),
    ])
    def test_breakpoints(self, pm25, expected):
        assert calculate_aqi(pm25) == expected

    def test_above_table_saturates(self):
        assert calculate_aqi(650) == 500

    @pytest.mark.parametrize("pm25,expected", [
        (12.05, 50),
        (35.45, 100),
        (55.45, 150),
        (150.45, 200),
    ])
    def test_values_between_bands_truncate_to_lower_band(self, pm25, expected):
        assert calculate_aqi(pm25) == expected

    def test_truncate_pm25(self):
        assert truncate_pm25(12.09) == 12.0
        assert truncate_pm25(12.1) == 12.1
        assert truncate_pm25(35.0) == 35.0

    def test_negative_yields_zero(self):
        assert calculate_aqi(-3) == 0


class TestAqiCategories:
    """Test AQI display categories."""

    def test_six_categories(self):
        assert [c.label for c in AQI_CATEGORIES] == [
            "Good", "Satisfactory", "Moderate", "Poor", "Very Poor", "Severe"
        ]

    @pytest.mark.parametrize("aqi,label,status", [
        (0, "Good", KPIStatus.GOOD),
        (50, "Good", KPIStatus.GOOD),
        (51, "Satisfactory", KPIStatus.GOOD),
        (150, "Moderate", KPIStatus.WARNING),
        (250, "Poor", KPIStatus.WARNING),
        (301, "Very Poor", KPIStatus.CRITICAL),
        (500, "Severe", KPIStatus.CRITICAL),
        (720, "Severe", KPIStatus.CRITICAL),
    ])
    def test_category_lookup(self, aqi, label, status):
        category = get_aqi_category(aqi)
        assert category.label == label
        assert category.status is status

"""
Air Quality Index helpers.

US EPA PM2.5 breakpoint conversion and the display categories used by the
dashboard.
"""

import math
from typing import NamedTuple, Tuple

from models.schemas import AQICategory, KPIStatus

from .numeric import round_half_up


class Breakpoint(NamedTuple):
    bp_lo: float
    bp_hi: float
    aqi_lo: int
    aqi_hi: int


# US EPA PM2.5 (ug/m3, 24-hour) breakpoints
PM25_BREAKPOINTS: Tuple[Breakpoint, ...] = (
    Breakpoint(0.0, 12.0, 0, 50),
    Breakpoint(12.1, 35.4, 51, 100),
    Breakpoint(35.5, 55.4, 101, 150),
    Breakpoint(55.5, 150.4, 151, 200),
    Breakpoint(150.5, 250.4, 201, 300),
    Breakpoint(250.5, 350.4, 301, 400),
    Breakpoint(350.5, 500.4, 401, 500),
)

AQI_CATEGORIES: Tuple[AQICategory, ...] = (
    AQICategory(min=0, max=50, label="Good", status=KPIStatus.GOOD),
    AQICategory(min=51, max=100, label="Satisfactory", status=KPIStatus.GOOD),
    AQICategory(min=101, max=200, label="Moderate", status=KPIStatus.WARNING),
    AQICategory(min=201, max=300, label="Poor", status=KPIStatus.WARNING),
    AQICategory(min=301, max=400, label="Very Poor", status=KPIStatus.CRITICAL),
    AQICategory(min=401, max=500, label="Severe", status=KPIStatus.CRITICAL),
)


def truncate_pm25(pm25: float) -> float:
    """Truncate to the 0.1 ug/m3 resolution of the breakpoint table."""
    return math.floor(round(pm25 * 10, 6)) / 10


def calculate_aqi(pm25: float) -> int:
    """
    Convert a PM2.5 concentration to AQI by linear interpolation within
    its breakpoint band.

    The concentration is truncated to one decimal first, so every value
    between two bands falls into the lower one. Concentrations above the
    table saturate at 500; negative values yield 0.
    """
    pm25 = truncate_pm25(pm25)
    for bp in PM25_BREAKPOINTS:
        if bp.bp_lo <= pm25 <= bp.bp_hi:
            slope = (bp.aqi_hi - bp.aqi_lo) / (bp.bp_hi - bp.bp_lo)
            return round_half_up(slope * (pm25 - bp.bp_lo) + bp.aqi_lo)
    return 500 if pm25 > 500 else 0


def get_aqi_category(aqi: float) -> AQICategory:
    """Display category for an AQI value; anything above 500 is Severe."""
    for category in AQI_CATEGORIES:
        if aqi <= category.max:
            return category
    return AQI_CATEGORIES[-1]

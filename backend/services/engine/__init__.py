"""
Deterministic engine primitives shared by the domain generators,
the scenario calculator and the city health aggregation.
"""

from .aqi import AQI_CATEGORIES, calculate_aqi, get_aqi_category
from .numeric import clamp, mean_or, round_half_up, safe_ratio
from .random_source import RandomSource, seeded_random
from .time_context import TimeContext, resolve_time_context

__all__ = [
    "AQI_CATEGORIES",
    "RandomSource",
    "TimeContext",
    "calculate_aqi",
    "clamp",
    "get_aqi_category",
    "mean_or",
    "resolve_time_context",
    "round_half_up",
    "safe_ratio",
    "seeded_random",
]

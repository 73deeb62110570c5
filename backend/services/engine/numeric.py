"""
Numeric helpers with explicit behaviour for degenerate inputs.
"""

import math
from typing import Iterable, Sequence, Union

import numpy as np

Number = Union[int, float]


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return int(math.floor(value + 0.5))


def clamp(value: Number, lower: Number, upper: Number) -> Number:
    """Constrain value to [lower, upper]."""
    return max(lower, min(upper, value))


def safe_ratio(numerator: Number, denominator: Number, default: float) -> float:
    """numerator / denominator, or ``default`` when the denominator is zero."""
    if denominator == 0:
        return default
    return numerator / denominator


def mean_or(values: Union[Sequence[Number], Iterable[Number]], default: float = 0.0) -> float:
    """Arithmetic mean, or ``default`` for an empty input."""
    values = list(values)
    if not values:
        return default
    return float(np.mean(values))

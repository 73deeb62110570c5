"""
Seeded pseudo-random source for synthetic metrics.

Not suitable for anything security related: it only produces
reproducible variance terms for presentation-grade data.
"""

import math
from typing import Callable


RandomSource = Callable[[int], float]


def seeded_random(seed: int) -> float:
    """
    Map an integer seed to a reproducible fraction in [0, 1).

    Uses the fractional part of ``sin(seed) * 10000``.
    """
    x = math.sin(seed) * 10000
    fraction = x - math.floor(x)
    # Tiny negative products can round up to exactly 1.0
    return fraction if fraction < 1.0 else 0.0

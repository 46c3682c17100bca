"""Small numeric helpers shared by the scorers."""

import math
import random
from typing import Optional

from draft_scout.config import get_settings


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up.

    The built-in round() uses banker's rounding, which would make range
    widths flip between neighbouring skill values.
    """
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def mean(values) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def resolve_rng(rng: Optional[random.Random] = None) -> random.Random:
    """Return the injected generator, or a fresh one seeded from settings."""
    if rng is not None:
        return rng
    return random.Random(get_settings().rng_seed)

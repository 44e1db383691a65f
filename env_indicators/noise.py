"""
Deterministic noise for the synthetic indicator series.
Same seed, same number: no wall clock, no OS entropy.
"""

import math


def seeded_random(seed: int) -> float:
    """Hash-like transform of an integer seed into [0, 1)."""
    x = math.sin(seed * 9301 + 49297) * 49297
    frac = x - math.floor(x)
    # frac can round up to 1.0 for tiny negative x
    return frac if frac < 1.0 else 0.0


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def location_seed(lat: float, lon: float) -> int:
    return _round_half_up(lat * 10000) + _round_half_up(lon * 10000) * 100000


def draw_seed(base_seed: int, year: int, month: int) -> int:
    return base_seed + year * 13 + month * 7

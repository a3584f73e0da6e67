"""
Density Normalization Module

Fixed policy constants and helpers turning raw cluster geometry into
area, density and a bounded 0-100 presentation score.
"""

import math


MIN_RADIUS_M = 100.0
"""Radius floor; avoids zero-area clusters of coincident stores."""

MIN_AREA_KM2 = 0.0001
"""Denominator floor for the density computation."""

DENSITY_SCORE_SCALE = 10.0
DENSITY_SCORE_CAP = 100


def floor_radius(radius_m: float) -> float:
    """Apply the minimum cluster radius."""
    return max(float(radius_m), MIN_RADIUS_M)


def circle_area_km2(radius_m: float) -> float:
    """Area in km² of a circle with radius ``radius_m`` metres."""
    return math.pi * (radius_m / 1000.0) ** 2


def density_per_km2(store_count: int, area_km2: float) -> float:
    """Stores per km², with the area floored at ``MIN_AREA_KM2``."""
    return store_count / max(area_km2, MIN_AREA_KM2)


def density_score(density: float) -> int:
    """
    Map stores/km² onto a bounded 0-100 score.

    ``round(min(100, density * 10))`` with halves rounded up, so the
    score is monotonic in density and 12.5 scores 13.

    Examples:
        >>> density_score(3.2)
        32
        >>> density_score(250.0)
        100
    """
    scaled = min(float(DENSITY_SCORE_CAP), max(0.0, density) * DENSITY_SCORE_SCALE)
    return int(math.floor(scaled + 0.5))

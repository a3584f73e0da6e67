"""
Great-circle distance on a spherical earth.

The haversine formula treats the earth as a perfect sphere of radius
6,371 km. The approximation error (at most ~0.5%) is acceptable at the
100 m - 10 km scale of store clustering.
"""

from __future__ import annotations

import math
from typing import Callable, Sequence

import numpy as np

from ..models import Point


EARTH_RADIUS_M = 6_371_000.0

DistanceFn = Callable[[Point, Point], float]
"""Strategy signature: distance between two points, in metres (or metric units)."""


def haversine_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Return the great-circle distance in metres between two lat/lng pairs."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlng / 2) ** 2
    )
    # Rounding can push h a hair above 1 for antipodal points
    h = min(1.0, h)
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def haversine_distance(a: Point, b: Point) -> float:
    """Great-circle distance in metres between two :class:`Point` objects."""
    return haversine_m(a.lat, a.lng, b.lat, b.lng)


def euclidean_distance(a: Point, b: Point) -> float:
    """
    Planar distance on raw degree values.

    Not geographically meaningful; useful as a synthetic metric for tests
    and for clustering already-projected coordinates.
    """
    return math.hypot(a.lat - b.lat, a.lng - b.lng)


def haversine_matrix(points: Sequence[Point]) -> np.ndarray:
    """
    Pairwise great-circle distances in metres.

    Args:
        points: Sequence of N points

    Returns:
        Symmetric (N, N) float array with a zero diagonal
    """
    if len(points) == 0:
        return np.zeros((0, 0), dtype=float)

    coords = np.radians(np.array([[p.lat, p.lng] for p in points], dtype=float))
    lat = coords[:, 0][:, None]
    lng = coords[:, 1][:, None]

    dlat = lat.T - lat
    dlng = lng.T - lng
    h = np.sin(dlat / 2) ** 2 + np.cos(lat) * np.cos(lat.T) * np.sin(dlng / 2) ** 2
    h = np.clip(h, 0.0, 1.0)

    dist = 2 * EARTH_RADIUS_M * np.arctan2(np.sqrt(h), np.sqrt(1 - h))
    # Force exact symmetry and zero self-distance
    dist = (dist + dist.T) / 2
    np.fill_diagonal(dist, 0.0)
    return dist


def distance_matrix(points: Sequence[Point], distance_fn: DistanceFn = haversine_distance) -> np.ndarray:
    """
    Pairwise distances under ``distance_fn``.

    The haversine metric takes the vectorised path; any other strategy is
    evaluated once per unordered pair.
    """
    if distance_fn is haversine_distance:
        return haversine_matrix(points)

    n = len(points)
    dist = np.zeros((n, n), dtype=float)
    for i in range(n):
        for j in range(i + 1, n):
            dist[i, j] = dist[j, i] = float(distance_fn(points[i], points[j]))
    return dist

"""
Pytest configuration and shared fixtures for store-density tests.

This file provides:
- Geometry helpers for placing points at metre offsets
- Store layouts used by the clustering scenarios
- Overpass-style element fixtures
"""

import math
from typing import Any, Callable, Dict, List

import pytest

from store_density.models import Point, Store, make_store


# ==============================================================================
# Geometry Helpers
# ==============================================================================

METRES_PER_DEGREE = 2 * math.pi * 6_371_000.0 / 360.0

# Yaba, Lagos
BASE_LAT = 6.5095
BASE_LNG = 3.3711


def offset_point(lat: float, lng: float, north_m: float, east_m: float) -> Point:
    """Return the point ``north_m``/``east_m`` metres away from (lat, lng)."""
    dlat = north_m / METRES_PER_DEGREE
    dlng = east_m / (METRES_PER_DEGREE * math.cos(math.radians(lat)))
    return Point(lat + dlat, lng + dlng)


@pytest.fixture
def offset() -> Callable[..., Point]:
    """Factory placing a point at a metre offset from the base location."""
    def _offset(north_m: float = 0.0, east_m: float = 0.0,
                lat: float = BASE_LAT, lng: float = BASE_LNG) -> Point:
        return offset_point(lat, lng, north_m, east_m)
    return _offset


def stores_at(points: List[Point], prefix: str = "s",
              categories: List[str] = None, sizes: List[str] = None) -> List[Store]:
    """Wrap points as stores with cycling categories and sizes."""
    categories = categories or ["supermarket", "bakery", "convenience"]
    sizes = sizes or ["large", "medium", "small"]
    return [
        make_store(
            f"{prefix}{i}",
            p.lat,
            p.lng,
            category=categories[i % len(categories)],
            size=sizes[i % len(sizes)],
        )
        for i, p in enumerate(points)
    ]


# ==============================================================================
# Store Layouts
# ==============================================================================

@pytest.fixture
def tight_circle_stores() -> List[Store]:
    """10 stores on a 100 m radius circle (all within a 200 m circle)."""
    points = [
        offset_point(BASE_LAT, BASE_LNG,
                     100.0 * math.cos(math.radians(36 * k)),
                     100.0 * math.sin(math.radians(36 * k)))
        for k in range(10)
    ]
    return stores_at(points, prefix="c")


@pytest.fixture
def sparse_stores() -> List[Store]:
    """5 stores on a line, 2000 m apart."""
    points = [offset_point(BASE_LAT, BASE_LNG, 0.0, 2000.0 * k) for k in range(5)]
    return stores_at(points, prefix="p")


@pytest.fixture
def two_group_stores() -> List[Store]:
    """Two groups of 5 stores at 50 m spacing, 3000 m apart."""
    group_a = [offset_point(BASE_LAT, BASE_LNG, 0.0, 50.0 * k) for k in range(5)]
    group_b = [offset_point(BASE_LAT, BASE_LNG, 3000.0, 50.0 * k) for k in range(5)]
    stores = stores_at(group_a, prefix="a", categories=["supermarket", "supermarket", "bakery"])
    stores += stores_at(group_b, prefix="b", categories=["chemist"], sizes=["medium"])
    return stores


# ==============================================================================
# Overpass-style Elements
# ==============================================================================

@pytest.fixture
def sample_elements() -> List[Dict[str, Any]]:
    """Nodes as returned by an Overpass ``out center tags`` query."""
    return [
        {
            "type": "node",
            "id": 1001,
            "lat": 6.5095,
            "lon": 3.3711,
            "tags": {"shop": "supermarket", "name": "ShopRite Yaba"},
        },
        {
            "type": "node",
            "id": 1002,
            "lat": 6.5101,
            "lon": 3.3715,
            "tags": {"shop": "bakery", "brand": "Bread Co"},
        },
        {
            "type": "node",
            "id": 1003,
            "lat": 6.5098,
            "lon": 3.3720,
            "tags": {"amenity": "marketplace"},
        },
        {
            "type": "way",
            "id": 1004,
            "center": {"lat": 6.5090, "lon": 3.3705},
            "tags": {"shop": "clothes", "name": "Tejuosho Mall Annex", "building": "mall"},
        },
    ]


# ==============================================================================
# Environment Setup
# ==============================================================================

@pytest.fixture(autouse=True)
def clear_profile_env(monkeypatch):
    """Keep profile selection and overrides independent of the caller's environment."""
    monkeypatch.delenv("STORE_DENSITY_PROFILE", raising=False)
    for var in ("STORE_DENSITY_EPS_M", "STORE_DENSITY_MIN_PTS", "STORE_DENSITY_ALLOW_EMPTY"):
        monkeypatch.delenv(var, raising=False)
    yield

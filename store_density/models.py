"""
Core data model for the store density engine.

Points and stores are supplied by the caller and never mutated here.
Cluster summaries are created once per pipeline run and are read-only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .errors import InvalidInputError


NOISE = -1
"""Cluster label for points not density-reachable from any core point."""


class SizeClass(str, Enum):
    """Coarse store size classes."""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


SIZE_CLASSES = tuple(s.value for s in SizeClass)


@dataclass(frozen=True)
class Point:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float

    def __post_init__(self) -> None:
        try:
            lat = float(self.lat)
            lng = float(self.lng)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Non-numeric coordinates: ({self.lat!r}, {self.lng!r})") from exc

        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise InvalidInputError(f"Non-finite coordinates: ({lat}, {lng})")
        if not -90.0 <= lat <= 90.0:
            raise InvalidInputError(f"Latitude {lat} outside [-90, 90]")
        if not -180.0 <= lng <= 180.0:
            raise InvalidInputError(f"Longitude {lng} outside [-180, 180]")

        object.__setattr__(self, "lat", lat)
        object.__setattr__(self, "lng", lng)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lat, self.lng)


@dataclass(frozen=True)
class Store:
    """
    A geolocated retail store.

    Attributes:
        id: Caller-assigned identifier (any hashable value)
        point: Store location
        category: Free-form category label (e.g. "supermarket", "bakery")
        size: One of ``SIZE_CLASSES``; ``SizeClass`` members are accepted too
        tags: Arbitrary source tags, exposed read-only
        name: Display name
    """

    id: Any
    point: Point
    category: str
    size: Union[str, SizeClass] = SizeClass.SMALL.value
    tags: Mapping[str, Any] = field(default_factory=dict, hash=False)
    name: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.point, Point):
            raise InvalidInputError(f"Store {self.id!r} has no valid Point")

        size = self.size.value if isinstance(self.size, SizeClass) else str(self.size).lower()
        if size not in SIZE_CLASSES:
            raise InvalidInputError(
                f"Store {self.id!r} has unknown size class {self.size!r}; "
                f"expected one of {', '.join(SIZE_CLASSES)}"
            )

        object.__setattr__(self, "size", size)
        object.__setattr__(self, "category", str(self.category))
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags or {})))

    @property
    def lat(self) -> float:
        return self.point.lat

    @property
    def lng(self) -> float:
        return self.point.lng


@dataclass(frozen=True)
class ClusterSummary:
    """Descriptive statistics for one discovered cluster."""

    id: int
    """Cluster id, in discovery order."""

    centroid: Point
    """Arithmetic mean of member latitudes and longitudes."""

    radius_m: float
    """Max centroid-to-member distance, floored at 100 m."""

    area_km2: float
    """Area of the bounding circle."""

    store_count: int
    """Number of member stores."""

    density_per_km2: float
    """Stores per square kilometre."""

    density_score: int
    """Density normalized into [0, 100]."""

    category_breakdown: Mapping[str, int] = field(default_factory=dict, hash=False)
    """Category label -> member count, in first-seen order (read-only)."""

    size_breakdown: Mapping[str, int] = field(default_factory=dict, hash=False)
    """Size class -> member count, in first-seen order (read-only)."""

    member_indices: Tuple[int, ...] = ()
    """Indices of the member stores in the pipeline input."""

    label: str = ""
    """Human-readable label built from dominant categories."""

    hex_ids: Tuple[str, ...] = ()
    """Distinct H3 cells covering the members."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "category_breakdown", MappingProxyType(dict(self.category_breakdown)))
        object.__setattr__(self, "size_breakdown", MappingProxyType(dict(self.size_breakdown)))
        object.__setattr__(self, "member_indices", tuple(self.member_indices))
        object.__setattr__(self, "hex_ids", tuple(self.hex_ids))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary (snake_case keys)."""
        return {
            "id": self.id,
            "centroid": [self.centroid.lat, self.centroid.lng],
            "radius_m": self.radius_m,
            "area_km2": self.area_km2,
            "store_count": self.store_count,
            "density_per_km2": self.density_per_km2,
            "density_score": self.density_score,
            "category_breakdown": dict(self.category_breakdown),
            "size_breakdown": dict(self.size_breakdown),
            "member_indices": list(self.member_indices),
            "label": self.label,
            "hex_ids": list(self.hex_ids),
        }


def make_store(
    store_id: Any,
    lat: float,
    lng: float,
    category: str = "shop",
    size: Union[str, SizeClass] = SizeClass.SMALL,
    tags: Optional[Mapping[str, Any]] = None,
    name: str = "",
) -> Store:
    """Shorthand for building a :class:`Store` from raw coordinates."""
    return Store(
        id=store_id,
        point=Point(lat, lng),
        category=category,
        size=size,
        tags=tags or {},
        name=name,
    )

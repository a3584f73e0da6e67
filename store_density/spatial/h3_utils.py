"""Helpers for indexing stores and clusters on the H3 grid."""

from __future__ import annotations

from typing import Iterable, Tuple

import h3

from ..models import Point


DEFAULT_H3_RES = 9  # city-block scale


def point_to_cell(point: Point, res: int = DEFAULT_H3_RES) -> str:
    """Return the H3 cell id containing ``point`` at resolution ``res``."""
    return h3.latlng_to_cell(point.lat, point.lng, res)


def cells_for_points(points: Iterable[Point], res: int = DEFAULT_H3_RES) -> Tuple[str, ...]:
    """Return the sorted distinct H3 cells covering ``points``."""
    return tuple(sorted({point_to_cell(p, res) for p in points}))

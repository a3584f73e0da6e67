"""
store_density.spatial: Distance metrics, density clustering, and H3 helpers.

This module provides deterministic DBSCAN over geographic points with a
pluggable distance strategy.
"""

from .distance import (
    EARTH_RADIUS_M,
    DistanceFn,
    distance_matrix,
    euclidean_distance,
    haversine_distance,
    haversine_m,
    haversine_matrix,
)
from .dbscan import (
    ClusterResult,
    DensityClusterer,
    PointState,
    dbscan,
    validate_parameters,
)
from .diagnostics import (
    ClusteringDiagnostics,
    compute_diagnostics,
    compute_silhouette,
)
from .h3_utils import DEFAULT_H3_RES, cells_for_points, point_to_cell

__all__ = [
    "EARTH_RADIUS_M",
    "DistanceFn",
    "distance_matrix",
    "euclidean_distance",
    "haversine_distance",
    "haversine_m",
    "haversine_matrix",
    "ClusterResult",
    "DensityClusterer",
    "PointState",
    "dbscan",
    "validate_parameters",
    "ClusteringDiagnostics",
    "compute_diagnostics",
    "compute_silhouette",
    "DEFAULT_H3_RES",
    "cells_for_points",
    "point_to_cell",
]

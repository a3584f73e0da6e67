"""
Quality diagnostics for a clustering run.

Reports cluster/noise counts, silhouette score under the clustering metric
(great-circle metres by default) and actionable suggestions for tuning ``eps`` and ``min_pts``.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from sklearn.metrics import silhouette_score

from ..models import NOISE, Point
from .dbscan import ClusterResult
from .distance import DistanceFn, distance_matrix, haversine_distance


logger = logging.getLogger(__name__)


HIGH_NOISE_RATIO = 0.5
LOW_SILHOUETTE = 0.2
GOOD_SILHOUETTE = 0.5


@dataclass
class ClusteringDiagnostics:
    """Summary statistics describing how well the points clustered."""

    num_points: int
    """Total number of points provided."""

    num_clusters: int
    """Number of clusters found (excluding noise)."""

    num_noise: int
    """Number of noise points."""

    eps_m: float
    """Neighbourhood radius used."""

    min_pts: int
    """Core-point threshold used."""

    cluster_sizes: List[int] = field(default_factory=list)
    """Size of each cluster, by cluster id."""

    silhouette_score: Optional[float] = None
    """Silhouette score over clustered points (range [-1, 1]), if computable."""

    suggestions: List[str] = field(default_factory=list)
    """Actionable suggestions for improving clustering."""

    @property
    def noise_ratio(self) -> float:
        if self.num_points == 0:
            return 0.0
        return self.num_noise / self.num_points

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["noise_ratio"] = self.noise_ratio
        return data


def compute_silhouette(
    points: Sequence[Point],
    labels: np.ndarray,
    distance_fn: DistanceFn = haversine_distance,
) -> Optional[float]:
    """
    Silhouette score on a precomputed distance matrix (haversine by default).

    Noise points are excluded. Returns None when fewer than two clusters
    remain or every cluster is a singleton.
    """
    labels = np.asarray(labels)
    mask = labels != NOISE
    clustered = labels[mask]

    n_labels = len(set(clustered.tolist()))
    if n_labels < 2 or n_labels >= len(clustered):
        return None

    subset = [p for p, keep in zip(points, mask) if keep]
    dist = distance_matrix(subset, distance_fn)

    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        score = silhouette_score(dist, clustered, metric="precomputed")
    return float(score)


def compute_diagnostics(
    points: Sequence[Point],
    result: ClusterResult,
    eps: float,
    min_pts: int,
    *,
    with_silhouette: bool = True,
    distance_fn: DistanceFn = haversine_distance,
) -> ClusteringDiagnostics:
    """Build :class:`ClusteringDiagnostics` for ``result``."""
    num_points = len(points)
    num_clusters = result.num_clusters
    num_noise = len(result.noise)
    suggestions: List[str] = []

    silhouette = compute_silhouette(points, result.labels, distance_fn) if with_silhouette else None

    if num_points and num_clusters == 0:
        suggestions.append(
            f"No clusters found among {num_points} points. "
            f"Consider increasing eps (currently {eps:g} m) or reducing min_pts (currently {min_pts})."
        )
    elif num_points and num_noise > num_points * HIGH_NOISE_RATIO:
        suggestions.append(
            f"High noise ratio ({num_noise}/{num_points} = {num_noise / num_points:.1%}). "
            "Consider increasing eps or reducing min_pts."
        )

    if silhouette is not None:
        if silhouette < LOW_SILHOUETTE:
            suggestions.append(
                f"Low silhouette score ({silhouette:.3f}). Clusters may be poorly separated. "
                "Consider reducing eps."
            )
        elif silhouette > GOOD_SILHOUETTE:
            suggestions.append(f"Good cluster separation (silhouette={silhouette:.3f}).")

    for message in suggestions:
        if not message.startswith("Good"):
            logger.warning(message)

    return ClusteringDiagnostics(
        num_points=num_points,
        num_clusters=num_clusters,
        num_noise=num_noise,
        eps_m=float(eps),
        min_pts=int(min_pts),
        cluster_sizes=[len(c) for c in result.clusters],
        silhouette_score=silhouette,
        suggestions=suggestions,
    )


def empty_diagnostics(eps: float, min_pts: int) -> ClusteringDiagnostics:
    """Diagnostics for a run over zero points."""
    return ClusteringDiagnostics(
        num_points=0,
        num_clusters=0,
        num_noise=0,
        eps_m=float(eps),
        min_pts=int(min_pts),
    )

"""
Density-based clustering (DBSCAN) over geographic points.

This module provides:
1. A pluggable distance strategy (haversine by default)
2. An explicit per-point state machine: unvisited -> noise -> assigned
3. Deterministic cluster ids in discovery order
4. Memoized neighbourhood queries (each pair is measured at most once)

Membership rules:
- A point is a core point when at least ``min_pts`` points (itself
  included) lie strictly closer than ``eps``.
- Points first flagged as noise are promoted when a later cluster
  expansion reaches them.
- A point assigned to a cluster is never reassigned, even when it is
  also reachable from a cluster discovered later.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from numbers import Integral, Real
from typing import FrozenSet, List, Optional, Sequence

import numpy as np

from ..errors import EmptyInputError, InvalidParameterError
from ..models import NOISE, Point
from .distance import DistanceFn, haversine_distance


logger = logging.getLogger(__name__)


class PointState(Enum):
    """Lifecycle of a point during a single clustering run."""
    UNVISITED = "unvisited"
    NOISE = "noise"
    ASSIGNED = "assigned"


@dataclass(frozen=True)
class ClusterResult:
    """Outcome of one clustering run."""

    clusters: List[FrozenSet[int]]
    """Member point indices per cluster, indexed by cluster id."""

    noise: FrozenSet[int]
    """Indices of points not reachable from any core point."""

    labels: np.ndarray = field(compare=False)
    """Per-point cluster id (``-1`` for noise), aligned with the input."""

    @property
    def num_clusters(self) -> int:
        return len(self.clusters)

    def cluster_of(self, index: int) -> int:
        """Return the cluster id of point ``index`` (``NOISE`` if unclustered)."""
        return int(self.labels[index])


def validate_parameters(eps: float, min_pts: int) -> None:
    """Raise :class:`InvalidParameterError` for unusable ``eps``/``min_pts``."""
    if isinstance(eps, bool) or not isinstance(eps, Real) or not math.isfinite(eps) or eps <= 0:
        raise InvalidParameterError(f"eps must be a finite number > 0, got {eps!r}")
    if isinstance(min_pts, bool) or not isinstance(min_pts, Integral) or min_pts < 1:
        raise InvalidParameterError(f"min_pts must be an integer >= 1, got {min_pts!r}")


class _NeighborhoodIndex:
    """Lazily filled distance matrix answering ``eps`` range queries."""

    def __init__(self, points: Sequence[Point], eps: float, distance_fn: DistanceFn):
        n = len(points)
        self._points = points
        self._eps = eps
        self._distance_fn = distance_fn
        self._dist = np.zeros((n, n), dtype=float)
        self._known = np.eye(n, dtype=bool)

    def neighbors(self, i: int) -> List[int]:
        """Indices within ``eps`` of point ``i`` (including ``i``), ascending."""
        row = self._dist[i]
        known = self._known[i]
        p = self._points[i]

        result = []
        for j in range(len(self._points)):
            if not known[j]:
                d = float(self._distance_fn(p, self._points[j]))
                self._dist[i, j] = self._dist[j, i] = d
                self._known[i, j] = self._known[j, i] = True
            if j == i or row[j] < self._eps:
                result.append(j)
        return result


class DensityClusterer:
    """
    DBSCAN with a pluggable distance metric.

    Args:
        eps: Neighbourhood radius (metres for the default haversine metric)
        min_pts: Minimum neighbourhood size, the point itself included,
            for a point to be a core point
        distance_fn: Distance strategy, ``haversine_distance`` by default

    Raises:
        InvalidParameterError: If ``eps <= 0`` or ``min_pts < 1``
    """

    def __init__(
        self,
        eps: float,
        min_pts: int,
        distance_fn: Optional[DistanceFn] = None,
    ):
        validate_parameters(eps, min_pts)
        self.eps = float(eps)
        self.min_pts = int(min_pts)
        self.distance_fn = distance_fn or haversine_distance

    def cluster(self, points: Sequence[Point]) -> ClusterResult:
        """
        Partition ``points`` into density-connected clusters plus noise.

        Raises:
            EmptyInputError: If ``points`` is empty
        """
        n = len(points)
        if n == 0:
            raise EmptyInputError("Cannot cluster an empty point sequence")

        index = _NeighborhoodIndex(points, self.eps, self.distance_fn)
        state = [PointState.UNVISITED] * n
        labels = np.full(n, NOISE, dtype=int)
        clusters: List[FrozenSet[int]] = []

        for i in range(n):
            if state[i] is not PointState.UNVISITED:
                continue

            seeds = index.neighbors(i)
            if len(seeds) < self.min_pts:
                state[i] = PointState.NOISE
                continue

            cluster_id = len(clusters)
            members = self._expand(i, seeds, cluster_id, index, state, labels)
            clusters.append(frozenset(members))
            logger.debug("Cluster %d discovered from point %d with %d members",
                         cluster_id, i, len(members))

        noise = frozenset(i for i in range(n) if state[i] is PointState.NOISE)
        labels.setflags(write=False)

        logger.debug("DBSCAN eps=%s min_pts=%d: %d clusters, %d noise of %d points",
                     self.eps, self.min_pts, len(clusters), len(noise), n)
        return ClusterResult(clusters=clusters, noise=noise, labels=labels)

    def _expand(
        self,
        core: int,
        seeds: List[int],
        cluster_id: int,
        index: _NeighborhoodIndex,
        state: List[PointState],
        labels: np.ndarray,
    ) -> List[int]:
        """Grow cluster ``cluster_id`` outward from ``core``."""
        state[core] = PointState.ASSIGNED
        labels[core] = cluster_id
        members = [core]

        pending = list(seeds)
        queued = set(pending)
        k = 0
        while k < len(pending):
            q = pending[k]
            k += 1

            # Owned by this or an earlier cluster
            if state[q] is PointState.ASSIGNED:
                continue

            was_unvisited = state[q] is PointState.UNVISITED
            state[q] = PointState.ASSIGNED
            labels[q] = cluster_id
            members.append(q)

            # Former noise candidates are border points; only fresh points can be core
            if not was_unvisited:
                continue

            q_neighbors = index.neighbors(q)
            if len(q_neighbors) >= self.min_pts:
                for r in q_neighbors:
                    if r not in queued:
                        queued.add(r)
                        pending.append(r)

        return members


def dbscan(
    points: Sequence[Point],
    eps: float,
    min_pts: int,
    distance_fn: Optional[DistanceFn] = None,
) -> ClusterResult:
    """Functional wrapper around :class:`DensityClusterer`."""
    return DensityClusterer(eps, min_pts, distance_fn).cluster(points)

"""
Store clustering pipeline.

Orchestrates one synchronous run:
1. Validate the store list and clustering parameters
2. Extract points in store order
3. Run DBSCAN over the points
4. Summarize each cluster in discovery order
5. Collect noise store identifiers and quality diagnostics

This is the only component aware of :class:`Store`; the clusterer and
summarizer operate on points and indices.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Iterator, List, Mapping, Optional, Sequence

import numpy as np

from .errors import InvalidInputError, InvalidParameterError
from .models import ClusterSummary, Store
from .scoring.summarizer import ClusterSummarizer
from .spatial.dbscan import DensityClusterer, validate_parameters
from .spatial.diagnostics import ClusteringDiagnostics, compute_diagnostics, empty_diagnostics
from .spatial.distance import DistanceFn, haversine_distance
from .spatial.h3_utils import DEFAULT_H3_RES
from .tools.config_loader import ConfigLoader


logger = logging.getLogger(__name__)


@dataclass
class ClusteringConfig:
    """Configuration for a clustering run."""

    eps_m: float = 500.0
    """Neighbourhood radius in metres."""

    min_pts: int = 3
    """Minimum neighbourhood size (point included) for a core point."""

    allow_empty: bool = False
    """Return an empty result for an empty store list instead of raising."""

    h3_res: int = DEFAULT_H3_RES
    """Resolution of the H3 cells listed on each summary."""

    label_top_n: int = 2
    """Number of dominant categories in cluster labels."""

    compute_silhouette: bool = True
    """Whether diagnostics include a silhouette score."""

    def validate(self) -> "ClusteringConfig":
        validate_parameters(self.eps_m, self.min_pts)
        if not 0 <= int(self.h3_res) <= 15:
            raise InvalidParameterError(f"h3_res must be in [0, 15], got {self.h3_res!r}")
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClusteringConfig":
        """
        Build a config from a profile mapping.

        Accepts the nested profile layout (``clustering``/``summary``
        sections) or a flat mapping of field names.
        """
        flat = ConfigLoader.flatten_profile(data)

        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(flat) - known)
        if unknown:
            raise InvalidParameterError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**flat).validate()

    @classmethod
    def from_profile(cls, profile_name: Optional[str] = None) -> "ClusteringConfig":
        """
        Load a bundled YAML profile (environment/default when None).

        ``STORE_DENSITY_EPS_M``, ``STORE_DENSITY_MIN_PTS`` and
        ``STORE_DENSITY_ALLOW_EMPTY`` override the profile values.
        """
        return cls.from_dict(ConfigLoader.load_settings(profile_name))


@dataclass(frozen=True)
class PipelineResult:
    """
    Output of :meth:`ClusteringPipeline.run`.

    Unpacks as ``clusters, noise_store_ids``.
    """

    clusters: List[ClusterSummary]
    noise_store_ids: FrozenSet[Any]
    noise_indices: FrozenSet[int] = frozenset()
    labels: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=int), compare=False)
    diagnostics: Optional[ClusteringDiagnostics] = field(default=None, compare=False)

    def __iter__(self) -> Iterator[Any]:
        yield self.clusters
        yield self.noise_store_ids


class ClusteringPipeline:
    """
    Cluster stores and summarize each cluster.

    Args:
        config: Clustering configuration (defaults if None)
        distance_fn: Clustering metric (haversine by default). Summary radii
            and densities are always measured in great-circle metres
    """

    def __init__(
        self,
        config: Optional[ClusteringConfig] = None,
        distance_fn: Optional[DistanceFn] = None,
    ):
        self.config = (config or ClusteringConfig()).validate()
        self.distance_fn = distance_fn or haversine_distance
        self.summarizer = ClusterSummarizer(
            h3_res=self.config.h3_res,
            label_top_n=self.config.label_top_n,
        )

    def run(
        self,
        stores: Sequence[Store],
        eps: Optional[float] = None,
        min_pts: Optional[int] = None,
    ) -> PipelineResult:
        """
        Cluster ``stores`` and summarize each cluster.

        Args:
            stores: Store records; indices in the output refer to this order
            eps: Neighbourhood radius in metres (overrides config)
            min_pts: Core-point threshold (overrides config)

        Returns:
            PipelineResult with summaries in cluster-id order

        Raises:
            InvalidParameterError: If ``eps``/``min_pts`` are out of range
            InvalidInputError: If ``stores`` is empty (unless allowed by config)
        """
        eps = self.config.eps_m if eps is None else eps
        min_pts = self.config.min_pts if min_pts is None else min_pts
        clusterer = DensityClusterer(eps, min_pts, self.distance_fn)

        stores = list(stores)
        for i, store in enumerate(stores):
            if not isinstance(store, Store):
                raise InvalidInputError(f"Item {i} is not a Store: {type(store).__name__}")

        if not stores:
            if self.config.allow_empty:
                logger.info("Empty store list; returning zero clusters")
                return PipelineResult(
                    clusters=[],
                    noise_store_ids=frozenset(),
                    diagnostics=empty_diagnostics(eps, min_pts),
                )
            raise InvalidInputError("Store list is empty")

        logger.info(f"Clustering {len(stores)} stores (eps={eps:g} m, min_pts={min_pts})")

        points = [s.point for s in stores]
        result = clusterer.cluster(points)

        summaries: List[ClusterSummary] = []
        for cluster_id, indices in enumerate(result.clusters):
            ordered = sorted(indices)
            members = [stores[i] for i in ordered]
            summaries.append(self.summarizer.summarize(members, cluster_id, member_indices=ordered))

        noise_ids = frozenset(stores[i].id for i in result.noise)

        diagnostics = compute_diagnostics(
            points,
            result,
            eps,
            min_pts,
            with_silhouette=self.config.compute_silhouette,
            distance_fn=self.distance_fn,
        )

        logger.info(f"Found {len(summaries)} clusters (and {len(result.noise)} noise points)")

        return PipelineResult(
            clusters=summaries,
            noise_store_ids=noise_ids,
            noise_indices=result.noise,
            labels=result.labels,
            diagnostics=diagnostics,
        )


def run_pipeline(
    stores: Sequence[Store],
    eps: Optional[float] = None,
    min_pts: Optional[int] = None,
    *,
    config: Optional[ClusteringConfig] = None,
    distance_fn: Optional[DistanceFn] = None,
    **overrides: Any,
) -> PipelineResult:
    """
    Convenience wrapper: build a pipeline and run it once.

    Extra keyword arguments override fields of ``config``.
    """
    base = config or ClusteringConfig()
    if overrides:
        base = replace(base, **overrides)
    return ClusteringPipeline(base, distance_fn=distance_fn).run(stores, eps, min_pts)

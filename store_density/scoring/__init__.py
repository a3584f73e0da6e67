"""
Scoring Module for cluster summaries

Provides:
- Fixed-policy density normalization (radius/area floors, 0-100 score)
- Per-cluster summaries with category and size breakdowns
- Deterministic cluster labels

Usage:
    from store_density.scoring import ClusterSummarizer, density_score

    summarizer = ClusterSummarizer()
    summary = summarizer.summarize(member_stores, cluster_id=0)
"""

from .normalization import (
    MIN_RADIUS_M,
    MIN_AREA_KM2,
    DENSITY_SCORE_SCALE,
    DENSITY_SCORE_CAP,
    floor_radius,
    circle_area_km2,
    density_per_km2,
    density_score,
)

from .summarizer import (
    ClusterSummarizer,
    compute_centroid,
    frequency_breakdown,
    label_cluster,
    summarize_cluster,
)

__all__ = [
    # Normalization
    "MIN_RADIUS_M",
    "MIN_AREA_KM2",
    "DENSITY_SCORE_SCALE",
    "DENSITY_SCORE_CAP",
    "floor_radius",
    "circle_area_km2",
    "density_per_km2",
    "density_score",

    # Summaries
    "ClusterSummarizer",
    "compute_centroid",
    "frequency_breakdown",
    "label_cluster",
    "summarize_cluster",
]

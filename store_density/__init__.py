"""
store_density: density-based clustering and metrics for retail store locations.

Usage:
    from store_density import ClusteringPipeline, make_store

    stores = [make_store("s1", 6.5244, 3.3792, "supermarket", "large"), ...]
    clusters, noise_ids = ClusteringPipeline().run(stores, eps=500, min_pts=3)
"""

from .errors import (
    StoreDensityError,
    InvalidParameterError,
    InvalidInputError,
    EmptyInputError,
)
from .models import (
    NOISE,
    SIZE_CLASSES,
    SizeClass,
    Point,
    Store,
    ClusterSummary,
    make_store,
)
from .spatial import (
    ClusterResult,
    ClusteringDiagnostics,
    DensityClusterer,
    dbscan,
    euclidean_distance,
    haversine_distance,
)
from .scoring import ClusterSummarizer, summarize_cluster
from .stores import infer_size_class, stores_from_elements, stores_from_records
from .pipeline import ClusteringConfig, ClusteringPipeline, PipelineResult, run_pipeline

__version__ = "0.1.0"

__all__ = [
    "StoreDensityError",
    "InvalidParameterError",
    "InvalidInputError",
    "EmptyInputError",
    "NOISE",
    "SIZE_CLASSES",
    "SizeClass",
    "Point",
    "Store",
    "ClusterSummary",
    "make_store",
    "ClusterResult",
    "ClusteringDiagnostics",
    "DensityClusterer",
    "dbscan",
    "euclidean_distance",
    "haversine_distance",
    "ClusterSummarizer",
    "summarize_cluster",
    "infer_size_class",
    "stores_from_elements",
    "stores_from_records",
    "ClusteringConfig",
    "ClusteringPipeline",
    "PipelineResult",
    "run_pipeline",
]

"""Tabular views of clustering output for downstream reporting."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from .errors import InvalidInputError
from .models import NOISE, ClusterSummary, Store


SUMMARY_COLUMNS = [
    "cluster_id",
    "label",
    "centroid_lat",
    "centroid_lng",
    "radius_m",
    "area_km2",
    "store_count",
    "density_per_km2",
    "density_score",
    "top_category",
    "types",
    "sizes",
]


def summaries_to_frame(summaries: Sequence[ClusterSummary]) -> pd.DataFrame:
    """
    One row per cluster, in cluster-id order.

    ``types``/``sizes`` hold the breakdowns as ``label:count`` strings joined
    with ``|``; ``top_category`` is the most frequent category.
    """
    rows = []
    for s in summaries:
        top = max(s.category_breakdown.items(), key=lambda kv: kv[1])[0] if s.category_breakdown else ""
        rows.append(
            {
                "cluster_id": s.id,
                "label": s.label,
                "centroid_lat": s.centroid.lat,
                "centroid_lng": s.centroid.lng,
                "radius_m": s.radius_m,
                "area_km2": s.area_km2,
                "store_count": s.store_count,
                "density_per_km2": s.density_per_km2,
                "density_score": s.density_score,
                "top_category": top,
                "types": "|".join(f"{k}:{v}" for k, v in s.category_breakdown.items()),
                "sizes": "|".join(f"{k}:{v}" for k, v in s.size_breakdown.items()),
            }
        )
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def assignments_to_frame(stores: Sequence[Store], labels: np.ndarray) -> pd.DataFrame:
    """
    One row per store with its cluster id (``-1`` for noise).

    Raises:
        InvalidInputError: If ``labels`` is not aligned with ``stores``
    """
    labels = np.asarray(labels)
    if len(labels) != len(stores):
        raise InvalidInputError(
            f"Got {len(labels)} labels for {len(stores)} stores"
        )

    df = pd.DataFrame(
        {
            "id": [s.id for s in stores],
            "name": [s.name for s in stores],
            "lat": [s.lat for s in stores],
            "lng": [s.lng for s in stores],
            "category": [s.category for s in stores],
            "size": [s.size for s in stores],
            "cluster": labels.astype(int),
        }
    )
    df["is_noise"] = df["cluster"] == NOISE
    return df

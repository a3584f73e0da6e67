"""
Cluster Summarizer

Turns the member stores of one cluster into a :class:`ClusterSummary`:
centroid, bounding radius, area, density, density score, category and
size breakdowns, a readable label and the covering H3 cells.
"""

from typing import Dict, Iterable, List, Optional, Sequence
import json
import logging

from ..errors import InvalidInputError
from ..models import ClusterSummary, Point, Store
from ..spatial.distance import haversine_distance
from ..spatial.h3_utils import DEFAULT_H3_RES, cells_for_points
from .normalization import (
    circle_area_km2,
    density_per_km2,
    density_score,
    floor_radius,
)


logger = logging.getLogger(__name__)


GENERIC_CATEGORIES = frozenset({"", "shop", "yes"})
MIXED_LABEL = "Mixed Stores"


def frequency_breakdown(values: Iterable[str]) -> Dict[str, int]:
    """Count occurrences, keeping keys in first-seen order."""
    counts: Dict[str, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    return counts


def compute_centroid(points: Sequence[Point]) -> Point:
    """Planar mean of latitudes and longitudes."""
    n = len(points)
    return Point(
        sum(p.lat for p in points) / n,
        sum(p.lng for p in points) / n,
    )


def label_cluster(category_breakdown: Dict[str, int], top_n: int = 2) -> str:
    """
    Generate a deterministic, human-readable label for a cluster.

    Uses the dominant category labels; ties keep first-seen order.

    Args:
        category_breakdown: Category -> count mapping
        top_n: Number of categories to include

    Returns:
        Label such as "supermarket + bakery", "Convenience" or "Mixed Stores"
    """
    ranked = sorted(
        ((cat, n) for cat, n in category_breakdown.items()
         if cat.strip().lower() not in GENERIC_CATEGORIES),
        key=lambda item: -item[1],
    )
    top = [cat for cat, _ in ranked[:max(0, top_n)]]

    if not top:
        return MIXED_LABEL
    elif len(top) == 1:
        return top[0].replace("_", " ").title()
    else:
        return " + ".join(cat.replace("_", " ") for cat in top)


def summarize_cluster(
    members: Sequence[Store],
    cluster_id: int,
    *,
    member_indices: Optional[Sequence[int]] = None,
    h3_res: int = DEFAULT_H3_RES,
    label_top_n: int = 2,
) -> ClusterSummary:
    """
    Compute descriptive statistics for one cluster.

    Args:
        members: Member stores, in the order used for breakdown keys
        cluster_id: Discovery-order id of the cluster
        member_indices: Positions of ``members`` in the pipeline input
        h3_res: Resolution of the covering H3 cells
        label_top_n: Number of categories in the label

    Raises:
        InvalidInputError: If ``members`` is empty
    """
    if len(members) == 0:
        raise InvalidInputError(f"Cluster {cluster_id} has no members")

    points: List[Point] = [s.point for s in members]
    store_count = len(members)

    centroid = compute_centroid(points)
    # Always great-circle metres, whatever metric grouped the members
    radius_m = floor_radius(max(haversine_distance(centroid, p) for p in points))
    area_km2 = circle_area_km2(radius_m)
    density = density_per_km2(store_count, area_km2)

    categories = frequency_breakdown(s.category for s in members)
    sizes = frequency_breakdown(s.size for s in members)

    summary = ClusterSummary(
        id=cluster_id,
        centroid=centroid,
        radius_m=radius_m,
        area_km2=area_km2,
        store_count=store_count,
        density_per_km2=density,
        density_score=density_score(density),
        category_breakdown=categories,
        size_breakdown=sizes,
        member_indices=tuple(member_indices) if member_indices is not None else (),
        label=label_cluster(categories, label_top_n),
        hex_ids=cells_for_points(points, h3_res),
    )

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Cluster summary: {json.dumps(summary.to_dict(), ensure_ascii=False, default=str)}")

    return summary


class ClusterSummarizer:
    """Summarizer with fixed options, reusable across clusters."""

    def __init__(
        self,
        h3_res: int = DEFAULT_H3_RES,
        label_top_n: int = 2,
    ):
        self.h3_res = h3_res
        self.label_top_n = label_top_n

    def summarize(
        self,
        members: Sequence[Store],
        cluster_id: int,
        member_indices: Optional[Sequence[int]] = None,
    ) -> ClusterSummary:
        return summarize_cluster(
            members,
            cluster_id,
            member_indices=member_indices,
            h3_res=self.h3_res,
            label_top_n=self.label_top_n,
        )

"""Pydantic models for handing cluster summaries to downstream consumers."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from .models import ClusterSummary


class ClusterPayload(BaseModel):
    """Transport shape of a cluster summary (camelCase field names)."""

    id: int
    centroid: List[float] = Field(..., description="[lat, lng] in decimal degrees")
    radius_meters: float = Field(..., alias="radiusMeters", ge=100.0)
    store_count: int = Field(..., alias="storeCount", ge=1)
    density_per_km2: float = Field(..., alias="densityPerKm2", ge=0.0)
    density_score: int = Field(..., alias="densityScore", ge=0, le=100)
    types: Dict[str, int] = Field(default_factory=dict, description="Category breakdown")
    sizes: Dict[str, int] = Field(default_factory=dict, description="Size class breakdown")
    member_indices: List[int] = Field(default_factory=list, alias="memberIndices")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_summary(cls, summary: ClusterSummary) -> "ClusterPayload":
        return cls(
            id=summary.id,
            centroid=[summary.centroid.lat, summary.centroid.lng],
            radius_meters=summary.radius_m,
            store_count=summary.store_count,
            density_per_km2=summary.density_per_km2,
            density_score=summary.density_score,
            types=dict(summary.category_breakdown),
            sizes=dict(summary.size_breakdown),
            member_indices=list(summary.member_indices),
        )


class AnalysisCluster(BaseModel):
    """Trimmed cluster record for text analysis: counts and breakdowns only."""

    id: int
    store_count: int = Field(..., alias="storeCount")
    types: Dict[str, int] = Field(default_factory=dict)
    sizes: Dict[str, int] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}

    @classmethod
    def from_summary(cls, summary: ClusterSummary) -> "AnalysisCluster":
        return cls(
            id=summary.id,
            store_count=summary.store_count,
            types=dict(summary.category_breakdown),
            sizes=dict(summary.size_breakdown),
        )


class AnalysisLocation(BaseModel):
    address: Optional[str] = None
    center: Optional[List[float]] = None
    radius_meters: Optional[float] = Field(default=None, alias="radiusMeters")

    model_config = {"populate_by_name": True}


class AnalysisRequest(BaseModel):
    """Request body for a text-analysis service consuming cluster summaries."""

    location: AnalysisLocation
    clusters: List[AnalysisCluster]


def summaries_to_payload(summaries: Sequence[ClusterSummary]) -> List[Dict[str, Any]]:
    """Serialize summaries to JSON-ready dicts using camelCase keys."""
    return [ClusterPayload.from_summary(s).model_dump(by_alias=True) for s in summaries]


def analysis_payload(
    summaries: Sequence[ClusterSummary],
    address: Optional[str] = None,
    center: Optional[Sequence[float]] = None,
    radius_meters: Optional[float] = None,
) -> Dict[str, Any]:
    """Build the trimmed request body (``location`` + ``clusters``)."""
    request = AnalysisRequest(
        location=AnalysisLocation(
            address=address,
            center=list(center) if center is not None else None,
            radius_meters=radius_meters,
        ),
        clusters=[AnalysisCluster.from_summary(s) for s in summaries],
    )
    return request.model_dump(by_alias=True)

"""Clustering contracts: configuration presets and transient media clusters.

- :class:`ContextType`: the kind of timeline a moment belongs to. Each context
  has its own clustering preset (pets move fast, business days are long).
- :class:`ClusteringConfiguration`: thresholds for burst detection and
  temporal/spatial proximity grouping.
- :class:`MediaCluster`: a grouped run of assets before it becomes a
  :class:`~lifeline.core.contracts.timeline.TimelineEvent`.
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum

from pydantic import Field, model_validator

from .base import Contract, UtcDateTime
from .media import GeoPoint, MediaAsset


class ContextType(str, Enum):
    """Category of timeline context."""

    PERSON = "person"
    PET = "pet"
    PROJECT = "project"
    BUSINESS = "business"


class ClusteringConfiguration(Contract):
    """Thresholds used by the media clustering engine.

    Parameters
    ----------
    temporal_threshold_minutes:
        Maximum span from a proximity cluster's first asset to any later one.
    spatial_threshold_meters:
        Maximum haversine distance between a new asset and every geotagged
        asset already in the cluster.
    burst_threshold_seconds:
        Maximum gap between consecutive captures inside a burst.
    min_burst_size, max_burst_size:
        A run shorter than ``min_burst_size`` is not a burst; a burst reaching
        ``max_burst_size`` is closed and a new one starts.
    """

    temporal_threshold_minutes: int = Field(default=60, ge=1)
    spatial_threshold_meters: float = Field(default=1000.0, gt=0.0)
    burst_threshold_seconds: int = Field(default=30, ge=1)
    min_burst_size: int = Field(default=3, ge=2)
    max_burst_size: int = Field(default=50, ge=2)

    @model_validator(mode="after")
    def _burst_bounds(self) -> ClusteringConfiguration:
        if self.max_burst_size < self.min_burst_size:
            raise ValueError("max_burst_size must be >= min_burst_size")
        return self

    @property
    def temporal_threshold(self) -> timedelta:
        return timedelta(minutes=self.temporal_threshold_minutes)

    @property
    def burst_threshold(self) -> timedelta:
        return timedelta(seconds=self.burst_threshold_seconds)

    @classmethod
    def for_context(cls, context: ContextType | str) -> ClusteringConfiguration:
        """Return the preset tuned for ``context``."""
        return cls(**_CONTEXT_PRESETS[ContextType(context)])


_CONTEXT_PRESETS: dict[ContextType, dict[str, int | float]] = {
    ContextType.PERSON: {
        "temporal_threshold_minutes": 120,
        "spatial_threshold_meters": 500.0,
        "burst_threshold_seconds": 60,
    },
    ContextType.PET: {
        "temporal_threshold_minutes": 30,
        "spatial_threshold_meters": 100.0,
        "burst_threshold_seconds": 15,
    },
    ContextType.PROJECT: {
        "temporal_threshold_minutes": 240,
        "spatial_threshold_meters": 50.0,
        "burst_threshold_seconds": 30,
    },
    ContextType.BUSINESS: {
        "temporal_threshold_minutes": 480,
        "spatial_threshold_meters": 1000.0,
        "burst_threshold_seconds": 120,
    },
}


class MediaCluster(Contract):
    """A time-ordered group of assets with a single key asset."""

    assets: list[MediaAsset] = Field(min_length=1)
    start: UtcDateTime
    end: UtcDateTime
    center: GeoPoint | None = Field(default=None, description="Centroid of geotagged assets")
    key_asset: MediaAsset
    is_burst: bool = False

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def asset_count(self) -> int:
        return len(self.assets)


__all__ = ["ContextType", "ClusteringConfiguration", "MediaCluster"]

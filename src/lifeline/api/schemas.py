"""
Request/response schemas for the Lifeline HTTP API.

Every request carries the full input it needs (events, media, selection); the
API is stateless and never stores anything between calls. Domain contracts are
embedded as-is so clients see the same shapes the core works with.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from lifeline.core.contracts.base import UtcDateTime
from lifeline.core.contracts.clustering import ClusteringConfiguration, ContextType
from lifeline.core.contracts.flow import FlowConfig
from lifeline.core.contracts.layout import DisplayMode, LayoutConstants, Orientation, Viewport
from lifeline.core.contracts.media import MediaAsset
from lifeline.core.contracts.nodes import TierThresholds, ZoomTier
from lifeline.core.contracts.swimlane import SwimlaneConfig
from lifeline.core.contracts.timeline import TimelineEvent
from lifeline.engine.filters import EventTypeFilter

# --------------------------------------------------------------------------- #
# Moments
# --------------------------------------------------------------------------- #


class MomentsRequest(BaseModel):
    """Raw media to be grouped into moments for one owner."""

    assets: list[MediaAsset]
    owner_id: str = Field(min_length=1)
    context_id: str | None = None
    context: ContextType | None = Field(
        default=None,
        description="Clustering preset; falls back to the server default.",
    )
    config: ClusteringConfiguration | None = Field(
        default=None,
        description="Explicit thresholds; takes precedence over `context`.",
    )


class MomentsResponse(BaseModel):
    events: list[TimelineEvent]
    cluster_count: int
    burst_count: int


# --------------------------------------------------------------------------- #
# Views
# --------------------------------------------------------------------------- #


class NodesRequest(BaseModel):
    events: list[TimelineEvent]
    tier: ZoomTier
    visible_start: UtcDateTime
    visible_end: UtcDateTime
    expanded_ids: list[str] = Field(default_factory=list)
    thresholds: TierThresholds | None = None


class BubblesRequest(BaseModel):
    events: list[TimelineEvent]
    tier: ZoomTier


class LayoutRequest(NodesRequest):
    """Full timeline view: filter, aggregate, place and summarize."""

    viewport: Viewport
    pixels_per_day: float = Field(gt=0)
    mode: DisplayMode = DisplayMode.MAXIMAL
    orientation: Orientation = Orientation.VERTICAL
    context_id: str | None = None
    event_type: EventTypeFilter = EventTypeFilter.ALL
    constants: LayoutConstants | None = None


class FlowRequest(BaseModel):
    events: list[TimelineEvent]
    participant_ids: list[str]
    start_date: UtcDateTime
    viewport_width: float = Field(gt=0)
    display_names: dict[str, str] = Field(default_factory=dict)
    config: FlowConfig | None = None


class SwimlaneRequest(BaseModel):
    events: list[TimelineEvent]
    lane_owner_ids: list[str]
    start_date: UtcDateTime
    pixels_per_day: float = Field(gt=0)
    config: SwimlaneConfig | None = None


# --------------------------------------------------------------------------- #
# Editing
# --------------------------------------------------------------------------- #


class SplitRequest(BaseModel):
    event: TimelineEvent
    groups: list[list[str]] = Field(description="Asset ids per resulting event")


class MergeRequest(BaseModel):
    events: list[TimelineEvent]
    primary_id: str | None = None


class MoveRequest(BaseModel):
    asset_ids: list[str]
    source: TimelineEvent
    target: TimelineEvent


class KeyAssetRequest(BaseModel):
    event: TimelineEvent
    asset_id: str


class EditResponse(BaseModel):
    """Updated events to persist, replacing the inputs of the edit."""

    events: list[TimelineEvent]


__all__ = [
    "BubblesRequest",
    "EditResponse",
    "FlowRequest",
    "KeyAssetRequest",
    "LayoutRequest",
    "MergeRequest",
    "MomentsRequest",
    "MomentsResponse",
    "MoveRequest",
    "NodesRequest",
    "SplitRequest",
    "SwimlaneRequest",
]

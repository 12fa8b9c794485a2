"""Flow contracts: one continuous stream per participant across time.

Streams merge at shared events (junctions) and split again afterwards. A
:class:`FlowLayout` bundles every path plus the list of shared events so the
renderer can highlight them.
"""

from __future__ import annotations

from pydantic import Field

from .base import Contract
from .geometry import Color, Curve, Point
from .timeline import TimelineEvent

#: Fixed seed reserved for weaving jitter; keeps flow output reproducible.
FLOW_LAYOUT_SEED = 1337


class FlowConfig(Contract):
    """Geometry knobs for the flow layout.

    The helix parameters are purely decorative and may be tuned freely.
    """

    lane_width: float = Field(default=150.0, gt=0)
    pixels_per_day: float = Field(default=3.0, gt=0)
    top_padding: float = Field(default=80.0, ge=0)
    origin_lead: float = Field(default=60.0, ge=0)
    tail_length: float = Field(default=120.0, ge=0)
    helix_radius: float = Field(default=14.0, ge=0)
    helix_wavelength: float = Field(default=150.0, gt=0)
    max_half_waves: int = Field(default=5, ge=1)
    weave_jitter: float = Field(default=0.0, ge=0)
    seed: int = FLOW_LAYOUT_SEED


class FlowNode(Contract):
    """One event on a participant's stream."""

    event: TimelineEvent
    position: Point
    is_junction: bool = False
    participant_ids: list[str] = Field(default_factory=list)
    thumbnail: str | None = None


class FlowPath(Contract):
    """The stream of a single participant."""

    participant_id: str
    display_name: str
    color: Color
    curve: Curve
    origin: Point
    nodes: list[FlowNode] = Field(default_factory=list)


class FlowIntersection(Contract):
    """An event shared by two or more selected participants."""

    event: TimelineEvent
    position: Point
    participant_ids: list[str]


class FlowLayout(Contract):
    paths: list[FlowPath] = Field(default_factory=list)
    intersections: list[FlowIntersection] = Field(default_factory=list)


__all__ = [
    "FLOW_LAYOUT_SEED",
    "FlowConfig",
    "FlowNode",
    "FlowPath",
    "FlowIntersection",
    "FlowLayout",
]

"""Layout contracts for the collision-free card placement along a time axis."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from .base import Contract
from .geometry import Point, Rect
from .nodes import RenderNode


class DisplayMode(str, Enum):
    """``minimal`` draws markers and labels only; ``maximal`` adds cards."""

    MINIMAL = "minimal"
    MAXIMAL = "maximal"


class Orientation(str, Enum):
    """Direction of the primary (time) axis."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class Viewport(Contract):
    """Visible drawing area in logical pixels."""

    width: float = Field(gt=0)
    height: float = Field(gt=0)


class LayoutConstants(Contract):
    """Card sizes and spacing used by the layout engine."""

    card_width: float = Field(default=280.0, gt=0)
    card_height: float = Field(default=120.0, gt=0)
    media_card_height: float = Field(default=240.0, gt=0)
    cluster_card_height: float = Field(default=100.0, gt=0)
    gutter: float = Field(default=24.0, ge=0)
    min_card_spacing: float = Field(default=16.0, ge=0)
    min_label_spacing: float = Field(default=40.0, ge=0)


class LayoutNode(Contract):
    """A render node positioned on screen.

    ``card`` is ``None`` in minimal mode. ``primary_px`` is the node's offset
    along the time axis before any collision shift.
    """

    node: RenderNode
    card: Rect | None = None
    marker: Point
    label_visible: bool = True
    primary_px: float


__all__ = ["DisplayMode", "Orientation", "Viewport", "LayoutConstants", "LayoutNode"]

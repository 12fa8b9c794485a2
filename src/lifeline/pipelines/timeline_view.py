"""
Timeline view pipeline: from an authoritative event list to a drawable view.

Flow Overview
-------------
1. **Filter**: keep events of the requested context, date range and kind.
2. **Aggregate**: bucket the visible events into render nodes for the zoom
   tier, honoring drill-down overrides.
3. **Layout**: place the nodes on the time axis without overlaps.
4. **Overview**: summarize the same events into bubbles for the mini-map.

Everything is recomputed from the inputs on each call; nothing is cached or
persisted. The result is JSON-safe so the HTTP API and the CLI can emit it
directly.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from datetime import date, datetime
from typing import Any, TypedDict

from pydantic import BaseModel

from lifeline.core.contracts.layout import (
    DisplayMode,
    LayoutConstants,
    Orientation,
    Viewport,
)
from lifeline.core.contracts.nodes import TierThresholds, ZoomTier
from lifeline.core.contracts.timeline import TimelineEvent
from lifeline.engine.aggregation import build_nodes
from lifeline.engine.bubbles import aggregate_bubbles
from lifeline.engine.filters import EventTypeFilter, filter_events
from lifeline.engine.layout import layout_nodes

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------- #
# Public result types
# --------------------------------------------------------------------------- #


class ViewStats(TypedDict):
    """Counts per stage, handy for logging and quick assertions."""

    input_events: int
    visible_events: int
    nodes: int
    clusters: int
    hidden_labels: int
    bubbles: int


class TimelineView(TypedDict):
    """Structured payload returned by :func:`run_view`.

    Attributes
    ----------
    tier:
        Zoom tier the view was computed for.
    layout:
        Positioned nodes (each embeds its render node).
    bubbles:
        Overview bubbles over the same visible events.
    stats:
        Per-stage counts.
    """

    tier: str
    layout: list[dict[str, Any]]
    bubbles: list[dict[str, Any]]
    stats: ViewStats


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json")


def run_view(
    events: Sequence[TimelineEvent],
    *,
    tier: ZoomTier,
    visible_start: date | datetime,
    visible_end: date | datetime,
    viewport: Viewport,
    pixels_per_day: float,
    mode: DisplayMode = DisplayMode.MAXIMAL,
    orientation: Orientation = Orientation.VERTICAL,
    expanded_ids: Collection[str] = (),
    context_id: str | None = None,
    event_type: EventTypeFilter = EventTypeFilter.ALL,
    thresholds: TierThresholds | None = None,
    constants: LayoutConstants | None = None,
) -> TimelineView:
    """Run filter → aggregate → layout → bubbles and return a JSON-safe view."""
    visible = filter_events(
        events,
        context_id=context_id,
        start=visible_start,
        end=visible_end,
        event_type=event_type,
    )
    nodes = build_nodes(visible, tier, visible_start, visible_end, expanded_ids, thresholds)
    placed = layout_nodes(
        nodes,
        mode,
        orientation,
        viewport,
        pixels_per_day,
        visible_start,
        constants,
    )
    bubbles = aggregate_bubbles(visible, tier)

    stats: ViewStats = {
        "input_events": len(events),
        "visible_events": len(visible),
        "nodes": len(nodes),
        "clusters": sum(1 for n in nodes if n.kind == "cluster"),
        "hidden_labels": sum(1 for n in placed if not n.label_visible),
        "bubbles": len(bubbles),
    }
    logger.info("Timeline view computed: %s", stats)

    return {
        "tier": tier.value,
        "layout": [_dump(n) for n in placed],
        "bubbles": [_dump(b) for b in bubbles],
        "stats": stats,
    }


__all__ = ["TimelineView", "ViewStats", "run_view"]

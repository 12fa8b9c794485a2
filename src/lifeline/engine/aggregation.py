"""Zoom-tier aggregation of events into render nodes.

At every tier except ``focus`` events are bucketed by calendar key. A bucket
collapses into one :class:`ClusterNode` when it holds more events than the
tier threshold, unless the caller expanded it (drill-down). Every visible
event lands in exactly one node.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from datetime import date, datetime, timedelta

from lifeline.core.calendar import bucket_key, window_bound
from lifeline.core.contracts.nodes import (
    ClusterNode,
    EventNode,
    RenderNode,
    TierThresholds,
    ZoomTier,
)
from lifeline.core.contracts.timeline import TimelineEvent

logger = logging.getLogger(__name__)

_PHOTO_TYPES = frozenset({"photo", "burst", "collection", "video"})
_NOTE_TYPES = frozenset({"note", "text"})


def simplify_event_type(event_type: str) -> str:
    """Map a free event type onto ``milestone | photo | note | other``."""
    value = event_type.lower()
    if value == "milestone":
        return "milestone"
    if value in _PHOTO_TYPES:
        return "photo"
    if value in _NOTE_TYPES:
        return "note"
    return "other"


def summarize_types(events: Sequence[TimelineEvent]) -> tuple[dict[str, int], str]:
    """Return simplified type counts (first-seen order) and the dominant type."""
    counts: dict[str, int] = {}
    for event in events:
        kind = simplify_event_type(event.event_type)
        counts[kind] = counts.get(kind, 0) + 1

    dominant, best = "other", 0
    for kind, count in counts.items():
        if count > best:
            dominant, best = kind, count
    return counts, dominant


def sort_events(events: Sequence[TimelineEvent]) -> list[TimelineEvent]:
    return sorted(events, key=lambda e: (e.timestamp, e.id))


def build_nodes(
    events: Sequence[TimelineEvent],
    tier: ZoomTier,
    visible_start: date | datetime,
    visible_end: date | datetime,
    expanded_ids: Collection[str] = (),
    thresholds: TierThresholds | None = None,
) -> list[RenderNode]:
    """Aggregate visible events into render nodes for ``tier``.

    Parameters
    ----------
    events:
        Events already filtered for the viewer.
    tier:
        Requested zoom tier.
    visible_start, visible_end:
        Inclusive window; a ``date`` bound covers its whole day.
    expanded_ids:
        Cluster ids (``"<tier>_<key>"``) the user drilled into. Ids that no
        longer match a bucket are ignored.
    thresholds:
        Per-tier collapse thresholds.

    Returns
    -------
    list[RenderNode]
        Nodes sorted by start time, then id.
    """
    if not events:
        return []

    limits = thresholds or TierThresholds()
    lo = window_bound(visible_start, end=False)
    hi = window_bound(visible_end, end=True)
    visible = [e for e in sort_events(events) if lo <= e.timestamp <= hi]

    threshold = limits.for_tier(tier)
    expanded = set(expanded_ids)
    nodes: list[RenderNode] = []

    if threshold is None:
        nodes = [EventNode(event=e, tier=tier) for e in visible]
    else:
        buckets: dict[str, list[TimelineEvent]] = {}
        for event in visible:
            bucket_id = f"{tier.value}_{bucket_key(event.timestamp, tier)}"
            buckets.setdefault(bucket_id, []).append(event)

        for bucket_id, members in buckets.items():
            if len(members) <= threshold or bucket_id in expanded:
                nodes.extend(EventNode(event=e, tier=tier) for e in members)
                continue
            type_counts, dominant = summarize_types(members)
            nodes.append(
                ClusterNode(
                    id=bucket_id,
                    tier=tier,
                    start=members[0].timestamp,
                    end=members[-1].timestamp,
                    event_ids=[e.id for e in members],
                    count=len(members),
                    type_counts=type_counts,
                    dominant_type=dominant,
                )
            )

    nodes.sort(key=lambda n: (n.start, n.id))
    logger.debug(
        "Built %d nodes from %d visible events at tier %s", len(nodes), len(visible), tier.value
    )
    return nodes


def group_by_proximity(
    events: Sequence[TimelineEvent], max_gap: timedelta = timedelta(days=7)
) -> dict[str, list[TimelineEvent]]:
    """Chain events whose consecutive gap is at most ``max_gap``.

    Groups are keyed ``cluster-<n>`` in chronological order.
    """
    groups: dict[str, list[TimelineEvent]] = {}
    current: list[TimelineEvent] = []
    for event in sort_events(events):
        if current and event.timestamp - current[-1].timestamp > max_gap:
            groups[f"cluster-{len(groups)}"] = current
            current = []
        current.append(event)
    if current:
        groups[f"cluster-{len(groups)}"] = current
    return groups


__all__ = [
    "build_nodes",
    "group_by_proximity",
    "simplify_event_type",
    "sort_events",
    "summarize_types",
]

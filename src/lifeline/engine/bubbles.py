"""Bubble aggregation for the overview visualization.

One bubble per calendar bucket (``focus`` buckets by day), colored by the
dominant category among the events' tags.
"""

from __future__ import annotations

from collections.abc import Sequence

from lifeline.core.calendar import bucket_bounds, bucket_key, bucket_label
from lifeline.core.contracts.bubble import BubbleData
from lifeline.core.contracts.geometry import Color
from lifeline.core.contracts.nodes import ZoomTier
from lifeline.core.contracts.timeline import TimelineEvent
from lifeline.engine.aggregation import sort_events

CATEGORY_COLORS: dict[str, str] = {
    "Family": "#6366F1",
    "Travel": "#10B981",
    "Work": "#F59E0B",
    "Career": "#F59E0B",
    "Milestone": "#EC4899",
    "Birth": "#EC4899",
    "Personal": "#8B5CF6",
    "Home": "#14B8A6",
    "Holiday": "#F43F5E",
    "Education": "#3B82F6",
}
FALLBACK_COLOR = "#64748B"
OTHER_CATEGORY = "Other"


def color_for_category(name: str) -> Color:
    """Registered color of ``name`` or the neutral fallback."""
    return Color.from_hex(CATEGORY_COLORS.get(name, FALLBACK_COLOR))


def dominant_category(events: Sequence[TimelineEvent]) -> str:
    """Most frequent tag that has a registered color; first-seen wins ties."""
    counts: dict[str, int] = {}
    for event in events:
        for tag in event.tags:
            counts[tag] = counts.get(tag, 0) + 1

    dominant, best = OTHER_CATEGORY, 0
    for tag, count in counts.items():
        if count > best and tag in CATEGORY_COLORS:
            dominant, best = tag, count
    return dominant


def aggregate_bubbles(events: Sequence[TimelineEvent], tier: ZoomTier) -> list[BubbleData]:
    """Summarize ``events`` into one bubble per bucket, sorted by bucket start."""
    buckets: dict[str, list[TimelineEvent]] = {}
    for event in sort_events(events):
        buckets.setdefault(bucket_key(event.timestamp, tier), []).append(event)

    bubbles: list[BubbleData] = []
    for key, members in buckets.items():
        anchor = members[0].timestamp
        start, end = bucket_bounds(anchor, tier)
        category = dominant_category(members)

        person_counts: dict[str, int] = {}
        for event in members:
            for person in event.people:
                person_counts[person] = person_counts.get(person, 0) + 1

        bubbles.append(
            BubbleData(
                id=f"bubble_{key}",
                start=start,
                end=end,
                event_count=len(members),
                label=bucket_label(anchor, tier),
                color=color_for_category(category),
                dominant_category=category,
                participant_ids=list(person_counts),
                event_ids=[e.id for e in members],
                participant_counts=person_counts,
                tier=tier,
            )
        )

    bubbles.sort(key=lambda b: (b.start, b.id))
    return bubbles


__all__ = [
    "CATEGORY_COLORS",
    "FALLBACK_COLOR",
    "OTHER_CATEGORY",
    "aggregate_bubbles",
    "color_for_category",
    "dominant_category",
]

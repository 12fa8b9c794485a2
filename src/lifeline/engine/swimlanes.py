"""Swimlane layout: one horizontal lane per participant.

Events involving a single lane owner become standard cards centred in that
lane's band. Events shared by several lane owners become bridge cards that
span from the first to the last involved lane. Overlapping cards whose lane
ranges intersect are pushed right until they clear each other.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime

from lifeline.core.calendar import elapsed_days
from lifeline.core.contracts.geometry import Rect
from lifeline.core.contracts.swimlane import SwimlaneConfig, SwimlaneItem
from lifeline.core.contracts.timeline import TimelineEvent


def _place(
    event: TimelineEvent,
    lanes: list[int],
    x: float,
    cfg: SwimlaneConfig,
) -> SwimlaneItem:
    first, last = lanes[0], lanes[-1]
    if first == last:
        y = first * cfg.lane_height + (cfg.lane_height - cfg.event_height) / 2
        rect = Rect(x=x, y=y, w=cfg.event_width, h=cfg.event_height)
        return SwimlaneItem(event=event, rect=rect, start_lane=first, end_lane=last)

    top = first * cfg.lane_height + cfg.bridge_padding
    bottom = (last + 1) * cfg.lane_height - cfg.bridge_padding
    rect = Rect(x=x, y=top, w=cfg.event_width, h=bottom - top)
    return SwimlaneItem(event=event, rect=rect, start_lane=first, end_lane=last, is_bridge=True)


def _resolve_collisions(items: list[SwimlaneItem], gap: float) -> list[SwimlaneItem]:
    """Shift later items right until no earlier item conflicts with them."""
    resolved: list[SwimlaneItem] = []
    for item in sorted(items, key=lambda it: it.rect.x):
        while True:
            blocker = next(
                (
                    prev
                    for prev in resolved
                    if prev.rect.left < item.rect.right
                    and item.rect.left < prev.rect.right
                    and prev.shares_lanes_with(item)
                ),
                None,
            )
            if blocker is None:
                break
            overlap = blocker.rect.right - item.rect.left
            item = item.model_copy(update={"rect": item.rect.shifted(dx=overlap + gap)})
        resolved.append(item)
    return resolved


def layout_swimlanes(
    events: Sequence[TimelineEvent],
    lane_owner_ids: Sequence[str],
    start_date: date | datetime,
    pixels_per_day: float,
    config: SwimlaneConfig | None = None,
) -> list[SwimlaneItem]:
    """Place events into per-owner lanes.

    Events with no lane owner among their people are skipped.
    """
    cfg = config or SwimlaneConfig()
    lane_of = {pid: i for i, pid in enumerate(dict.fromkeys(lane_owner_ids))}

    items: list[SwimlaneItem] = []
    for event in sorted(events, key=lambda e: (e.timestamp, e.id)):
        lanes = sorted({lane_of[p] for p in event.people if p in lane_of})
        if not lanes:
            continue
        x = elapsed_days(event.timestamp, start_date) * pixels_per_day
        items.append(_place(event, lanes, x, cfg))

    return _resolve_collisions(items, cfg.collision_gap)


__all__ = ["layout_swimlanes"]

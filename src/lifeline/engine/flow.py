"""Multi-stream flow layout: one continuous curve per participant.

The time axis runs downward. Each selected participant owns a vertical lane;
lanes are centred in the viewport. A participant's stream leaves its lane at
shared events (junctions) and meets the other selected people on the event at
the mean of their lane positions, then returns to its lane.

Segment shapes
--------------
- lane to lane (no junction involved): straight segment,
- entering or leaving a junction: S-curve with vertical tangents,
- junction to junction for the same pair of people: a "helix" of
  ``clamp(int(length / helix_wavelength), 1, max_half_waves)`` half-waves.
  The lower-lane participant starts on one side and the other on the
  opposite side, so the two streams interleave. The helix is decorative only.

Every stream starts at a fixed origin ``origin_lead`` pixels above its first
event and ends with a straight tail past its last event.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping, Sequence
from datetime import date, datetime

from lifeline.core.calendar import elapsed_days
from lifeline.core.contracts.flow import (
    FlowConfig,
    FlowIntersection,
    FlowLayout,
    FlowNode,
    FlowPath,
)
from lifeline.core.contracts.geometry import Color, CubicSegment, Curve, Point
from lifeline.core.contracts.timeline import TimelineEvent

logger = logging.getLogger(__name__)

STREAM_PALETTE: tuple[str, ...] = (
    "#3B82F6",
    "#EC4899",
    "#22C55E",
    "#F97316",
    "#A855F7",
    "#06B6D4",
    "#EF4444",
    "#FACC15",
)


def stream_color(index: int) -> Color:
    """Palette color for the ``index``-th selected participant."""
    return Color.from_hex(STREAM_PALETTE[index % len(STREAM_PALETTE)])


def lane_positions(
    participant_ids: Sequence[str], viewport_width: float, lane_width: float
) -> dict[str, float]:
    """Return the x of each lane centre, lanes centred in the viewport."""
    left = (viewport_width - lane_width * len(participant_ids)) / 2
    return {pid: left + lane_width * (i + 0.5) for i, pid in enumerate(participant_ids)}


def thumbnail_for(event: TimelineEvent) -> str | None:
    key = event.key_asset
    if key is not None and key.uri:
        return key.uri
    if event.assets:
        return event.assets[0].uri
    return None


def _selected_people(event: TimelineEvent, selected: Sequence[str]) -> list[str]:
    people = set(event.people)
    return [pid for pid in selected if pid in people]


# --------------------------------------------------------------------------- #
# Segment builders
# --------------------------------------------------------------------------- #


def straight_segment(p: Point, c: Point) -> CubicSegment:
    return CubicSegment(c1=p.lerp(c, 1 / 3), c2=p.lerp(c, 2 / 3), end=c)


def s_curve_segment(p: Point, c: Point) -> CubicSegment:
    """Cubic with vertical tangents at both ends."""
    half = (c.y - p.y) / 2
    return CubicSegment(c1=Point(x=p.x, y=p.y + half), c2=Point(x=c.x, y=c.y - half), end=c)


def helix_segments(p: Point, c: Point, phase: int, config: FlowConfig) -> list[CubicSegment]:
    """Oscillating half-waves from ``p`` to ``c``.

    ``phase`` is +1 or -1 and picks the side of the first half-wave. Control
    points sit 4/3 of the radius off the chord, so each half-wave peaks at
    exactly ``helix_radius``.
    """
    dx, dy = c.x - p.x, c.y - p.y
    length = (dx * dx + dy * dy) ** 0.5
    if length == 0:
        return [straight_segment(p, c)]

    waves = max(1, min(config.max_half_waves, int(length / config.helix_wavelength)))
    nx, ny = -dy / length, dx / length
    reach = config.helix_radius * 4 / 3

    segments: list[CubicSegment] = []
    for k in range(waves):
        start, end = p.lerp(c, k / waves), p.lerp(c, (k + 1) / waves)
        sign = phase if k % 2 == 0 else -phase
        ox, oy = nx * reach * sign, ny * reach * sign
        segments.append(
            CubicSegment(
                c1=start.lerp(end, 1 / 3).offset(ox, oy),
                c2=start.lerp(end, 2 / 3).offset(ox, oy),
                end=end,
            )
        )
    return segments


# --------------------------------------------------------------------------- #
# Layout
# --------------------------------------------------------------------------- #


def _build_curve(
    origin: Point,
    nodes: Sequence[FlowNode],
    participant_id: str,
    lane_index: Mapping[str, int],
    config: FlowConfig,
) -> Curve:
    segments: list[CubicSegment] = []
    first = nodes[0]
    if first.is_junction:
        segments.append(s_curve_segment(origin, first.position))
    else:
        segments.append(straight_segment(origin, first.position))

    for prev, cur in zip(nodes, nodes[1:]):
        same_pair = (
            prev.is_junction
            and cur.is_junction
            and len(cur.participant_ids) == 2
            and set(prev.participant_ids) == set(cur.participant_ids)
        )
        if same_pair:
            partner = next(pid for pid in cur.participant_ids if pid != participant_id)
            phase = 1 if lane_index[participant_id] < lane_index[partner] else -1
            segments.extend(helix_segments(prev.position, cur.position, phase, config))
        elif prev.is_junction or cur.is_junction:
            segments.append(s_curve_segment(prev.position, cur.position))
        else:
            segments.append(straight_segment(prev.position, cur.position))

    last = nodes[-1].position
    segments.append(straight_segment(last, last.offset(dy=config.tail_length)))
    return Curve(start=origin, segments=segments)


def layout_flow(
    events: Sequence[TimelineEvent],
    participant_ids: Sequence[str],
    start_date: date | datetime,
    viewport_width: float,
    config: FlowConfig | None = None,
    display_names: Mapping[str, str] | None = None,
) -> FlowLayout:
    """Compute one flow path per selected participant plus shared-event markers.

    Parameters
    ----------
    events:
        Visible events; order does not matter.
    participant_ids:
        Selected people in lane order. Duplicates are ignored.
    start_date:
        Origin of the time axis.
    viewport_width:
        Width the lanes are centred in.
    display_names:
        Optional labels per participant; ids are used otherwise.

    Returns
    -------
    FlowLayout
        Paths for participants that have at least one event, and every event
        shared by two or more selected people, ordered by time.
    """
    cfg = config or FlowConfig()
    selected = list(dict.fromkeys(participant_ids))
    if not selected or not events:
        return FlowLayout()

    names = display_names or {}
    lanes = lane_positions(selected, viewport_width, cfg.lane_width)
    lane_index = {pid: i for i, pid in enumerate(selected)}
    ordered = sorted(events, key=lambda e: (e.timestamp, e.id))

    def y_of(event: TimelineEvent) -> float:
        return cfg.top_padding + elapsed_days(event.timestamp, start_date) * cfg.pixels_per_day

    def junction_x(shared: Sequence[str]) -> float:
        return sum(lanes[pid] for pid in shared) / len(shared)

    paths: list[FlowPath] = []
    for index, pid in enumerate(selected):
        rng = random.Random(cfg.seed + index)
        base_x = lanes[pid]
        nodes: list[FlowNode] = []
        for event in ordered:
            if pid not in event.people:
                continue
            shared = _selected_people(event, selected)
            is_junction = len(shared) >= 2
            if is_junction:
                x = junction_x(shared)
            elif cfg.weave_jitter > 0:
                x = base_x + rng.uniform(-cfg.weave_jitter, cfg.weave_jitter)
            else:
                x = base_x
            nodes.append(
                FlowNode(
                    event=event,
                    position=Point(x=x, y=y_of(event)),
                    is_junction=is_junction,
                    participant_ids=shared,
                    thumbnail=thumbnail_for(event),
                )
            )

        if not nodes:
            continue

        origin = Point(x=base_x, y=nodes[0].position.y - cfg.origin_lead)
        paths.append(
            FlowPath(
                participant_id=pid,
                display_name=names.get(pid, pid),
                color=stream_color(index),
                curve=_build_curve(origin, nodes, pid, lane_index, cfg),
                origin=origin,
                nodes=nodes,
            )
        )

    intersections: list[FlowIntersection] = []
    for event in ordered:
        shared = _selected_people(event, selected)
        if len(shared) >= 2:
            intersections.append(
                FlowIntersection(
                    event=event,
                    position=Point(x=junction_x(shared), y=y_of(event)),
                    participant_ids=shared,
                )
            )

    logger.debug(
        "Flow layout: %d paths, %d intersections for %d participants",
        len(paths),
        len(intersections),
        len(selected),
    )
    return FlowLayout(paths=paths, intersections=intersections)


__all__ = [
    "STREAM_PALETTE",
    "helix_segments",
    "lane_positions",
    "layout_flow",
    "s_curve_segment",
    "straight_segment",
    "stream_color",
    "thumbnail_for",
]

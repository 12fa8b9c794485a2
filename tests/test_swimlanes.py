# tests/test_swimlanes.py
"""Tests for per-participant swimlanes with bridge cards."""

from __future__ import annotations

from builders import T0, build_event
from lifeline.core.contracts.swimlane import SwimlaneConfig
from lifeline.engine.swimlanes import layout_swimlanes

OWNERS = ["alice", "bob", "carol"]


def test_single_lane_card_is_centred_in_its_band() -> None:
    (item,) = layout_swimlanes([build_event("e", 3, owner="bob")], OWNERS, T0, 10.0)
    assert not item.is_bridge
    assert (item.start_lane, item.end_lane) == (1, 1)
    assert (item.rect.x, item.rect.y, item.rect.w, item.rect.h) == (30.0, 220.0, 280.0, 160.0)


def test_bridge_spans_first_to_last_involved_lane() -> None:
    event = build_event("trip", 0, owner="carol", participants=["alice"])
    (item,) = layout_swimlanes([event], OWNERS, T0, 10.0)
    assert item.is_bridge
    assert (item.start_lane, item.end_lane) == (0, 2)
    assert item.rect.top == 20.0
    assert item.rect.h == 560.0


def test_events_without_lane_owner_are_skipped() -> None:
    events = [build_event("x", 0, owner="zed"), build_event("y", 1, owner="alice")]
    items = layout_swimlanes(events, OWNERS, T0, 10.0)
    assert [i.event.id for i in items] == ["y"]


def test_same_lane_overlap_is_pushed_right() -> None:
    events = [build_event(f"e{i}", i * 0.1, owner="alice") for i in range(3)]
    items = layout_swimlanes(events, OWNERS, T0, 10.0)
    assert [i.rect.x for i in items] == [0.0, 300.0, 600.0]


def test_cards_in_different_lanes_may_share_x() -> None:
    events = [build_event("a", 0, owner="alice"), build_event("b", 0, owner="bob")]
    items = layout_swimlanes(events, OWNERS, T0, 10.0)
    assert [i.rect.x for i in items] == [0.0, 0.0]


def test_bridge_conflicts_with_cards_in_spanned_lanes() -> None:
    events = [
        build_event("a", 0, owner="alice", participants=["carol"]),
        build_event("b", 0, owner="bob"),
    ]
    bridge, card = layout_swimlanes(events, OWNERS, T0, 10.0)
    assert bridge.is_bridge and bridge.rect.x == 0.0
    assert card.rect.x == 300.0


def test_custom_config() -> None:
    cfg = SwimlaneConfig(lane_height=100, event_height=60, event_width=50, collision_gap=5)
    events = [build_event("a", 0, owner="alice"), build_event("b", 0, owner="alice")]
    first, second = layout_swimlanes(events, OWNERS, T0, 1.0, config=cfg)
    assert first.rect.y == 20.0
    assert second.rect.x == 55.0

# tests/test_aggregation.py
"""
Tests for zoom-tier aggregation into render nodes.

Scope
-----
- Exhaustiveness: each visible event belongs to exactly one node per tier.
- Threshold collapse, drill-down overrides and the `focus` tier.
- Inclusive window filtering and calendar keys (ISO weeks).
- Type summaries on cluster nodes and proximity grouping of events.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta, timezone

import pytest

from builders import T0, build_event
from lifeline.core.contracts.nodes import ClusterNode, EventNode, TierThresholds, ZoomTier
from lifeline.core.contracts.timeline import TimelineEvent
from lifeline.engine.aggregation import build_nodes, group_by_proximity, simplify_event_type

YEAR_START = datetime(2024, 1, 1)
YEAR_END = datetime(2024, 12, 31, 23, 59, 59)


def _year_of_events(step_days: int = 3) -> list[TimelineEvent]:
    return [
        build_event(f"e{i:03d}", YEAR_START + timedelta(days=i * step_days, hours=i % 5))
        for i in range(366 // step_days)
    ]


@pytest.mark.parametrize("tier", list(ZoomTier))  # type: ignore[misc]
def test_every_visible_event_in_exactly_one_node(tier: ZoomTier) -> None:
    events = _year_of_events()
    nodes = build_nodes(events, tier, YEAR_START, YEAR_END)

    members = Counter(member for node in nodes for member in node.member_ids)
    assert set(members) == {e.id for e in events}
    assert all(count == 1 for count in members.values())


def test_distinct_months_never_share_a_bucket() -> None:
    jan = build_event("jan", datetime(2024, 1, 1))
    mar = build_event("mar", datetime(2024, 3, 1))

    nodes = build_nodes([jan, mar], ZoomTier.MONTH, YEAR_START, YEAR_END)
    assert all(isinstance(n, EventNode) for n in nodes)
    assert [n.id for n in nodes] == ["jan", "mar"]

    collapsed = build_nodes(
        [jan, mar], ZoomTier.MONTH, YEAR_START, YEAR_END, thresholds=TierThresholds(month=0)
    )
    assert [n.id for n in collapsed] == ["month_2024-01", "month_2024-03"]
    assert all(isinstance(n, ClusterNode) and n.count == 1 for n in collapsed)


def test_bucket_over_threshold_collapses_unless_expanded() -> None:
    events = [build_event(f"d{i}", T0 + timedelta(minutes=i)) for i in range(10)]
    window = (T0 - timedelta(days=1), T0 + timedelta(days=1))

    (cluster,) = build_nodes(events, ZoomTier.DAY, *window)
    assert isinstance(cluster, ClusterNode)
    assert cluster.id == "day_2024-06-01"
    assert cluster.count == 10
    assert cluster.event_ids == [e.id for e in events]
    assert (cluster.start, cluster.end) == (events[0].timestamp, events[-1].timestamp)

    expanded = build_nodes(events, ZoomTier.DAY, *window, expanded_ids={"day_2024-06-01"})
    assert len(expanded) == 10 and all(isinstance(n, EventNode) for n in expanded)

    stale = build_nodes(events, ZoomTier.DAY, *window, expanded_ids={"day_1999-01-01"})
    assert len(stale) == 1


def test_focus_tier_never_aggregates() -> None:
    events = [build_event(f"f{i}", T0 + timedelta(minutes=i)) for i in range(50)]
    nodes = build_nodes(events, ZoomTier.FOCUS, T0, T0 + timedelta(days=1))
    assert len(nodes) == 50
    assert all(isinstance(n, EventNode) and n.tier is ZoomTier.FOCUS for n in nodes)


def test_window_is_inclusive_and_date_end_covers_whole_day() -> None:
    inside_edge = build_event("edge", datetime(2024, 6, 30, 23, 0))
    before = build_event("before", datetime(2024, 5, 31, 23, 59))
    start = build_event("start", datetime(2024, 6, 1))

    nodes = build_nodes(
        [inside_edge, before, start], ZoomTier.FOCUS, date(2024, 6, 1), date(2024, 6, 30)
    )
    assert [n.id for n in nodes] == ["start", "edge"]

    exact = build_nodes([start], ZoomTier.FOCUS, datetime(2024, 6, 1), datetime(2024, 6, 1))
    assert [n.id for n in exact] == ["start"]


def test_offset_aware_window_against_naive_events() -> None:
    plus_two = timezone(timedelta(hours=2))
    late_may = build_event("late-may", datetime(2024, 5, 31, 23, 30))
    june = build_event("june", datetime(2024, 6, 1, 0, 30))

    nodes = build_nodes(
        [late_may, june],
        ZoomTier.FOCUS,
        datetime(2024, 6, 1, 2, 0, tzinfo=plus_two),
        datetime(2024, 6, 30, tzinfo=plus_two),
    )
    assert [n.id for n in nodes] == ["june"]


def test_empty_inputs_give_empty_outputs() -> None:
    assert build_nodes([], ZoomTier.MONTH, YEAR_START, YEAR_END) == []
    events = _year_of_events()
    assert build_nodes(events, ZoomTier.MONTH, datetime(2030, 1, 1), datetime(2030, 2, 1)) == []


def test_week_buckets_use_iso_weeks() -> None:
    # 2024-12-30 belongs to ISO week 1 of 2025.
    monday = datetime(2024, 12, 30, 8)
    events = [build_event(f"w{i}", monday + timedelta(hours=i)) for i in range(3)]
    nodes = build_nodes(
        events,
        ZoomTier.WEEK,
        datetime(2024, 12, 1),
        datetime(2025, 1, 31),
        thresholds=TierThresholds(week=1),
    )
    assert [n.id for n in nodes] == ["week_2025-W01"]


def test_cluster_type_summary() -> None:
    kinds = ["photo", "burst", "milestone", "collection", "text", "recipe"]
    events = [
        build_event(f"t{i}", T0 + timedelta(hours=i), event_type=k) for i, k in enumerate(kinds)
    ]

    (cluster,) = build_nodes(
        events,
        ZoomTier.DAY,
        T0,
        T0 + timedelta(days=1),
        thresholds=TierThresholds(day=2),
    )
    assert isinstance(cluster, ClusterNode)
    assert cluster.type_counts == {"photo": 3, "milestone": 1, "note": 1, "other": 1}
    assert cluster.dominant_type == "photo"


def test_simplify_event_type() -> None:
    assert simplify_event_type("Milestone") == "milestone"
    assert simplify_event_type("burst") == "photo"
    assert simplify_event_type("note") == "note"
    assert simplify_event_type("anniversary") == "other"


def test_group_by_proximity_chains_close_events() -> None:
    days = [0, 3, 9, 30, 33, 80]
    events = [build_event(f"p{d}", d) for d in days]

    groups = group_by_proximity(list(reversed(events)))
    assert {k: [e.id for e in v] for k, v in groups.items()} == {
        "cluster-0": ["p0", "p3", "p9"],
        "cluster-1": ["p30", "p33"],
        "cluster-2": ["p80"],
    }
    assert group_by_proximity([]) == {}

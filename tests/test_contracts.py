# tests/test_contracts.py
"""Contract tests: geometry primitives, entity validation and tagged unions.

Scope
-----
- Geometry helpers used by every layout (strict overlap, shifting, colors).
- Entity invariants enforced at construction (ranges, deduplication, frozen).
- Discriminated `RenderNode` parsing from JSON payloads.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import TypeAdapter, ValidationError

from builders import T0, build_asset, build_event
from lifeline.core.contracts.bubble import BubbleData
from lifeline.core.contracts.clustering import ClusteringConfiguration, ContextType
from lifeline.core.contracts.geometry import Color, CubicSegment, Curve, Point, Rect
from lifeline.core.contracts.media import GeoPoint, MediaAsset
from lifeline.core.contracts.nodes import ClusterNode, EventNode, RenderNode, ZoomTier

# --------------------------------------------------------------------------- #
# Geometry
# --------------------------------------------------------------------------- #


def test_rect_edges_and_strict_overlap() -> None:
    a = Rect(x=0, y=0, w=10, h=10)
    assert (a.left, a.top, a.right, a.bottom) == (0, 0, 10, 10)
    assert a.overlaps(Rect(x=5, y=5, w=10, h=10))
    # Touching edges do not count as overlap.
    assert not a.overlaps(Rect(x=10, y=0, w=10, h=10))
    assert not a.overlaps(Rect(x=0, y=10, w=10, h=10))


def test_rect_shifted_returns_new_instance() -> None:
    a = Rect(x=1, y=2, w=3, h=4)
    b = a.shifted(dx=10, dy=-2)
    assert (b.x, b.y, b.w, b.h) == (11, 0, 3, 4)
    assert (a.x, a.y) == (1, 2)


def test_color_hex_round_trip() -> None:
    c = Color.from_hex("#10B981")
    assert (c.r, c.g, c.b, c.a) == (0x10, 0xB9, 0x81, 255)
    assert c.hex == "#10B981"
    assert Color.from_hex("80FF0000").a == 0x80
    with pytest.raises(ValueError):
        Color.from_hex("#123")


def test_curve_end_and_anchors() -> None:
    start = Point(x=0, y=0)
    seg = CubicSegment(c1=Point(x=0, y=1), c2=Point(x=0, y=2), end=Point(x=0, y=3))
    curve = Curve(start=start, segments=[seg])
    assert curve.end == Point(x=0, y=3)
    assert curve.anchors() == [start, Point(x=0, y=3)]
    assert Curve(start=start).end == start


# --------------------------------------------------------------------------- #
# Entities
# --------------------------------------------------------------------------- #


def test_geopoint_rejects_out_of_range() -> None:
    with pytest.raises(ValidationError):
        GeoPoint(latitude=91.0, longitude=0.0)
    with pytest.raises(ValidationError):
        GeoPoint(latitude=0.0, longitude=-181.0)


def test_event_people_and_participant_dedupe() -> None:
    event = build_event("e1", participants=["bob", "carol", "bob", "alice"])
    assert event.participant_ids == ["bob", "carol", "alice"]
    assert event.people == ["alice", "bob", "carol"]


def test_event_key_asset_and_media_flags() -> None:
    plain = build_event("e1")
    assert not plain.has_media and plain.key_asset is None

    event = build_event("e2", assets=[build_asset("a"), build_asset("b", 5, key=True)])
    assert event.has_media
    assert event.key_asset is not None and event.key_asset.id == "b"
    assert event.asset_ids() == ["a", "b"]
    assert all(a.event_id == "e2" for a in event.assets)


def test_offset_aware_times_are_stored_as_naive_utc() -> None:
    event = build_event("e1", datetime(2024, 6, 1, 14, 0, tzinfo=timezone(timedelta(hours=2))))
    assert event.timestamp == T0
    assert event.timestamp.tzinfo is None

    asset = MediaAsset.model_validate({"id": "a", "captured_at": "2024-06-01T12:00:00Z"})
    assert asset.captured_at == T0

    naive = build_event("e2", T0)
    assert naive.timestamp == T0


def test_contracts_are_frozen() -> None:
    event = build_event("e1", title="Original")
    with pytest.raises(ValidationError):
        event.title = "Changed"  # type: ignore[misc]
    updated = event.model_copy(update={"title": "Changed"})
    assert event.title == "Original" and updated.title == "Changed"


def test_clustering_presets_differ_by_context() -> None:
    pet = ClusteringConfiguration.for_context(ContextType.PET)
    business = ClusteringConfiguration.for_context("business")
    assert pet.burst_threshold_seconds < business.burst_threshold_seconds
    assert pet.spatial_threshold_meters == 100.0
    assert business.temporal_threshold_minutes == 480
    assert ClusteringConfiguration().temporal_threshold_minutes == 60


def test_clustering_config_rejects_inverted_burst_bounds() -> None:
    with pytest.raises(ValidationError):
        ClusteringConfiguration(min_burst_size=5, max_burst_size=3)


# --------------------------------------------------------------------------- #
# Render nodes & bubbles
# --------------------------------------------------------------------------- #


def test_render_node_discriminated_parse() -> None:
    adapter: TypeAdapter[list[RenderNode]] = TypeAdapter(list[RenderNode])
    event = build_event("e1", title="Beach")
    payload = [
        {"kind": "event", "event": event.model_dump(mode="json"), "tier": "day"},
        {
            "kind": "cluster",
            "id": "month_2024-06",
            "tier": "month",
            "start": T0.isoformat(),
            "end": T0.isoformat(),
            "event_ids": ["x", "y"],
            "count": 2,
        },
    ]
    nodes = adapter.validate_python(payload)
    assert isinstance(nodes[0], EventNode) and nodes[0].label == "Beach"
    assert isinstance(nodes[1], ClusterNode) and nodes[1].label == "2 events"


def test_event_node_label_fallback() -> None:
    node = EventNode(event=build_event("e1"), tier=ZoomTier.DAY)
    assert node.label == "Untitled Event"
    assert node.member_ids == ["e1"]


@pytest.mark.parametrize(  # type: ignore[misc]
    ("count", "expected"),
    [(1, 0.6), (2, 0.8), (3, 0.8), (5, 1.0), (10, 1.2), (11, 1.4)],
)
def test_bubble_size_multiplier_bands(count: int, expected: float) -> None:
    bubble = BubbleData(
        id="bubble_2024",
        start=T0,
        end=T0,
        event_count=count,
        label="2024",
        color=Color.from_hex("#64748B"),
        dominant_category="Other",
        tier=ZoomTier.YEAR,
    )
    assert bubble.size_multiplier == expected
    assert bubble.model_dump()["size_multiplier"] == expected

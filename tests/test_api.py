# tests/test_api.py
"""
Contract tests for the Lifeline FastAPI application.

Each test builds a fresh app through `create_app()` and drives it with
`fastapi.testclient.TestClient`. Payloads are produced from the same builders
the engine tests use and serialized with ``model_dump(mode="json")``, so the
tests also cover the JSON round-trip of the domain contracts.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Final

import pytest
from fastapi.testclient import TestClient

from builders import T0, build_asset, build_event
from lifeline import __version__ as PKG_VERSION
from lifeline.api.app import create_app
from lifeline.core.contracts.timeline import TimelineEvent

ALLOWED_ENVS: Final[set[str]] = {"dev", "test", "prod"}
DAY_SECONDS: Final[int] = 86_400


@pytest.fixture  # type: ignore[misc]
def client() -> Iterator[TestClient]:
    with TestClient(create_app()) as c:
        yield c


def _json(events: list[TimelineEvent]) -> list[dict[str, Any]]:
    return [e.model_dump(mode="json") for e in events]


def _roll() -> list[dict[str, Any]]:
    offsets = [0, 5, 10, 15, DAY_SECONDS]
    return [build_asset(f"a{i}", t).model_dump(mode="json") for i, t in enumerate(offsets)]


# --------------------------------------------------------------------------- #
# System
# --------------------------------------------------------------------------- #


def test_health_endpoint_contract(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200

    data = resp.json()
    assert data["status"] == "ok"
    assert data["environment"] in ALLOWED_ENVS
    assert data["version"] == PKG_VERSION


# --------------------------------------------------------------------------- #
# Moments
# --------------------------------------------------------------------------- #


def test_moments_detects_burst_with_context_preset(client: TestClient) -> None:
    resp = client.post(
        "/moments",
        json={"assets": _roll(), "owner_id": "alice", "context_id": "rex", "context": "pet"},
    )
    assert resp.status_code == 200, resp.text

    body = resp.json()
    assert (body["cluster_count"], body["burst_count"]) == (2, 1)
    burst, single = body["events"]
    assert burst["event_type"] == "burst"
    assert burst["title"] == "Photo Burst (4 photos)"
    assert burst["context_id"] == "rex"
    assert sum(a["is_key_asset"] for a in burst["assets"]) == 1
    assert single["event_type"] == "photo"


def test_moments_explicit_config_wins_over_preset(client: TestClient) -> None:
    config = {"burst_threshold_seconds": 1, "min_burst_size": 3}
    resp = client.post(
        "/moments",
        json={"assets": _roll(), "owner_id": "alice", "context": "pet", "config": config},
    )
    body = resp.json()
    assert (body["cluster_count"], body["burst_count"]) == (2, 0)
    assert body["events"][0]["title"] == "4 Photos"


def test_moments_rejects_malformed_payload(client: TestClient) -> None:
    resp = client.post("/moments", json={"assets": [{"id": "x"}], "owner_id": "alice"})
    assert resp.status_code == 422


# --------------------------------------------------------------------------- #
# Views
# --------------------------------------------------------------------------- #


def test_nodes_and_bubbles_views(client: TestClient) -> None:
    events = _json([build_event(f"e{i}", i * 0.1) for i in range(10)])
    window = {"visible_start": "2024-06-01T00:00:00", "visible_end": "2024-06-30T23:59:59"}

    nodes = client.post(
        "/views/nodes",
        json={"events": events, "tier": "day", **window, "thresholds": {"day": 3}},
    ).json()
    assert [n["kind"] for n in nodes] == ["cluster", "cluster"]
    assert nodes[0]["id"] == "day_2024-06-01"

    bubbles = client.post("/views/bubbles", json={"events": events, "tier": "month"}).json()
    assert len(bubbles) == 1
    assert bubbles[0]["event_count"] == 10
    assert bubbles[0]["size_multiplier"] == 1.2


def test_views_accept_offset_aware_events_with_naive_window(client: TestClient) -> None:
    event = {"id": "e", "owner_id": "alice", "timestamp": "2024-01-05T10:00:00Z"}
    window = {"visible_start": "2024-01-01T00:00:00", "visible_end": "2024-01-31T23:59:59"}

    resp = client.post("/views/nodes", json={"events": [event], "tier": "focus", **window})
    assert resp.status_code == 200, resp.text
    (node,) = resp.json()
    assert node["event"]["timestamp"] == "2024-01-05T10:00:00"

    resp = client.post(
        "/views/layout",
        json={
            "events": [event, _json([build_event("naive", T0)])[0]],
            "tier": "month",
            "visible_start": "2024-01-01T01:00:00+01:00",
            "visible_end": "2024-12-31T00:00:00",
            "viewport": {"width": 800, "height": 600},
            "pixels_per_day": 1,
        },
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["stats"]["visible_events"] == 2


def test_layout_view_returns_pipeline_payload(client: TestClient) -> None:
    events = _json([build_event("a", 0), build_event("b", 3)])
    resp = client.post(
        "/views/layout",
        json={
            "events": events,
            "tier": "focus",
            "visible_start": "2024-06-01T00:00:00",
            "visible_end": "2024-06-30T00:00:00",
            "viewport": {"width": 800, "height": 600},
            "pixels_per_day": 10,
        },
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["tier"] == "focus"
    assert body["stats"]["nodes"] == 2
    assert [item["primary_px"] for item in body["layout"]] == [0.0, 30.0]


def test_flow_and_swimlane_views(client: TestClient) -> None:
    events = _json(
        [
            build_event("solo", 0, owner="alice"),
            build_event("shared", 2, owner="alice", participants=["bob"]),
        ]
    )
    flow = client.post(
        "/views/flow",
        json={
            "events": events,
            "participant_ids": ["alice", "bob"],
            "start_date": T0.isoformat(),
            "viewport_width": 600,
        },
    ).json()
    assert [p["participant_id"] for p in flow["paths"]] == ["alice", "bob"]
    assert len(flow["intersections"]) == 1

    lanes = client.post(
        "/views/swimlanes",
        json={
            "events": events,
            "lane_owner_ids": ["alice", "bob"],
            "start_date": T0.isoformat(),
            "pixels_per_day": 10,
        },
    ).json()
    assert [item["is_bridge"] for item in lanes] == [False, True]


# --------------------------------------------------------------------------- #
# Editing
# --------------------------------------------------------------------------- #


def test_split_endpoint(client: TestClient) -> None:
    event = build_event("e", 0, assets=[build_asset("a1", 0), build_asset("a2", 60)])
    resp = client.post(
        "/events/split",
        json={"event": event.model_dump(mode="json"), "groups": [["a1"], ["a2"]]},
    )
    assert resp.status_code == 200, resp.text
    assert [e["assets"][0]["id"] for e in resp.json()["events"]] == ["a1", "a2"]


def test_rejected_edit_returns_400_with_code(client: TestClient) -> None:
    events = _json([build_event("a", 0, owner="alice"), build_event("b", 1, owner="bob")])
    resp = client.post("/events/merge", json={"events": events})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "owner_mismatch"
    assert body["detail"]


def test_move_and_key_asset_endpoints(client: TestClient) -> None:
    source = build_event("s", 0, assets=[build_asset("a1", 0), build_asset("a2", 60)])
    target = build_event("t", 1, assets=[build_asset("b1", 0)])
    moved = client.post(
        "/events/move",
        json={
            "asset_ids": ["a2"],
            "source": source.model_dump(mode="json"),
            "target": target.model_dump(mode="json"),
        },
    ).json()["events"]
    assert [len(e["assets"]) for e in moved] == [1, 2]

    keyed = client.post(
        "/events/key-asset",
        json={"event": source.model_dump(mode="json"), "asset_id": "a2"},
    ).json()["events"][0]
    assert [a["id"] for a in keyed["assets"] if a["is_key_asset"]] == ["a2"]

# scripts/smoke.py
"""
Smoke Test Script for the Lifeline engine.

Generates a synthetic photo roll (bursts, scattered shots and a few shared
events), then runs the whole chain: moments → tier nodes → layout → bubbles →
flow streams. Prints a short summary of every stage.

Usage
-----
    $ python scripts/smoke.py
    $ python scripts/smoke.py --photos 400 --tier week --seed 7
"""

import argparse
import logging
import random
import sys
import traceback
from datetime import datetime, timedelta
from pathlib import Path

from dotenv import load_dotenv

from lifeline.core.contracts.clustering import ClusteringConfiguration, ContextType
from lifeline.core.contracts.layout import Viewport
from lifeline.core.contracts.media import GeoPoint, MediaAsset
from lifeline.core.contracts.nodes import ZoomTier
from lifeline.engine.clustering import MediaClusteringEngine
from lifeline.engine.flow import layout_flow
from lifeline.pipelines.timeline_view import run_view

# --------------------------------------------------------------------------- #
# Environment Setup
# --------------------------------------------------------------------------- #
env_path = Path(".env")
if env_path.exists():
    load_dotenv(env_path)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

# --------------------------------------------------------------------------- #
# Test Data
# --------------------------------------------------------------------------- #
PLACES = [
    GeoPoint(latitude=52.5200, longitude=13.4050, name="Berlin"),
    GeoPoint(latitude=48.8566, longitude=2.3522, name="Paris"),
    GeoPoint(latitude=41.9028, longitude=12.4964, name="Rome"),
]
PEOPLE = ["alice", "bob", "carol"]


def synthetic_roll(count: int, rng: random.Random) -> list[MediaAsset]:
    """Photos spread over a year; roughly one in five starts a burst."""
    assets: list[MediaAsset] = []
    ts = datetime(2024, 1, 1, 9, 0)
    while len(assets) < count:
        ts += timedelta(hours=rng.randint(2, 240))
        place = rng.choice(PLACES)
        shots = rng.randint(3, 8) if rng.random() < 0.2 else 1
        for _ in range(shots):
            ts += timedelta(seconds=rng.randint(2, 20))
            assets.append(
                MediaAsset(
                    id=f"img-{len(assets):04d}",
                    captured_at=ts,
                    location=place if rng.random() < 0.8 else None,
                    exif_complete=rng.random() < 0.7,
                    uri=f"file:///roll/img-{len(assets):04d}.jpg",
                )
            )
    return assets[:count]


def main() -> None:
    """Execute the smoke test workflow."""
    parser = argparse.ArgumentParser(description="Run Lifeline Smoke Test")
    parser.add_argument("--photos", type=int, default=200, help="Number of synthetic photos")
    parser.add_argument("--tier", type=ZoomTier, default=ZoomTier.MONTH, help="Zoom tier")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for the roll")
    args = parser.parse_args()

    rng = random.Random(args.seed)

    try:
        roll = synthetic_roll(args.photos, rng)
        engine = MediaClusteringEngine(ClusteringConfiguration.for_context(ContextType.PERSON))
        events = engine.build_moments(roll, owner_id="alice", context_id="family")
        # Tag a few moments as shared so the flow view has junctions.
        events = [
            e.model_copy(update={"participant_ids": rng.sample(PEOPLE[1:], k=rng.randint(0, 2))})
            for e in events
        ]
        print(f"📸 {len(roll)} photos → {len(events)} moments")

        view = run_view(
            events,
            tier=args.tier,
            visible_start=events[0].timestamp,
            visible_end=events[-1].timestamp,
            viewport=Viewport(width=1200, height=800),
            pixels_per_day=4.0,
        )
        print(f"🗂  view stats: {view['stats']}")

        flow = layout_flow(events, PEOPLE, events[0].timestamp, viewport_width=900)
        for path in flow.paths:
            segments = len(path.curve.segments)
            print(f"🌊 {path.participant_id}: {len(path.nodes)} nodes, {segments} segments")
        print(f"🔀 {len(flow.intersections)} shared events")
        print("\n✅ Smoke test passed")

    except Exception as e:
        print(f"\n❌ Smoke test failed: {e}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()

# tests/builders.py
"""
Builders for Lifeline test data.

Times are offsets from a fixed anchor so the suite never depends on the wall
clock. Test modules import these directly; ``conftest.py`` only wraps the id
factory as a fixture.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timedelta

from lifeline.core.contracts.media import GeoPoint, MediaAsset
from lifeline.core.contracts.timeline import TimelineEvent

T0 = datetime(2024, 6, 1, 12, 0, 0)

BERLIN = GeoPoint(latitude=52.5200, longitude=13.4050, name="Berlin")
PARIS = GeoPoint(latitude=48.8566, longitude=2.3522, name="Paris")


def build_asset(
    asset_id: str,
    seconds: float = 0,
    *,
    location: GeoPoint | None = None,
    exif: bool = True,
    uri: str | None = None,
    event_id: str = "",
    key: bool = False,
) -> MediaAsset:
    return MediaAsset(
        id=asset_id,
        event_id=event_id,
        captured_at=T0 + timedelta(seconds=seconds),
        location=location,
        exif_complete=exif,
        is_key_asset=key,
        uri=uri,
    )


def build_event(
    event_id: str,
    when: datetime | float = 0,
    *,
    owner: str = "alice",
    participants: Sequence[str] = (),
    assets: Sequence[MediaAsset] = (),
    context: str | None = "family",
    title: str | None = None,
    description: str | None = None,
    event_type: str = "photo",
    tags: Sequence[str] = (),
) -> TimelineEvent:
    """Build an event; a numeric ``when`` is a day offset from the anchor."""
    timestamp = when if isinstance(when, datetime) else T0 + timedelta(days=when)
    return TimelineEvent(
        id=event_id,
        owner_id=owner,
        context_id=context,
        timestamp=timestamp,
        event_type=event_type,
        title=title,
        description=description,
        assets=[a.model_copy(update={"event_id": event_id}) for a in assets],
        participant_ids=list(participants),
        tags=list(tags),
    )


def sequential_ids(prefix: str = "evt") -> Callable[[], str]:
    """Deterministic id factory: evt-1, evt-2, ..."""
    counter = iter(range(1, 1_000_000))
    return lambda: f"{prefix}-{next(counter)}"

"""Key-asset selection shared by clustering and event editing.

The key asset is the single media item that stands in for a moment. Selection
is deterministic and walks three tiers of candidates:

1. assets with complete EXIF *and* GPS,
2. assets with complete EXIF,
3. all assets.

Within the first non-empty tier the asset closest to the temporal midpoint of
the whole group wins; equal distances go to the earlier capture, then to the
lower id.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from lifeline.core.contracts.media import MediaAsset


def temporal_midpoint(assets: Sequence[MediaAsset]) -> datetime:
    """Return the midpoint between the earliest and latest capture."""
    times = [a.captured_at for a in assets]
    start, end = min(times), max(times)
    return start + (end - start) / 2


def select_key_asset(assets: Sequence[MediaAsset]) -> MediaAsset | None:
    """Pick the representative asset of ``assets`` (``None`` when empty)."""
    if not assets:
        return None

    midpoint = temporal_midpoint(assets)
    tiers = (
        [a for a in assets if a.exif_complete and a.has_gps],
        [a for a in assets if a.exif_complete],
        list(assets),
    )
    candidates = next(tier for tier in tiers if tier)
    return min(
        candidates,
        key=lambda a: (abs(a.captured_at - midpoint), a.captured_at, a.id),
    )


def with_key_flag(assets: Sequence[MediaAsset], key_id: str | None) -> list[MediaAsset]:
    """Return copies of ``assets`` where only ``key_id`` carries the key flag."""
    out: list[MediaAsset] = []
    for asset in assets:
        flagged = asset.id == key_id
        if asset.is_key_asset != flagged:
            asset = asset.model_copy(update={"is_key_asset": flagged})
        out.append(asset)
    return out


def rekey(assets: Sequence[MediaAsset], event_id: str | None = None) -> list[MediaAsset]:
    """Re-select the key asset and optionally re-point assets to ``event_id``.

    Assets are returned in capture order.
    """
    ordered = sorted(assets, key=lambda a: (a.captured_at, a.id))
    key = select_key_asset(ordered)
    flagged = with_key_flag(ordered, key.id if key else None)
    if event_id is None:
        return flagged
    return [
        a if a.event_id == event_id else a.model_copy(update={"event_id": event_id})
        for a in flagged
    ]


__all__ = ["temporal_midpoint", "select_key_asset", "with_key_flag", "rekey"]

"""MediaAsset — a single captured photo/video with parsed capture metadata.

Assets reach the core with timestamps and coordinates already decoded from
EXIF upstream. An asset is owned by exactly one event at a time through
``event_id``; an empty ``event_id`` marks an asset that has not been clustered
into a moment yet.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from .base import Contract, Latitude, Longitude, UtcDateTime


class AssetKind(str, Enum):
    """Media type of an asset."""

    PHOTO = "photo"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"


class GeoPoint(Contract):
    """A WGS84 coordinate with an optional, already-resolved place name."""

    latitude: Latitude
    longitude: Longitude
    name: str | None = Field(default=None, description="Place label resolved upstream")


class MediaAsset(Contract):
    """A captured media item owned by one event."""

    id: str = Field(min_length=1)
    event_id: str = Field(default="", description="Owning event id; empty before clustering")
    captured_at: UtcDateTime
    location: GeoPoint | None = None
    exif_complete: bool = False
    is_key_asset: bool = False
    uri: str | None = Field(default=None, description="Opaque locator used for thumbnails")
    kind: AssetKind = AssetKind.PHOTO

    @property
    def has_gps(self) -> bool:
        return self.location is not None


__all__ = ["AssetKind", "GeoPoint", "MediaAsset"]

"""TimelineEvent — the only durable entity of the timeline.

Everything else in Lifeline (clusters, render nodes, layouts, bubbles, flow
paths, swimlanes) is derived from a list of these and recomputed per query.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, field_validator

from .base import Contract, UtcDateTime
from .media import GeoPoint, MediaAsset


class PrivacyLevel(str, Enum):
    """Visibility label carried through untouched; filtering happens upstream."""

    PRIVATE = "private"
    SHARED = "shared"
    PUBLIC = "public"


class TimelineEvent(Contract):
    """A dated life event with optional media, people and tags.

    Parameters
    ----------
    id:
        Stable event identifier.
    owner_id:
        Person whose timeline the event belongs to.
    context_id:
        Optional timeline context (a person, pet, project, ...). Events can only
        be merged or exchange assets inside one context.
    timestamp:
        When the event happened.
    event_type:
        Free tag, e.g. ``"photo"``, ``"burst"``, ``"milestone"``, ``"text"``.
    assets:
        Ordered media owned by the event.
    participant_ids:
        Other people present, unique, in first-seen order.
    """

    id: str = Field(min_length=1)
    owner_id: str = Field(min_length=1)
    context_id: str | None = None
    timestamp: UtcDateTime
    event_type: str = "photo"
    title: str | None = None
    description: str | None = None
    assets: list[MediaAsset] = Field(default_factory=list)
    participant_ids: list[str] = Field(default_factory=list)
    location: GeoPoint | None = None
    privacy: PrivacyLevel = PrivacyLevel.PRIVATE
    tags: list[str] = Field(default_factory=list)

    @field_validator("participant_ids")
    @classmethod
    def _dedupe_participants(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))

    @property
    def people(self) -> list[str]:
        """Owner followed by participants, without duplicates."""
        return list(dict.fromkeys([self.owner_id, *self.participant_ids]))

    @property
    def key_asset(self) -> MediaAsset | None:
        """Flagged key asset, or None when no asset carries the flag."""
        return next((a for a in self.assets if a.is_key_asset), None)

    @property
    def has_media(self) -> bool:
        return bool(self.assets)

    def asset_ids(self) -> list[str]:
        return [a.id for a in self.assets]


__all__ = ["PrivacyLevel", "TimelineEvent"]

"""Render nodes: the zoom-dependent view of a timeline.

A render node is either a single event (:class:`EventNode`) or an aggregate of
a calendar bucket (:class:`ClusterNode`). :data:`RenderNode` is a Pydantic
discriminated union on ``kind``; consumers branch on the concrete class and
finish with :func:`lifeline.core.result.never` so a new variant cannot slip
through silently.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import Field

from .base import Contract, UtcDateTime
from .timeline import TimelineEvent


class ZoomTier(str, Enum):
    """Zoom level controlling aggregation granularity."""

    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    FOCUS = "focus"


class TierThresholds(Contract):
    """Maximum members a bucket may hold before it collapses into a cluster."""

    year: int = Field(default=20, ge=0)
    month: int = Field(default=30, ge=0)
    week: int = Field(default=15, ge=0)
    day: int = Field(default=8, ge=0)

    def for_tier(self, tier: ZoomTier) -> int | None:
        """Return the threshold for ``tier``; ``None`` means never aggregate."""
        if tier is ZoomTier.FOCUS:
            return None
        return int(getattr(self, tier.value))


class EventNode(Contract):
    """A single event rendered on its own."""

    kind: Literal["event"] = "event"
    event: TimelineEvent
    tier: ZoomTier = ZoomTier.FOCUS

    @property
    def id(self) -> str:
        return self.event.id

    @property
    def start(self) -> datetime:
        return self.event.timestamp

    @property
    def end(self) -> datetime:
        return self.event.timestamp

    @property
    def label(self) -> str:
        return self.event.title or "Untitled Event"

    @property
    def has_media(self) -> bool:
        return self.event.has_media

    @property
    def member_ids(self) -> list[str]:
        return [self.event.id]


class ClusterNode(Contract):
    """An aggregated calendar bucket.

    ``type_counts`` summarizes the members by simplified type (``milestone``,
    ``photo``, ``note``, ``other``) and ``dominant_type`` is the most common of
    them, first-seen on ties.
    """

    kind: Literal["cluster"] = "cluster"
    id: str
    tier: ZoomTier
    start: UtcDateTime
    end: UtcDateTime
    event_ids: list[str] = Field(min_length=1)
    count: int = Field(ge=1)
    type_counts: dict[str, int] = Field(default_factory=dict)
    dominant_type: str = "other"

    @property
    def label(self) -> str:
        return f"{self.count} events"

    @property
    def member_ids(self) -> list[str]:
        return list(self.event_ids)


RenderNode = Annotated[EventNode | ClusterNode, Field(discriminator="kind")]


__all__ = ["ZoomTier", "TierThresholds", "EventNode", "ClusterNode", "RenderNode"]

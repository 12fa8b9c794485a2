"""BubbleData — a circular overview summary of one calendar bucket."""

from __future__ import annotations

from pydantic import Field, computed_field

from .base import Contract, UtcDateTime
from .geometry import Color
from .nodes import ZoomTier


class BubbleData(Contract):
    """Summary of all events falling in one bucket at a given tier."""

    id: str
    start: UtcDateTime
    end: UtcDateTime
    event_count: int = Field(ge=1)
    label: str
    color: Color
    dominant_category: str
    participant_ids: list[str] = Field(default_factory=list)
    event_ids: list[str] = Field(default_factory=list)
    participant_counts: dict[str, int] = Field(default_factory=dict)
    tier: ZoomTier

    @computed_field  # type: ignore[prop-decorator]
    @property
    def size_multiplier(self) -> float:
        """Discrete radius scale for the bubble, growing with event count."""
        if self.event_count <= 1:
            return 0.6
        if self.event_count <= 3:
            return 0.8
        if self.event_count <= 5:
            return 1.0
        if self.event_count <= 10:
            return 1.2
        return 1.4


__all__ = ["BubbleData"]

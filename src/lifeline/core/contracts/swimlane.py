"""Swimlane contracts: fixed per-participant lanes with bridge cards."""

from __future__ import annotations

from pydantic import Field, model_validator

from .base import Contract
from .geometry import Rect
from .timeline import TimelineEvent


class SwimlaneConfig(Contract):
    lane_height: float = Field(default=200.0, gt=0)
    event_width: float = Field(default=280.0, gt=0)
    event_height: float = Field(default=160.0, gt=0)
    bridge_padding: float = Field(default=20.0, ge=0)
    collision_gap: float = Field(default=20.0, ge=0)


class SwimlaneItem(Contract):
    """A placed event. Bridges span from ``start_lane`` to ``end_lane``."""

    event: TimelineEvent
    rect: Rect
    start_lane: int = Field(ge=0)
    end_lane: int = Field(ge=0)
    is_bridge: bool = False

    @model_validator(mode="after")
    def _lane_order(self) -> SwimlaneItem:
        if self.end_lane < self.start_lane:
            raise ValueError("end_lane must be >= start_lane")
        return self

    def shares_lanes_with(self, other: SwimlaneItem) -> bool:
        return self.start_lane <= other.end_lane and other.start_lane <= self.end_lane


__all__ = ["SwimlaneConfig", "SwimlaneItem"]

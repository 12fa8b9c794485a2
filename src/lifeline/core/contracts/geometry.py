"""Owned geometric primitives for logical layout output.

The rendering layer converts these into its native drawing API. Coordinates
are logical pixels with the origin at the top-left and y growing downward.

- `Point`       : a 2D position.
- `Rect`        : an axis-aligned rectangle (x, y, w, h).
- `Color`       : 8-bit RGBA.
- `CubicSegment`: one cubic Bézier segment (two control points and an end).
- `Curve`       : a start point followed by an ordered list of segments.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from .base import Contract, NonNegative

Channel = Annotated[int, Field(ge=0, le=255)]


class Point(Contract):
    """A 2D point in logical pixels."""

    x: float
    y: float

    def lerp(self, other: Point, t: float) -> Point:
        """Return the point at fraction ``t`` on the segment ``self -> other``."""
        return Point(x=self.x + (other.x - self.x) * t, y=self.y + (other.y - self.y) * t)

    def offset(self, dx: float = 0.0, dy: float = 0.0) -> Point:
        """Return a copy translated by ``(dx, dy)``."""
        return Point(x=self.x + dx, y=self.y + dy)


class Rect(Contract):
    """Axis-aligned rectangle anchored at its top-left corner."""

    x: float
    y: float
    w: NonNegative
    h: NonNegative

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def center(self) -> Point:
        return Point(x=self.x + self.w / 2, y=self.y + self.h / 2)

    def overlaps(self, other: Rect) -> bool:
        """Return True if the interiors intersect. Touching edges do not overlap."""
        return (
            self.left < other.right
            and other.left < self.right
            and self.top < other.bottom
            and other.top < self.bottom
        )

    def shifted(self, dx: float = 0.0, dy: float = 0.0) -> Rect:
        """Return a copy translated by ``(dx, dy)``."""
        return Rect(x=self.x + dx, y=self.y + dy, w=self.w, h=self.h)


class Color(Contract):
    """8-bit RGBA color."""

    r: Channel
    g: Channel
    b: Channel
    a: Channel = 255

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#RRGGBB`` or ``#AARRGGBB``."""
        digits = value.lstrip("#")
        if len(digits) == 6:
            digits = "FF" + digits
        if len(digits) != 8:
            raise ValueError(f"expected #RRGGBB or #AARRGGBB, got {value!r}")
        raw = int(digits, 16)
        return cls(a=(raw >> 24) & 0xFF, r=(raw >> 16) & 0xFF, g=(raw >> 8) & 0xFF, b=raw & 0xFF)

    @property
    def hex(self) -> str:
        """Return ``#RRGGBB`` (alpha dropped)."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


class CubicSegment(Contract):
    """Cubic Bézier segment continuing from the previous end point."""

    c1: Point
    c2: Point
    end: Point


class Curve(Contract):
    """Path made of cubic segments starting at ``start``."""

    start: Point
    segments: list[CubicSegment] = Field(default_factory=list)

    @property
    def end(self) -> Point:
        return self.segments[-1].end if self.segments else self.start

    def anchors(self) -> list[Point]:
        """Return the on-curve points: the start plus every segment end."""
        return [self.start, *(seg.end for seg in self.segments)]


__all__ = ["Point", "Rect", "Color", "CubicSegment", "Curve"]

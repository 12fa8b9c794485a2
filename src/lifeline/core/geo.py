"""Spherical-earth helpers for spatial clustering.

Distances use the haversine formula on a sphere of radius 6 371 km, which is
accurate to a few metres at the scales moments are grouped at.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from lifeline.core.contracts.media import GeoPoint

EARTH_RADIUS_METERS = 6_371_000.0


def haversine_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points in metres."""
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(h)))


def centroid(points: Iterable[GeoPoint]) -> GeoPoint | None:
    """Arithmetic mean of the coordinates, or ``None`` for no points.

    The place name is kept only when every named point shares it.
    """
    pts = list(points)
    if not pts:
        return None
    names = {p.name for p in pts if p.name}
    return GeoPoint(
        latitude=sum(p.latitude for p in pts) / len(pts),
        longitude=sum(p.longitude for p in pts) / len(pts),
        name=names.pop() if len(names) == 1 else None,
    )


__all__ = ["EARTH_RADIUS_METERS", "haversine_meters", "centroid"]

"""Base contract shared by every Lifeline data model.

This module defines:

- `Contract`: a frozen Pydantic v2 model. Every entity and derived structure
  (assets, events, render nodes, layout outputs) derives from it, so no engine
  function can mutate its inputs in place. Updates go through
  ``model_copy(update=...)`` and produce a new instance.
- Shared small annotated types used across contracts.
- `UtcDateTime`: every stored timestamp is naive UTC. Offset-aware input is
  converted on validation, so events from different sources always compare.

Notes
-----
- Keep models conservative and explicit; downstream renderers rely on these shapes.
- Validation is limited to ranges and simple shape checks. Semantic rules
  (partitions, ownership) belong to the engine and are reported as results.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


def to_utc_naive(value: datetime) -> datetime:
    """Express ``value`` as naive UTC; naive values are taken as UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


# ---- Shared small types ------------------------------------------------------

Latitude = Annotated[float, Field(ge=-90.0, le=90.0, description="Degrees north")]
Longitude = Annotated[float, Field(ge=-180.0, le=180.0, description="Degrees east")]
NonNegative = Annotated[float, Field(ge=0.0)]
PositiveInt = Annotated[int, Field(ge=1)]
UtcDateTime = Annotated[datetime, AfterValidator(to_utc_naive)]


class Contract(BaseModel):
    """Immutable base for all Lifeline contracts."""

    model_config = ConfigDict(frozen=True, extra="forbid")


__all__ = [
    "Contract",
    "Latitude",
    "Longitude",
    "NonNegative",
    "PositiveInt",
    "UtcDateTime",
    "to_utc_naive",
]

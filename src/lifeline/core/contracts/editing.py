"""Editing failure contracts.

Editing operations never raise for invalid user input. They return
``Err(EditFailure)`` with a stable machine code and a readable reason that the
UI can show as-is.
"""

from __future__ import annotations

from enum import Enum

from .base import Contract


class EditErrorCode(str, Enum):
    """Stable failure codes for event editing."""

    TOO_FEW_ASSETS = "too_few_assets"
    TOO_FEW_GROUPS = "too_few_groups"
    EMPTY_GROUP = "empty_group"
    DUPLICATE_ASSET = "duplicate_asset"
    INCOMPLETE_PARTITION = "incomplete_partition"
    TOO_FEW_EVENTS = "too_few_events"
    CONTEXT_MISMATCH = "context_mismatch"
    OWNER_MISMATCH = "owner_mismatch"
    PRIMARY_NOT_MEMBER = "primary_not_member"
    NOTHING_SELECTED = "nothing_selected"
    SAME_EVENT = "same_event"
    ASSET_NOT_FOUND = "asset_not_found"
    WOULD_EMPTY_SOURCE = "would_empty_source"


class EditFailure(Contract):
    code: EditErrorCode
    reason: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.reason}"


__all__ = ["EditErrorCode", "EditFailure"]

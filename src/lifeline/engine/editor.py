"""Event set editor: validated split, merge, move and key re-selection.

Every operation validates its whole request before building anything and
returns ``Result[list[TimelineEvent], EditFailure]``:

- ``Ok(events)`` holds the complete set of updated events to persist,
- ``Err(EditFailure)`` explains why the request was rejected.

Inputs are frozen models and are never modified. Asset partitioning is
preserved by every successful edit: no asset is lost or duplicated.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from uuid import uuid4

from lifeline.core.contracts.editing import EditErrorCode, EditFailure
from lifeline.core.contracts.timeline import TimelineEvent
from lifeline.core.result import Result, err, ok
from lifeline.engine.key_asset import rekey, with_key_flag

logger = logging.getLogger(__name__)

EditResult = Result[list[TimelineEvent], EditFailure]
IdFactory = Callable[[], str]

#: Separator used when joining merged descriptions.
DESCRIPTION_SEPARATOR = " • "


def _new_id() -> str:
    return str(uuid4())


def _fail(code: EditErrorCode, reason: str) -> EditResult:
    logger.info("Rejected edit (%s): %s", code.value, reason)
    return err(EditFailure(code=code, reason=reason))


# --------------------------------------------------------------------------- #
# Split
# --------------------------------------------------------------------------- #


def split_event(
    event: TimelineEvent,
    groups: Sequence[Sequence[str]],
    id_factory: IdFactory | None = None,
) -> EditResult:
    """Split ``event`` into one new event per group of asset ids.

    The groups must partition the event's assets exactly. Each resulting
    event gets a new id, its own key asset and the timestamp of its earliest
    asset. Only the first keeps the original title and description.
    """
    if len(event.assets) < 2:
        return _fail(EditErrorCode.TOO_FEW_ASSETS, "An event needs at least 2 assets to split")
    if len(groups) < 2:
        return _fail(EditErrorCode.TOO_FEW_GROUPS, "Split requires at least 2 groups")
    if any(not group for group in groups):
        return _fail(EditErrorCode.EMPTY_GROUP, "Split groups must not be empty")

    flat = [asset_id for group in groups for asset_id in group]
    if len(flat) != len(set(flat)):
        return _fail(EditErrorCode.DUPLICATE_ASSET, "An asset appears in more than one group")
    if set(flat) != set(event.asset_ids()):
        return _fail(
            EditErrorCode.INCOMPLETE_PARTITION,
            "Groups must contain exactly the assets of the event",
        )

    make_id = id_factory or _new_id
    by_id = {a.id: a for a in event.assets}
    out: list[TimelineEvent] = []
    for index, group in enumerate(groups):
        new_id = make_id()
        assets = rekey([by_id[asset_id] for asset_id in group], new_id)
        out.append(
            event.model_copy(
                update={
                    "id": new_id,
                    "timestamp": assets[0].captured_at,
                    "assets": assets,
                    "title": event.title if index == 0 else None,
                    "description": event.description if index == 0 else None,
                }
            )
        )

    logger.debug("Split event %s into %d events", event.id, len(out))
    return ok(out)


# --------------------------------------------------------------------------- #
# Merge
# --------------------------------------------------------------------------- #


def merged_title(events: Sequence[TimelineEvent], asset_count: int) -> str:
    """Combine titles of merged events.

    No titles gives a photo-count title, a single title is kept, up to two
    distinct titles are joined with ``" & "`` and anything more falls back to
    an event-count title.
    """
    titles = [e.title for e in events if e.title and e.title.strip()]
    if not titles:
        return f"Merged Event ({asset_count} photos)"
    if len(titles) == 1:
        return titles[0]
    distinct = list(dict.fromkeys(titles))
    if len(distinct) <= 2:
        return " & ".join(distinct)
    return f"Merged Event ({len(events)} events)"


def merge_events(
    events: Sequence[TimelineEvent],
    primary_id: str | None = None,
    id_factory: IdFactory | None = None,
) -> EditResult:
    """Merge ``events`` into a single new event.

    Parameters
    ----------
    events:
        At least two events sharing owner and context.
    primary_id:
        Event whose type, location and privacy the result inherits. Defaults
        to the earliest event.
    """
    if len(events) < 2:
        return _fail(EditErrorCode.TOO_FEW_EVENTS, "Merge requires at least 2 events")
    if len({e.context_id for e in events}) > 1:
        return _fail(EditErrorCode.CONTEXT_MISMATCH, "Events belong to different contexts")
    if len({e.owner_id for e in events}) > 1:
        return _fail(EditErrorCode.OWNER_MISMATCH, "Events belong to different owners")
    if primary_id is not None and primary_id not in {e.id for e in events}:
        return _fail(
            EditErrorCode.PRIMARY_NOT_MEMBER,
            f"Primary event {primary_id} is not part of the merge",
        )

    all_assets = [a for e in events for a in e.assets]
    if len({a.id for a in all_assets}) != len(all_assets):
        return _fail(EditErrorCode.DUPLICATE_ASSET, "An asset is owned by more than one event")

    ordered = sorted(events, key=lambda e: (e.timestamp, e.id))
    primary = next((e for e in ordered if e.id == primary_id), ordered[0])

    new_id = (id_factory or _new_id)()
    assets = rekey(all_assets, new_id)
    participants: list[str] = []
    tags: list[str] = []
    for source in [primary, *ordered]:
        participants.extend(source.participant_ids)
        tags.extend(source.tags)
    descriptions = [
        e.description.strip() for e in ordered if e.description and e.description.strip()
    ]

    merged = primary.model_copy(
        update={
            "id": new_id,
            "timestamp": assets[0].captured_at if assets else ordered[0].timestamp,
            "title": merged_title(ordered, len(assets)),
            "description": DESCRIPTION_SEPARATOR.join(descriptions) or None,
            "assets": assets,
            "participant_ids": list(dict.fromkeys(participants)),
            "tags": list(dict.fromkeys(tags)),
            "location": primary.location or next((e.location for e in ordered if e.location), None),
        }
    )
    logger.debug("Merged %d events into %s", len(events), new_id)
    return ok([merged])


# --------------------------------------------------------------------------- #
# Move
# --------------------------------------------------------------------------- #


def move_assets(
    asset_ids: Sequence[str],
    source: TimelineEvent,
    target: TimelineEvent,
) -> EditResult:
    """Move assets from ``source`` to ``target``.

    Returns ``[source', target']`` with key assets re-selected and both
    timestamps re-anchored to their earliest asset.
    """
    selected = set(asset_ids)
    if not selected:
        return _fail(EditErrorCode.NOTHING_SELECTED, "No assets selected to move")
    if source.id == target.id:
        return _fail(EditErrorCode.SAME_EVENT, "Source and target are the same event")
    missing = selected - set(source.asset_ids())
    if missing:
        return _fail(
            EditErrorCode.ASSET_NOT_FOUND,
            f"Assets not in source event: {', '.join(sorted(missing))}",
        )
    if len(selected) >= len(source.assets):
        return _fail(EditErrorCode.WOULD_EMPTY_SOURCE, "Moving every asset would empty the source")
    if source.context_id != target.context_id:
        return _fail(EditErrorCode.CONTEXT_MISMATCH, "Source and target are in different contexts")
    clashing = selected & set(target.asset_ids())
    if clashing:
        return _fail(
            EditErrorCode.DUPLICATE_ASSET,
            f"Assets already in target event: {', '.join(sorted(clashing))}",
        )

    kept = rekey([a for a in source.assets if a.id not in selected], source.id)
    moved = [a for a in source.assets if a.id in selected]
    received = rekey([*target.assets, *moved], target.id)

    new_source = source.model_copy(update={"assets": kept, "timestamp": kept[0].captured_at})
    new_target = target.model_copy(
        update={"assets": received, "timestamp": received[0].captured_at}
    )
    logger.debug("Moved %d assets from %s to %s", len(moved), source.id, target.id)
    return ok([new_source, new_target])


# --------------------------------------------------------------------------- #
# Key asset
# --------------------------------------------------------------------------- #


def set_key_asset(event: TimelineEvent, asset_id: str) -> EditResult:
    """Make ``asset_id`` the only key asset of ``event``."""
    if asset_id not in event.asset_ids():
        return _fail(EditErrorCode.ASSET_NOT_FOUND, f"Asset {asset_id} is not in event {event.id}")
    return ok([event.model_copy(update={"assets": with_key_flag(event.assets, asset_id)})])


class EventSetEditor:
    """Groups the editing operations around a shared id factory."""

    def __init__(self, id_factory: IdFactory | None = None) -> None:
        self.id_factory = id_factory or _new_id

    def split(self, event: TimelineEvent, groups: Sequence[Sequence[str]]) -> EditResult:
        return split_event(event, groups, id_factory=self.id_factory)

    def merge(self, events: Sequence[TimelineEvent], primary_id: str | None = None) -> EditResult:
        return merge_events(events, primary_id, id_factory=self.id_factory)

    def move(
        self, asset_ids: Sequence[str], source: TimelineEvent, target: TimelineEvent
    ) -> EditResult:
        return move_assets(asset_ids, source, target)

    def set_key(self, event: TimelineEvent, asset_id: str) -> EditResult:
        return set_key_asset(event, asset_id)


__all__ = [
    "DESCRIPTION_SEPARATOR",
    "EditResult",
    "EventSetEditor",
    "merge_events",
    "merged_title",
    "move_assets",
    "set_key_asset",
    "split_event",
]

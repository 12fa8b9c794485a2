"""Event filtering and participant queries.

Filtering here is purely about what the viewer asked to see (context, dates,
kinds of events). Privacy has already been applied before events reach the
core.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from enum import Enum

from lifeline.core.calendar import window_bound
from lifeline.core.contracts.timeline import TimelineEvent


class EventTypeFilter(str, Enum):
    ALL = "all"
    PHOTOS = "photos"
    MILESTONES = "milestones"
    TEXT = "text"


def _matches_type(event: TimelineEvent, kind: EventTypeFilter) -> bool:
    if kind is EventTypeFilter.ALL:
        return True
    if kind is EventTypeFilter.PHOTOS:
        return event.has_media
    if kind is EventTypeFilter.MILESTONES:
        return event.event_type.lower() == "milestone"
    return not event.has_media and bool(event.description or event.title)


def filter_events(
    events: Sequence[TimelineEvent],
    context_id: str | None = None,
    start: date | datetime | None = None,
    end: date | datetime | None = None,
    event_type: EventTypeFilter = EventTypeFilter.ALL,
) -> list[TimelineEvent]:
    """Return events matching every given criterion, in timestamp order.

    Date bounds are inclusive; a ``date`` end covers its whole day.
    """
    out: list[TimelineEvent] = []
    for event in sorted(events, key=lambda e: (e.timestamp, e.id)):
        if context_id is not None and event.context_id != context_id:
            continue
        if start is not None and event.timestamp < window_bound(start, end=False):
            continue
        if end is not None and event.timestamp > window_bound(end, end=True):
            continue
        if not _matches_type(event, event_type):
            continue
        out.append(event)
    return out


def all_participant_ids(events: Sequence[TimelineEvent]) -> list[str]:
    """Every owner and participant, in first-seen order."""
    seen: dict[str, None] = {}
    for event in events:
        for person in event.people:
            seen.setdefault(person, None)
    return list(seen)


def events_for_person(events: Sequence[TimelineEvent], person_id: str) -> list[TimelineEvent]:
    return [e for e in events if person_id in e.people]


def shared_events(
    events: Sequence[TimelineEvent], person_ids: Sequence[str]
) -> list[TimelineEvent]:
    """Events where at least two of ``person_ids`` are present."""
    wanted = set(person_ids)
    return [e for e in events if len(wanted.intersection(e.people)) >= 2]


__all__ = [
    "EventTypeFilter",
    "all_participant_ids",
    "events_for_person",
    "filter_events",
    "shared_events",
]

"""Calendar bucketing helpers shared by tier aggregation and bubbles.

Keys and labels are built from integer date fields and ISO week numbers so
bucketing never depends on the process locale.

Keys by tier::

    year   -> "2024"
    month  -> "2024-01"
    week   -> "2024-W03"   (ISO year and week)
    day    -> "2024-01-05"
    focus  -> same as day
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from lifeline.core.contracts.base import to_utc_naive
from lifeline.core.contracts.nodes import ZoomTier

MONTH_ABBREVIATIONS: tuple[str, ...] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def bucket_key(ts: datetime, tier: ZoomTier) -> str:
    """Return the calendar bucket key of ``ts`` at ``tier``."""
    if tier is ZoomTier.YEAR:
        return f"{ts.year:04d}"
    if tier is ZoomTier.MONTH:
        return f"{ts.year:04d}-{ts.month:02d}"
    if tier is ZoomTier.WEEK:
        iso_year, iso_week, _ = ts.date().isocalendar()
        return f"{iso_year:04d}-W{iso_week:02d}"
    return f"{ts.year:04d}-{ts.month:02d}-{ts.day:02d}"


def bucket_bounds(ts: datetime, tier: ZoomTier) -> tuple[datetime, datetime]:
    """Return the first and last day of the bucket, both at midnight.

    The timezone of ``ts`` is kept so bounds compare cleanly with event times.
    """
    day = ts.date()
    if tier is ZoomTier.YEAR:
        first, last = date(day.year, 1, 1), date(day.year, 12, 31)
    elif tier is ZoomTier.MONTH:
        first = date(day.year, day.month, 1)
        if day.month == 12:
            following = date(day.year + 1, 1, 1)
        else:
            following = date(day.year, day.month + 1, 1)
        last = following - timedelta(days=1)
    elif tier is ZoomTier.WEEK:
        iso_year, iso_week, _ = day.isocalendar()
        first = date.fromisocalendar(iso_year, iso_week, 1)
        last = first + timedelta(days=6)
    else:
        first = last = day
    return (
        datetime.combine(first, time(), tzinfo=ts.tzinfo),
        datetime.combine(last, time(), tzinfo=ts.tzinfo),
    )


def bucket_label(ts: datetime, tier: ZoomTier) -> str:
    """Return a short human label for the bucket containing ``ts``."""
    month = MONTH_ABBREVIATIONS[ts.month - 1]
    if tier is ZoomTier.YEAR:
        return str(ts.year)
    if tier is ZoomTier.MONTH:
        return f"{month} {ts.year}"
    if tier is ZoomTier.WEEK:
        iso_year, iso_week, _ = ts.date().isocalendar()
        return f"Week {iso_week}, {iso_year}"
    return f"{month} {ts.day}, {ts.year}"


def as_datetime(value: date | datetime) -> datetime:
    """Promote a ``date`` to midnight and express a ``datetime`` as naive UTC."""
    if isinstance(value, datetime):
        return to_utc_naive(value)
    return datetime.combine(value, time())


def window_bound(value: date | datetime, *, end: bool) -> datetime:
    """Inclusive query bound; a bare ``date`` as the upper bound covers its whole day."""
    if isinstance(value, datetime):
        return to_utc_naive(value)
    return datetime.combine(value, time.max if end else time())


def elapsed_days(ts: datetime, origin: date | datetime) -> int:
    """Whole days from ``origin`` to ``ts`` (negative when ``ts`` is earlier)."""
    return (to_utc_naive(ts) - as_datetime(origin)).days


__all__ = [
    "MONTH_ABBREVIATIONS",
    "bucket_key",
    "bucket_bounds",
    "bucket_label",
    "as_datetime",
    "window_bound",
    "elapsed_days",
]

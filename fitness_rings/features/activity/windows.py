"""Resolve calendar days into bounded query windows.

Midnights are built with calendar arithmetic in the local timezone, never by
adding 86400 seconds, so days that cross a daylight saving transition come
out 23 or 25 hours long.  ``tz=None`` means the system's local time.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo

from fitness_rings.core.exceptions import ValidationError
from fitness_rings.core.providers.health.types import DayWindow


def local_now(tz: tzinfo | None = None) -> datetime:
    """Return the current instant as an aware datetime in ``tz``."""

    if tz is None:
        return datetime.now().astimezone()
    return datetime.now(tz)


def local_today(tz: tzinfo | None = None) -> date:
    return local_now(tz).date()


def local_midnight(day: date, tz: tzinfo | None = None) -> datetime:
    """Return the first instant of ``day`` on the local calendar."""

    naive = datetime.combine(day, time.min)
    if tz is None:
        return naive.astimezone()
    return naive.replace(tzinfo=tz)


def _to_local(instant: datetime, tz: tzinfo | None) -> datetime:
    if instant.tzinfo is None:
        raise ValidationError("Reference instant must be timezone aware", field="now")
    if tz is None:
        return instant.astimezone()
    return instant.astimezone(tz)


def build_day_window(day: date, *, now: datetime, tz: tzinfo | None = None) -> DayWindow:
    """Return the window summed for ``day``.

    Today's window ends at ``now`` ("so far today"); earlier days run to the
    following midnight.  Future days are rejected.
    """

    today = _to_local(now, tz).date()
    if day > today:
        raise ValidationError(f"Cannot build a window for future day {day.isoformat()}", field="day")

    start = local_midnight(day, tz)
    if day == today:
        return DayWindow(start=start, end=now)
    return DayWindow(start=start, end=local_midnight(day + timedelta(days=1), tz))


__all__ = ["build_day_window", "local_midnight", "local_now", "local_today"]

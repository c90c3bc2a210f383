"""Local-time resolution for family timezones.

Every date bucket in the insights core goes through this module: a
completion at 22:00 UTC belongs to *tomorrow* in Nairobi and to *today*
in Los Angeles, and comparing raw UTC dates misclassifies it.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from choreinsights.core.exceptions import InvalidTimezoneError

DAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@lru_cache(maxsize=128)
def resolve_timezone(name: str | None) -> ZoneInfo:
    """Return the ``ZoneInfo`` for an IANA name.

    Raises:
        InvalidTimezoneError: for empty, malformed or unknown names. There
            is never a silent fallback to UTC.
    """
    if not name:
        raise InvalidTimezoneError(name)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        # OSError covers names that are tz database directories ("America")
        raise InvalidTimezoneError(name) from exc


def as_utc(timestamp: datetime | str) -> datetime:
    """Coerce an ISO string or datetime into an aware UTC datetime.

    Naive datetimes are taken to already be UTC (SQLite drops the offset).
    """
    if isinstance(timestamp, str):
        timestamp = datetime.fromisoformat(timestamp)
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def local_datetime(timestamp: datetime | str, tz_name: str) -> datetime:
    return as_utc(timestamp).astimezone(resolve_timezone(tz_name))


def local_date(timestamp: datetime | str, tz_name: str) -> date:
    """Calendar date of *timestamp* as seen on a wall clock in *tz_name*."""
    return local_datetime(timestamp, tz_name).date()


def local_hour(timestamp: datetime | str, tz_name: str) -> int:
    """Hour of day (0-23) of *timestamp* in *tz_name*."""
    return local_datetime(timestamp, tz_name).hour


def week_start_sunday(day: date) -> date:
    """Most recent Sunday on or before *day*."""
    return day - timedelta(days=days_since_sunday(day))


def days_since_sunday(day: date) -> int:
    """0 for Sunday .. 6 for Saturday."""
    # date.weekday(): Mon=0 .. Sun=6
    return (day.weekday() + 1) % 7

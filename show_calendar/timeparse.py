"""Parsing of schedule values.

The ``scheduled_time`` field arrives in two shapes: a bare clock time such
as ``"18:30"`` or ``"18:30:00"``, or a full ISO-8601 timestamp. Anything of
at most eight characters containing a colon is read as a clock time.
"""

from __future__ import annotations

from datetime import datetime, time, tzinfo
from typing import NamedTuple, Optional

from dateutil.parser import isoparse

BARE_TIME_MAX_LENGTH = 8


class TimeOfDay(NamedTuple):
    hour: int
    minute: int

    def as_time(self) -> time:
        return time(self.hour, self.minute)


MIDNIGHT = TimeOfDay(0, 0)


def localize(dt: datetime, tz: tzinfo) -> datetime:
    """Read naive datetimes as ``tz`` local time, convert aware ones to ``tz``."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def is_bare_time(value: str) -> bool:
    return ":" in value and len(value) <= BARE_TIME_MAX_LENGTH


def _parse_bare_time(value: str) -> Optional[TimeOfDay]:
    parts = value.split(":")
    try:
        hour = int(parts[0])
        minute = int(parts[1])
    except (IndexError, ValueError):
        return None
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return TimeOfDay(hour, minute)


def parse_timestamp(value: object) -> Optional[datetime]:
    """Parse an absolute ISO-8601 timestamp or date, ``None`` otherwise."""
    if not isinstance(value, str) or not value.strip():
        return None
    value = value.strip()
    if is_bare_time(value):
        return None
    try:
        return isoparse(value)
    except (ValueError, OverflowError):
        return None


def parse_time_of_day(value: object, tz: Optional[tzinfo] = None) -> Optional[TimeOfDay]:
    """Return the hour and minute encoded in ``value``.

    Aware timestamps are converted to ``tz`` first when it is given. Returns
    ``None`` instead of raising for anything unreadable.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    value = value.strip()
    if is_bare_time(value):
        return _parse_bare_time(value)
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    if tz is not None:
        parsed = localize(parsed, tz)
    return TimeOfDay(parsed.hour, parsed.minute)

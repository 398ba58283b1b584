"""Weekday numbering.

The backend stores ``day_of_week`` as 0=Monday .. 6=Sunday, the same scheme
as :meth:`datetime.date.weekday`. Calendar grids number 0=Sunday .. 6=Saturday.
Every conversion between the two goes through this module.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from .errors import InvalidDayIndex
from .models import RecurrenceKind, RecurrenceRule

BACKEND_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
CALENDAR_DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

CALENDAR_WEEKDAYS = frozenset({1, 2, 3, 4, 5})
CALENDAR_WEEKEND = frozenset({0, 6})


def _check(day: object) -> int:
    if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
        raise InvalidDayIndex(day)
    return day


def to_calendar_day(backend_day: int) -> int:
    return (_check(backend_day) + 1) % 7


def to_backend_day(calendar_day: int) -> int:
    return (_check(calendar_day) + 6) % 7


def calendar_weekday(d: date) -> int:
    return to_calendar_day(d.weekday())


def day_name(backend_day: int) -> str:
    return BACKEND_DAY_NAMES[_check(backend_day)]


def rule_matches(rule: RecurrenceRule, calendar_dow: int) -> bool:
    """Test one calendar weekday against ``rule``.

    Raises :class:`InvalidDayIndex` when a ``SPECIFIC_DAY`` rule carries a
    bad anchor day.
    """
    if rule.kind is RecurrenceKind.DAILY:
        return True
    if rule.kind is RecurrenceKind.WEEKDAYS:
        return calendar_dow in CALENDAR_WEEKDAYS
    if rule.kind is RecurrenceKind.WEEKENDS:
        return calendar_dow in CALENDAR_WEEKEND
    if rule.kind is RecurrenceKind.SPECIFIC_DAY:
        return calendar_dow == to_calendar_day(rule.anchor_day)
    return False


def describe_rule(rule: Optional[RecurrenceRule]) -> str:
    if rule is None:
        return "Recurring"
    if rule.kind is RecurrenceKind.DAILY:
        return "Daily"
    if rule.kind is RecurrenceKind.WEEKDAYS:
        return "Weekdays"
    if rule.kind is RecurrenceKind.WEEKENDS:
        return "Weekends"
    try:
        return day_name(rule.anchor_day)
    except InvalidDayIndex:
        return "Recurring"

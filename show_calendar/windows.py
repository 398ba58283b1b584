"""Projection windows for the calendar views.

Every constructor takes the reference day explicitly. Weeks start on Sunday.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo

from dateutil.relativedelta import relativedelta

from .days import calendar_weekday
from .models import Window

DEFAULT_ROLLING_DAYS = 28
VIEWS = ("month", "grid", "week", "day", "rolling")


def between(start: date, end: date, tz: tzinfo) -> Window:
    """Window from midnight of ``start`` to midnight of ``end`` in ``tz``."""
    return Window(datetime.combine(start, time(), tz), datetime.combine(end, time(), tz))


def day_window(day: date, tz: tzinfo) -> Window:
    return between(day, day + timedelta(days=1), tz)


def week_start(day: date) -> date:
    return day - timedelta(days=calendar_weekday(day))


def week_window(day: date, tz: tzinfo) -> Window:
    first = week_start(day)
    return between(first, first + timedelta(days=7), tz)


def month_window(day: date, tz: tzinfo) -> Window:
    first = day.replace(day=1)
    return between(first, first + relativedelta(months=1), tz)


def month_grid_window(day: date, tz: tzinfo) -> Window:
    """Whole weeks covering the month of ``day``, as a month grid shows them."""
    first = day.replace(day=1)
    last = first + relativedelta(months=1) - timedelta(days=1)
    grid_end = last + timedelta(days=7 - calendar_weekday(last))
    return between(week_start(first), grid_end, tz)


def rolling_window(today: date, tz: tzinfo, days: int = DEFAULT_ROLLING_DAYS) -> Window:
    if days < 1:
        raise ValueError(f"rolling window needs at least one day, got {days}")
    return between(today, today + timedelta(days=days), tz)


def for_view(view: str, day: date, tz: tzinfo, days: int = DEFAULT_ROLLING_DAYS) -> Window:
    if view == "month":
        return month_window(day, tz)
    if view == "grid":
        return month_grid_window(day, tz)
    if view == "week":
        return week_window(day, tz)
    if view == "day":
        return day_window(day, tz)
    if view == "rolling":
        return rolling_window(day, tz, days)
    raise ValueError(f"unknown view {view!r}, expected one of {', '.join(VIEWS)}")


def shift(view: str, day: date, step: int) -> date:
    """Reference day ``step`` pages away from ``day`` in ``view``."""
    if view in ("month", "grid"):
        return day + relativedelta(months=step)
    if view == "week":
        return day + timedelta(days=7 * step)
    if view == "day":
        return day + timedelta(days=step)
    if view == "rolling":
        return day + timedelta(days=DEFAULT_ROLLING_DAYS * step)
    raise ValueError(f"unknown view {view!r}, expected one of {', '.join(VIEWS)}")

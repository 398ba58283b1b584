"""Project a single show or event onto concrete calendar days."""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Callable, List, Optional

from . import days
from .errors import InvalidDayIndex, MalformedEntity, ProjectionError, UnparsableTimeOfDay
from .models import Diagnostic, Occurrence, RecurrenceKind, SchedulableEntity, Window
from .timeparse import MIDNIGHT, TimeOfDay, localize, parse_time_of_day, parse_timestamp

DiagnosticCallback = Callable[[Diagnostic], None]


def report(
    entity: SchedulableEntity,
    error: ProjectionError,
    on_diagnostic: Optional[DiagnosticCallback],
) -> None:
    diagnostic = Diagnostic(entity.id, entity.entity_type, error)
    logging.warning("Schedule problem with %s", diagnostic)
    if on_diagnostic is not None:
        on_diagnostic(diagnostic)


def _occurrence(entity: SchedulableEntity, when: datetime) -> Occurrence:
    return Occurrence(
        entity_id=entity.id,
        entity_type=entity.entity_type,
        concrete_datetime=when,
        display_metadata=entity.display_metadata,
    )


def _project_one_off(
    entity: SchedulableEntity,
    window: Window,
    tz: tzinfo,
    on_diagnostic: Optional[DiagnosticCallback],
) -> List[Occurrence]:
    when = parse_timestamp(entity.anchor_schedule)
    if when is None:
        report(
            entity,
            MalformedEntity(
                f"one-off schedule needs an absolute timestamp, got {entity.anchor_schedule!r}"
            ),
            on_diagnostic,
        )
        return []
    when = localize(when, tz)
    if not window.contains(when, tz):
        return []
    return [_occurrence(entity, when)]


def _time_of_day(
    entity: SchedulableEntity,
    tz: tzinfo,
    on_diagnostic: Optional[DiagnosticCallback],
) -> TimeOfDay:
    if not entity.anchor_schedule:
        logging.debug("%s %s has no scheduled time, using midnight", entity.entity_type.value, entity.id)
        return MIDNIGHT
    parsed = parse_time_of_day(entity.anchor_schedule, tz)
    if parsed is None:
        report(entity, UnparsableTimeOfDay(entity.anchor_schedule), on_diagnostic)
        return MIDNIGHT
    return parsed


def project(
    entity: SchedulableEntity,
    window: Window,
    *,
    tz: tzinfo,
    on_diagnostic: Optional[DiagnosticCallback] = None,
) -> List[Occurrence]:
    """Return the occurrences of ``entity`` inside ``window``, in date order.

    Problems with the entity never raise; they are logged and passed to
    ``on_diagnostic`` and the entity yields fewer (or no) occurrences.
    """
    if not entity.is_recurring:
        return _project_one_off(entity, window, tz, on_diagnostic)

    rule = entity.recurrence_rule
    if rule is None:
        report(entity, MalformedEntity("recurring entity has no recurrence rule"), on_diagnostic)
        return []
    if not isinstance(rule.kind, RecurrenceKind):
        report(entity, MalformedEntity(f"unknown recurrence kind {rule.kind!r}"), on_diagnostic)
        return []
    if rule.kind is RecurrenceKind.SPECIFIC_DAY:
        if rule.anchor_day is None:
            report(entity, MalformedEntity("SPECIFIC_DAY rule has no day of week"), on_diagnostic)
            return []
        try:
            days.to_calendar_day(rule.anchor_day)
        except InvalidDayIndex as exc:
            report(entity, exc, on_diagnostic)
            return []

    clock = _time_of_day(entity, tz, on_diagnostic).as_time()
    occurrences: List[Occurrence] = []
    for d in window.days(tz):
        if days.rule_matches(rule, days.calendar_weekday(d)):
            occurrences.append(_occurrence(entity, datetime.combine(d, clock, tz)))
    return occurrences

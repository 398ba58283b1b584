import logging
from datetime import date, datetime, timezone

import pytest

from show_calendar import windows
from show_calendar.errors import InvalidDayIndex
from show_calendar.models import EntityType, RecurrenceKind, RecurrenceRule, SchedulableEntity
from show_calendar.service import (
    DiagnosticLog,
    ProjectionCache,
    dedupe,
    project_all,
    sort_occurrences,
)

UTC = timezone.utc
WEEK = windows.between(date(2024, 6, 3), date(2024, 6, 10), UTC)


def make_entity(**overrides):
    base = {
        "id": 1,
        "entity_type": EntityType.SHOW,
        "is_recurring": True,
        "recurrence_rule": RecurrenceRule(RecurrenceKind.DAILY),
        "anchor_schedule": "18:30",
    }
    base.update(overrides)
    return SchedulableEntity(**base)


def one_off(entity_id, when, entity_type=EntityType.EVENT):
    return make_entity(
        id=entity_id,
        entity_type=entity_type,
        is_recurring=False,
        recurrence_rule=None,
        anchor_schedule=when,
    )


def test_merges_recurring_and_one_off_in_time_order():
    entities = [
        make_entity(id=1, recurrence_rule=RecurrenceRule(RecurrenceKind.SPECIFIC_DAY, 2)),
        one_off(7, "2024-06-04T12:00:00Z"),
        one_off(8, "2024-07-04T12:00:00Z"),
    ]
    result = project_all(entities, WEEK, tz=UTC)
    assert [(o.entity_type, o.entity_id, o.concrete_datetime) for o in result] == [
        (EntityType.EVENT, 7, datetime(2024, 6, 4, 12, 0, tzinfo=UTC)),
        (EntityType.SHOW, 1, datetime(2024, 6, 5, 18, 30, tzinfo=UTC)),
    ]


def test_same_entity_listed_twice_appears_once_per_day():
    first = make_entity(anchor_schedule="18:30")
    second = make_entity(anchor_schedule="20:00")
    result = project_all([first, second, first], WEEK, tz=UTC)
    assert len(result) == 7
    assert len({o.day for o in result}) == 7
    # the first entry in the input wins
    assert {o.concrete_datetime.hour for o in result} == {18}


def test_one_off_and_recurring_copies_of_same_entity_deduplicate():
    recurring = make_entity(id=3, entity_type=EntityType.EVENT)
    single = one_off(3, "2024-06-05T09:00:00Z")
    result = project_all([recurring, single], WEEK, tz=UTC)
    assert len([o for o in result if o.day == date(2024, 6, 5)]) == 1


def test_same_id_different_type_are_distinct():
    show = make_entity(id=5, entity_type=EntityType.SHOW)
    event = make_entity(id=5, entity_type=EntityType.EVENT)
    result = project_all([show, event], WEEK, tz=UTC)
    assert len(result) == 14


def test_ties_are_broken_by_type_then_id():
    entities = [
        make_entity(id=10, entity_type=EntityType.SHOW),
        make_entity(id=2, entity_type=EntityType.SHOW),
        make_entity(id=99, entity_type=EntityType.EVENT),
    ]
    window = windows.day_window(date(2024, 6, 3), UTC)
    result = project_all(entities, window, tz=UTC)
    assert [(o.entity_type, o.entity_id) for o in result] == [
        (EntityType.EVENT, 99),
        (EntityType.SHOW, 2),
        (EntityType.SHOW, 10),
    ]


def test_mixed_id_types_sort_without_error():
    entities = [make_entity(id="abc"), make_entity(id=4)]
    window = windows.day_window(date(2024, 6, 3), UTC)
    assert [o.entity_id for o in project_all(entities, window, tz=UTC)] == [4, "abc"]


def test_type_filter():
    entities = [make_entity(id=1), make_entity(id=2, entity_type=EntityType.EVENT)]
    shows = project_all(entities, WEEK, EntityType.SHOW, tz=UTC)
    events = project_all(entities, WEEK, EntityType.EVENT, tz=UTC)
    assert {o.entity_type for o in shows} == {EntityType.SHOW}
    assert {o.entity_type for o in events} == {EntityType.EVENT}


def test_repeated_calls_return_equal_lists():
    entities = [
        make_entity(id=1, recurrence_rule=RecurrenceRule(RecurrenceKind.WEEKDAYS)),
        make_entity(id=2, recurrence_rule=RecurrenceRule(RecurrenceKind.WEEKENDS)),
        one_off(3, "2024-06-06T10:00:00Z"),
    ]
    assert project_all(entities, WEEK, tz=UTC) == project_all(entities, WEEK, tz=UTC)


def test_bad_entity_does_not_block_the_batch(caplog):
    log = DiagnosticLog()
    entities = [
        make_entity(id=1, recurrence_rule=RecurrenceRule(RecurrenceKind.SPECIFIC_DAY, 9)),
        make_entity(id=2),
        make_entity(id=3, recurrence_rule=None),
    ]
    with caplog.at_level(logging.WARNING):
        result = project_all(entities, WEEK, tz=UTC, on_diagnostic=log)
    assert {o.entity_id for o in result} == {2}
    assert log.skipped_ids() == [(EntityType.SHOW, 1), (EntityType.SHOW, 3)]
    assert isinstance(log[0].error, InvalidDayIndex)
    assert "show 1" in caplog.text


def test_no_past_filtering_inside_the_window():
    result = project_all([one_off(1, "2024-06-03T00:30:00Z")], WEEK, tz=UTC)
    assert len(result) == 1


def test_dedupe_and_sort_helpers():
    entities = [make_entity(id=2), make_entity(id=1)]
    window = windows.day_window(date(2024, 6, 3), UTC)
    raw = []
    for entity in entities + entities:
        raw.extend(project_all([entity], window, tz=UTC))
    assert len(raw) == 4
    assert [o.entity_id for o in sort_occurrences(dedupe(raw))] == [1, 2]


def test_cache_reuses_results_per_version():
    cache = ProjectionCache()
    entities = [make_entity()]
    first = cache.get(entities, WEEK, version=1, tz=UTC)
    second = cache.get(entities, WEEK, version=1, tz=UTC)
    assert first == second
    assert (cache.hits, cache.misses) == (1, 1)

    cache.get(entities, WEEK, version=2, tz=UTC)
    cache.get(entities, WEEK, version=2, type_filter=EntityType.EVENT, tz=UTC)
    assert cache.misses == 3
    assert len(cache) == 3


def test_cache_returns_copies_and_evicts_oldest():
    cache = ProjectionCache(maxsize=1)
    entities = [make_entity()]
    result = cache.get(entities, WEEK, version=1, tz=UTC)
    result.clear()
    assert len(cache.get(entities, WEEK, version=1, tz=UTC)) == 7

    cache.get(entities, WEEK, version=2, tz=UTC)
    assert len(cache) == 1
    cache.get(entities, WEEK, version=1, tz=UTC)
    assert cache.misses == 3

    cache.clear()
    assert len(cache) == 0


def test_cache_rejects_zero_size():
    with pytest.raises(ValueError):
        ProjectionCache(maxsize=0)


def test_cache_hit_replays_diagnostics():
    cache = ProjectionCache()
    entities = [
        make_entity(id=1, recurrence_rule=RecurrenceRule(RecurrenceKind.SPECIFIC_DAY, 9)),
        make_entity(id=2),
    ]
    first_log = DiagnosticLog()
    second_log = DiagnosticLog()
    cache.get(entities, WEEK, version=1, tz=UTC, on_diagnostic=first_log)
    result = cache.get(entities, WEEK, version=1, tz=UTC, on_diagnostic=second_log)
    assert cache.hits == 1
    assert len(result) == 7
    assert first_log.skipped_ids() == [(EntityType.SHOW, 1)]
    assert second_log.skipped_ids() == [(EntityType.SHOW, 1)]
    assert isinstance(second_log[0].error, InvalidDayIndex)

"""Turn show and event records from the REST API into schedulable entities."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional

from .errors import MalformedEntity
from .models import Diagnostic, EntityType, RecurrenceKind, RecurrenceRule, SchedulableEntity
from .projector import DiagnosticCallback

# events created before scheduled_time existed only carry their start
EVENT_ANCHOR_FIELDS = ("start_datetime", "start_date")


def _rule(record: Mapping[str, Any]) -> Optional[RecurrenceRule]:
    raw_kind = record.get("recurrence_type")
    try:
        kind = RecurrenceKind(raw_kind)
    except ValueError:
        if raw_kind:
            logging.debug("Unknown recurrence_type %r on record %s", raw_kind, record.get("id"))
        return None
    anchor_day = record.get("day_of_week") if kind is RecurrenceKind.SPECIFIC_DAY else None
    return RecurrenceRule(kind, anchor_day)


def _anchor(record: Mapping[str, Any], entity_type: EntityType, is_recurring: bool) -> Optional[str]:
    candidates = []
    if entity_type is EntityType.SHOW or is_recurring:
        candidates.append("scheduled_time")
    if entity_type is EntityType.EVENT:
        candidates.extend(EVENT_ANCHOR_FIELDS)
    for name in candidates:
        value = record.get(name)
        if value:
            return value
    return None


def entity_from_record(record: Mapping[str, Any], entity_type: EntityType) -> SchedulableEntity:
    if record.get("id") is None:
        raise MalformedEntity(f"{entity_type.value} record has no id")
    is_recurring = bool(record.get("is_recurring"))
    return SchedulableEntity(
        id=record["id"],
        entity_type=entity_type,
        is_recurring=is_recurring,
        recurrence_rule=_rule(record) if is_recurring else None,
        anchor_schedule=_anchor(record, entity_type, is_recurring),
        display_metadata=dict(record),
    )


def entities_from_records(
    records: Iterable[Mapping[str, Any]],
    entity_type: EntityType,
    on_diagnostic: Optional[DiagnosticCallback] = None,
) -> List[SchedulableEntity]:
    entities: List[SchedulableEntity] = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            error = MalformedEntity(f"expected a JSON object, got {type(record).__name__}")
            diagnostic = Diagnostic(f"#{index}", entity_type, error)
        else:
            try:
                entities.append(entity_from_record(record, entity_type))
                continue
            except MalformedEntity as exc:
                diagnostic = Diagnostic(f"#{index}", entity_type, exc)
        logging.warning("Ignoring %s", diagnostic)
        if on_diagnostic is not None:
            on_diagnostic(diagnostic)
    return entities

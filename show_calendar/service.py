"""Project a whole collection of shows and events into one calendar."""

from __future__ import annotations

import logging
from collections import OrderedDict
from datetime import tzinfo
from typing import Hashable, Iterable, List, Optional, Sequence, Tuple

from .models import Diagnostic, EntityType, Occurrence, SchedulableEntity, Window
from .projector import DiagnosticCallback, project


def _id_key(entity_id: Hashable) -> Tuple[int, object]:
    if isinstance(entity_id, int) and not isinstance(entity_id, bool):
        return (0, entity_id)
    return (1, str(entity_id))


def sort_key(occ: Occurrence) -> Tuple[object, ...]:
    return (occ.concrete_datetime, occ.entity_type.value, _id_key(occ.entity_id))


def sort_occurrences(occurrences: Iterable[Occurrence]) -> List[Occurrence]:
    return sorted(occurrences, key=sort_key)


def dedupe(occurrences: Iterable[Occurrence]) -> List[Occurrence]:
    """Keep the first occurrence per entity and calendar day."""
    seen = set()
    kept: List[Occurrence] = []
    for occ in occurrences:
        if occ.key in seen:
            continue
        seen.add(occ.key)
        kept.append(occ)
    return kept


def project_all(
    entities: Iterable[SchedulableEntity],
    window: Window,
    type_filter: Optional[EntityType] = None,
    *,
    tz: tzinfo,
    on_diagnostic: Optional[DiagnosticCallback] = None,
) -> List[Occurrence]:
    """Merge the occurrences of ``entities`` inside ``window``.

    The result holds at most one occurrence per entity per calendar day and
    is ordered by time, then entity type, then id. Malformed entities are
    reported through ``on_diagnostic`` and otherwise ignored.
    """
    merged: List[Occurrence] = []
    count = 0
    for entity in entities:
        if type_filter is not None and entity.entity_type is not type_filter:
            continue
        count += 1
        merged.extend(project(entity, window, tz=tz, on_diagnostic=on_diagnostic))
    result = sort_occurrences(dedupe(merged))
    logging.debug(
        "Projected %d entities onto %d occurrences (%d before dedupe)",
        count,
        len(result),
        len(merged),
    )
    return result


class DiagnosticLog(list):
    """Collects diagnostics when passed as ``on_diagnostic``."""

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.append(diagnostic)

    def skipped_ids(self) -> List[Tuple[Optional[EntityType], Hashable]]:
        return [(d.entity_type, d.entity_id) for d in self]


def _replay(diagnostics: DiagnosticLog, on_diagnostic: Optional[DiagnosticCallback]) -> None:
    if on_diagnostic is not None:
        for diagnostic in diagnostics:
            on_diagnostic(diagnostic)


class ProjectionCache:
    """Memoize :func:`project_all` results per entity list version.

    ``version`` is whatever the caller bumps when its entity list changes,
    for example a fetch counter or a response ETag. Diagnostics from the
    first projection are kept with the entry and replayed on every hit.
    """

    def __init__(self, maxsize: int = 32) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self.maxsize = maxsize
        self._entries: "OrderedDict[Tuple[object, ...], Tuple[List[Occurrence], DiagnosticLog]]" = (
            OrderedDict()
        )
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(
        self,
        entities: Sequence[SchedulableEntity],
        window: Window,
        version: Hashable,
        type_filter: Optional[EntityType] = None,
        *,
        tz: tzinfo,
        on_diagnostic: Optional[DiagnosticCallback] = None,
    ) -> List[Occurrence]:
        key = (version, window.start, window.end, type_filter, str(tz))
        if key in self._entries:
            self.hits += 1
            self._entries.move_to_end(key)
            result, diagnostics = self._entries[key]
            _replay(diagnostics, on_diagnostic)
            return list(result)
        self.misses += 1
        diagnostics = DiagnosticLog()
        result = project_all(entities, window, type_filter, tz=tz, on_diagnostic=diagnostics)
        _replay(diagnostics, on_diagnostic)
        self._entries[key] = (result, diagnostics)
        if len(self._entries) > self.maxsize:
            self._entries.popitem(last=False)
        return list(result)

    def clear(self) -> None:
        self._entries.clear()

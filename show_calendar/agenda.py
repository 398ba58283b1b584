"""Helpers for code that lays projected occurrences out on a calendar."""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

from .models import Occurrence


def group_by_day(occurrences: Iterable[Occurrence]) -> Dict[date, List[Occurrence]]:
    grouped: Dict[date, List[Occurrence]] = {}
    for occ in occurrences:
        grouped.setdefault(occ.day, []).append(occ)
    return grouped


def occurrences_on(occurrences: Iterable[Occurrence], day: date) -> List[Occurrence]:
    return [occ for occ in occurrences if occ.day == day]


def title(occ: Occurrence) -> str:
    return str(occ.display_metadata.get("title") or "")


def owner_name(occ: Occurrence) -> str:
    # shows carry a creator, events an organizer
    meta = occ.display_metadata
    person = meta.get("creator") or meta.get("organizer") or {}
    if isinstance(person, dict):
        return str(person.get("username") or "")
    return ""


def search(occurrences: Iterable[Occurrence], query: Optional[str]) -> List[Occurrence]:
    """Keep occurrences whose title or creator name contains ``query``."""
    occurrences = list(occurrences)
    if not query:
        return occurrences
    needle = query.lower()
    return [
        occ
        for occ in occurrences
        if needle in title(occ).lower() or needle in owner_name(occ).lower()
    ]


def upcoming(
    occurrences: Iterable[Occurrence], now: datetime, limit: Optional[int] = None
) -> List[Occurrence]:
    kept = [occ for occ in occurrences if occ.concrete_datetime >= now]
    kept.sort(key=lambda occ: occ.concrete_datetime)
    if limit is not None:
        kept = kept[:limit]
    return kept

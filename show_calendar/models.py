"""Data models for schedulable shows and events."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Dict, Hashable, Iterator, Optional, Tuple

from .errors import ProjectionError
from .timeparse import localize


class EntityType(str, enum.Enum):
    SHOW = "show"
    EVENT = "event"


class RecurrenceKind(str, enum.Enum):
    DAILY = "DAILY"
    WEEKDAYS = "WEEKDAYS"
    WEEKENDS = "WEEKENDS"
    SPECIFIC_DAY = "SPECIFIC_DAY"


@dataclass(frozen=True)
class RecurrenceRule:
    kind: RecurrenceKind
    anchor_day: Optional[int] = None  # backend convention, 0=Monday

    def __post_init__(self) -> None:
        # unknown kinds are kept as given so projection can report them
        if not isinstance(self.kind, RecurrenceKind):
            try:
                object.__setattr__(self, "kind", RecurrenceKind(self.kind))
            except ValueError:
                pass


@dataclass(frozen=True)
class SchedulableEntity:
    id: Hashable
    entity_type: EntityType
    is_recurring: bool
    recurrence_rule: Optional[RecurrenceRule] = None
    anchor_schedule: Optional[str] = None
    display_metadata: Dict[str, Any] = field(
        default_factory=dict, compare=False, hash=False
    )


@dataclass(frozen=True)
class Occurrence:
    entity_id: Hashable
    entity_type: EntityType
    concrete_datetime: datetime
    display_metadata: Dict[str, Any] = field(
        default_factory=dict, compare=False, hash=False, repr=False
    )

    @property
    def day(self) -> date:
        return self.concrete_datetime.date()

    @property
    def key(self) -> Tuple[Hashable, EntityType, date]:
        return (self.entity_id, self.entity_type, self.day)


@dataclass(frozen=True)
class Window:
    """Half-open ``[start, end)`` range of datetimes.

    Naive bounds are read in whatever timezone the projection runs in.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start.tzinfo is None and self.end.tzinfo is not None:
            raise ValueError("window bounds must both be naive or both be aware")
        if self.start.tzinfo is not None and self.end.tzinfo is None:
            raise ValueError("window bounds must both be naive or both be aware")
        if self.end < self.start:
            raise ValueError(f"window ends before it starts: {self.start} > {self.end}")

    def days(self, tz: tzinfo) -> Iterator[date]:
        """Yield every calendar day whose midnight falls before ``end``."""
        end = localize(self.end, tz)
        cur = localize(self.start, tz).date()
        while datetime.combine(cur, time(), tz) < end:
            yield cur
            cur += timedelta(days=1)

    def contains(self, dt: datetime, tz: tzinfo) -> bool:
        local = localize(dt, tz)
        first_day = localize(self.start, tz).date()
        return first_day <= local.date() and local < localize(self.end, tz)


@dataclass(frozen=True)
class Diagnostic:
    entity_id: Hashable
    entity_type: Optional[EntityType]
    error: ProjectionError

    def __str__(self) -> str:
        kind = self.entity_type.value if self.entity_type else "record"
        return f"{kind} {self.entity_id}: {self.error}"

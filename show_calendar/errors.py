"""Error types raised or reported by the projection engine."""

from __future__ import annotations


class ProjectionError(Exception):
    """Base class for problems with a single entity."""


class InvalidDayIndex(ProjectionError, ValueError):
    def __init__(self, value: object) -> None:
        super().__init__(f"day index must be an integer in 0..6, got {value!r}")
        self.value = value


class UnparsableTimeOfDay(ProjectionError, ValueError):
    def __init__(self, value: object) -> None:
        super().__init__(f"cannot read a time of day from {value!r}")
        self.value = value


class MalformedEntity(ProjectionError):
    pass


class FetchError(RuntimeError):
    """The data source could not deliver shows or events."""

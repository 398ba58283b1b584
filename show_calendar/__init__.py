"""Recurrence projection for shows and events."""

from .models import (
    Diagnostic,
    EntityType,
    Occurrence,
    RecurrenceKind,
    RecurrenceRule,
    SchedulableEntity,
    Window,
)
from .projector import project
from .service import DiagnosticLog, ProjectionCache, project_all

__all__ = [
    "Diagnostic",
    "DiagnosticLog",
    "EntityType",
    "Occurrence",
    "ProjectionCache",
    "RecurrenceKind",
    "RecurrenceRule",
    "SchedulableEntity",
    "Window",
    "project",
    "project_all",
]

"""Domain models for the month calendar."""

from __future__ import annotations

from .enums import EventDuration, MutationState
from .errors import (
    AuthenticationError,
    GrassrootsError,
    MalformedTimestamp,
    PersistenceError,
    SubmissionInProgress,
    ValidationError,
)
from .models import CalendarDay, Event, GridCell, MonthView, NewEvent, UserProfile

__all__ = [
    "AuthenticationError",
    "CalendarDay",
    "Event",
    "EventDuration",
    "GrassrootsError",
    "GridCell",
    "MalformedTimestamp",
    "MonthView",
    "MutationState",
    "NewEvent",
    "PersistenceError",
    "SubmissionInProgress",
    "UserProfile",
    "ValidationError",
]

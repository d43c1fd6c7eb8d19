from __future__ import annotations

from typing import Optional


class GrassrootsError(Exception):
    """Base class for errors surfaced to callers of the calendar services."""


class ValidationError(GrassrootsError):
    """Raised when user input is rejected before any store call is made."""


class SubmissionInProgress(ValidationError):
    """Raised when a mutation is attempted while another one is still running."""


class PersistenceError(GrassrootsError):
    """Raised when the event store could not complete an operation."""


class MalformedTimestamp(GrassrootsError, ValueError):
    """Raised when a stored event timestamp is not ``YYYY-MM-DDTHH:MM:SS``."""

    def __init__(self, value: object, *, event_id: Optional[str] = None) -> None:
        self.value = value
        self.event_id = event_id
        label = f"event {event_id}" if event_id else "event"
        super().__init__(f"Malformed timestamp on {label}: {value!r}")


class AuthenticationError(GrassrootsError):
    """Raised when sign-in or sign-up is rejected by the auth provider."""

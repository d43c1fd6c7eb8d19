from __future__ import annotations

from enum import Enum


class MutationState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"
    RELOADING = "reloading"


class EventDuration(str, Enum):
    FULL_DAY = "full-day"
    HALF_DAY = "half-day"

    @property
    def label(self) -> str:
        return "All Day" if self is EventDuration.FULL_DAY else "Half Day"

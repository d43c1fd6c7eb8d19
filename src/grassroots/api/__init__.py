"""Request/response models and the process-wide service state."""

from __future__ import annotations

from .state import ApiState, api_state

__all__ = ["ApiState", "api_state"]

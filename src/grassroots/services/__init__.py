"""Application services orchestrating data access and domain logic."""

from __future__ import annotations

from .auth import AuthService
from .calendar import CalendarService
from .context import ServiceContext
from .profiles import ProfileService

__all__ = ["AuthService", "CalendarService", "ProfileService", "ServiceContext"]

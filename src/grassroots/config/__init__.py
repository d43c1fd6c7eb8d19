"""Configuration models and helpers."""

from __future__ import annotations

from .settings import (
    DEFAULT_EVENT_COLOR,
    AppSettings,
    StorageSettings,
    SupabaseSettings,
    UiSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "DEFAULT_EVENT_COLOR",
    "StorageSettings",
    "SupabaseSettings",
    "UiSettings",
    "get_settings",
]

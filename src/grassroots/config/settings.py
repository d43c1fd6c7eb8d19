from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_EVENT_COLOR = "#3B82F6"


@dataclass(frozen=True)
class SupabaseSettings:
    url: Optional[str]
    anon_key: Optional[str]

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.anon_key)

    @property
    def missing_env_vars(self) -> list[str]:
        missing = []
        if not self.url:
            missing.append("SUPABASE_URL")
        if not self.anon_key:
            missing.append("SUPABASE_ANON_KEY")
        return missing


@dataclass(frozen=True)
class StorageSettings:
    events_table: str
    profiles_table: str


@dataclass(frozen=True)
class UiSettings:
    app_name: str
    default_color: str
    max_visible_events: int


@dataclass(frozen=True)
class AppSettings:
    supabase: SupabaseSettings
    storage: StorageSettings
    ui: UiSettings


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    supabase = SupabaseSettings(
        url=os.getenv("SUPABASE_URL"),
        anon_key=os.getenv("SUPABASE_ANON_KEY"),
    )

    storage = StorageSettings(
        events_table=os.getenv("SUPABASE_EVENTS_TABLE", "events"),
        profiles_table=os.getenv("SUPABASE_PROFILES_TABLE", "user_profiles"),
    )

    ui = UiSettings(
        app_name=os.getenv("GRASSROOTS_APP_NAME", "Grassroots Calendar"),
        default_color=os.getenv("GRASSROOTS_DEFAULT_COLOR", DEFAULT_EVENT_COLOR),
        max_visible_events=_int_from_env("GRASSROOTS_MAX_VISIBLE_EVENTS", 3),
    )

    return AppSettings(supabase=supabase, storage=storage, ui=ui)

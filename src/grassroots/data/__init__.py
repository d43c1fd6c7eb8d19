"""Data access layer."""

from __future__ import annotations

from .supabase import SupabaseGateway, SupabaseNotInitializedError, SupabaseSessionMissingError

__all__ = [
    "SupabaseGateway",
    "SupabaseNotInitializedError",
    "SupabaseSessionMissingError",
]

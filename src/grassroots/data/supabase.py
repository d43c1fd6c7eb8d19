from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from supabase import Client, create_client

from ..config.settings import SupabaseSettings

logger = logging.getLogger(__name__)


class SupabaseNotInitializedError(RuntimeError):
    """Raised when accessing the Supabase client before it can be created."""


class SupabaseSessionMissingError(RuntimeError):
    """Raised when a user-scoped action is attempted without a signed-in session."""


@dataclass
class SupabaseGateway:
    """Owns the Supabase client and the signed-in session for one user."""

    settings: SupabaseSettings
    _client: Optional[Client] = None
    _session: Optional[Any] = None

    def ensure_client(self) -> Client:
        if self._client is not None:
            return self._client
        if not self.settings.is_configured:
            missing = ", ".join(self.settings.missing_env_vars)
            raise SupabaseNotInitializedError(f"Supabase settings are incomplete; missing {missing}.")
        self._client = create_client(self.settings.url, self.settings.anon_key)
        logger.debug("Supabase client created for %s", self.settings.url)
        return self._client

    def attach_client(self, client: Client) -> None:
        self._client = client

    def set_session(self, session: Any) -> None:
        self._session = session

    def clear_session(self) -> None:
        self._session = None

    def session(self) -> Any:
        if self._session is None:
            raise SupabaseSessionMissingError("No user is signed in.")
        return self._session

    def has_session(self) -> bool:
        return self._session is not None

    def current_user(self) -> Any:
        user = getattr(self.session(), "user", None)
        if user is None:
            raise SupabaseSessionMissingError("Active session has no user.")
        return user

    def current_user_id(self) -> str:
        identifier = getattr(self.current_user(), "id", None)
        if not identifier:
            raise SupabaseSessionMissingError("Active session has no user id.")
        return str(identifier)

    def current_user_email(self) -> str:
        return str(getattr(self.current_user(), "email", None) or "")

    def table(self, name: str):
        return self.ensure_client().table(name)

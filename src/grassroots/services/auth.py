from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from httpx import HTTPError
from supabase import AuthError

from ..domain import AuthenticationError
from .calendar import CalendarService
from .context import ServiceContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AuthService:
    """Sign-in state transitions; reloads the calendar on login and clears it on logout."""

    context: ServiceContext
    calendar: CalendarService

    def _client(self):
        return self.context.gateway.ensure_client()

    def sign_in(self, email: str, password: str) -> Dict[str, str]:
        try:
            response = self._client().auth.sign_in_with_password({"email": email, "password": password})
        except (AuthError, HTTPError) as exc:
            logger.warning("Sign-in failed for %s: %s", email, exc)
            raise AuthenticationError(str(exc) or "Sign-in failed.") from exc
        session = getattr(response, "session", None)
        if session is None:
            raise AuthenticationError("Sign-in did not return a session.")
        self._start_session(session)
        return self.current_user()

    def sign_up(self, email: str, password: str) -> Optional[Dict[str, str]]:
        """Register a new account; signs in right away when no email confirmation is pending."""
        try:
            response = self._client().auth.sign_up({"email": email, "password": password})
        except (AuthError, HTTPError) as exc:
            logger.warning("Sign-up failed for %s: %s", email, exc)
            raise AuthenticationError(str(exc) or "Sign-up failed.") from exc
        session = getattr(response, "session", None)
        if session is None:
            logger.info("Sign-up for %s awaiting email confirmation", email)
            return None
        self._start_session(session)
        return self.current_user()

    def set_session(self, session: Any) -> None:
        self._start_session(session)

    def sign_out(self) -> None:
        try:
            if self.context.gateway.has_session():
                self._client().auth.sign_out()
        finally:
            self.context.gateway.clear_session()
            self.calendar.clear()
            logger.info("Signed out; calendar cleared")

    def is_signed_in(self) -> bool:
        return self.context.gateway.has_session()

    def current_user(self) -> Dict[str, str]:
        gateway = self.context.gateway
        return {"id": gateway.current_user_id(), "email": gateway.current_user_email()}

    def _start_session(self, session: Any) -> None:
        self.context.gateway.set_session(session)
        logger.info("Session started for user %s", self.context.gateway.current_user_id())
        try:
            self.calendar.reload()
        except Exception:
            logger.exception("Initial calendar load failed; dropping session")
            self.context.gateway.clear_session()
            self.calendar.clear()
            raise

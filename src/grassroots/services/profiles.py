from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..domain import PersistenceError, UserProfile, ValidationError
from .context import ServiceContext

logger = logging.getLogger(__name__)

_COLOR_RE = re.compile(r"#[0-9A-Fa-f]{6}")


@dataclass(slots=True)
class ProfileService:
    context: ServiceContext

    def load(self) -> UserProfile:
        """Fetch the signed-in user's profile, creating one with defaults on first use."""
        gateway = self.context.gateway
        user_id = gateway.current_user_id()
        profile = self.context.profiles.fetch(user_id)
        if profile is not None:
            return profile

        logger.info("No profile found for user %s, creating one", user_id)
        default = UserProfile(
            id=user_id,
            email=gateway.current_user_email(),
            first_name="User",
            username=f"user{int(time.time() * 1000)}",
            color=self.context.settings.ui.default_color,
        )
        created = self.context.profiles.create(default)
        if created is None:
            raise PersistenceError("Failed to create profile.")
        return created

    def update(self, *, first_name: str, username: str, color: str) -> UserProfile:
        first_name = first_name.strip()
        username = username.strip()
        if not first_name:
            raise ValidationError("First name is required.")
        if not username:
            raise ValidationError("Username is required.")
        if not _COLOR_RE.fullmatch(color):
            raise ValidationError(f"Color must be a hex value like #3B82F6, got {color!r}.")

        gateway = self.context.gateway
        user_id = gateway.current_user_id()
        updated_at = datetime.now(timezone.utc).isoformat()
        changes = {"first_name": first_name, "username": username, "color": color, "updated_at": updated_at}
        if not self.context.profiles.update(user_id, changes):
            raise PersistenceError("Failed to update profile.")
        return UserProfile(
            id=user_id,
            email=gateway.current_user_email(),
            first_name=first_name,
            username=username,
            color=color,
            updated_at=updated_at,
        )

    def display_color(self, profile: Optional[UserProfile] = None) -> str:
        if profile is not None and profile.color:
            return profile.color
        return self.context.settings.ui.default_color

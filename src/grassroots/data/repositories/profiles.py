from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from httpx import HTTPError
from postgrest.exceptions import APIError

from ...domain import UserProfile
from ..supabase import SupabaseGateway

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProfileRepository:
    gateway: SupabaseGateway
    table_name: str

    def fetch(self, user_id: str) -> Optional[UserProfile]:
        try:
            response = self.gateway.table(self.table_name).select("*").eq("id", user_id).limit(1).execute()
        except (APIError, HTTPError):
            logger.exception("Error fetching profile for user %s", user_id)
            return None
        rows = response.data or []
        if not rows:
            return None
        return UserProfile.from_record(rows[0])

    def create(self, profile: UserProfile) -> Optional[UserProfile]:
        try:
            response = self.gateway.table(self.table_name).insert(profile.to_record()).execute()
        except (APIError, HTTPError):
            logger.exception("Error creating profile for user %s", profile.id)
            return None
        rows = response.data or []
        return UserProfile.from_record(rows[0]) if rows else profile

    def update(self, user_id: str, changes: Dict[str, Any]) -> bool:
        try:
            self.gateway.table(self.table_name).update(changes).eq("id", user_id).execute()
        except (APIError, HTTPError):
            logger.exception("Error updating profile for user %s", user_id)
            return False
        return True

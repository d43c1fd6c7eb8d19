from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from httpx import HTTPError
from postgrest.exceptions import APIError

from ...domain import Event
from ..supabase import SupabaseGateway

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EventRepository:
    """Remote CRUD on the ``events`` table.

    Remote failures never raise out of this class: reads degrade to an empty
    list, writes to ``None``/``False``, and the failure is logged.
    """

    gateway: SupabaseGateway
    table_name: str

    def fetch_for_user(self, user_id: str) -> List[Event]:
        try:
            response = (
                self.gateway.table(self.table_name)
                .select("*")
                .eq("user_id", user_id)
                .order("datetime", desc=False)
                .execute()
            )
        except (APIError, HTTPError):
            logger.exception("Error fetching events for user %s", user_id)
            return []
        records = response.data or []
        logger.debug("Fetched %d events for user %s", len(records), user_id)
        return [Event.from_record(record) for record in records]

    def insert(self, user_id: str, name: str, time: str, datetime: str) -> Optional[Event]:
        payload = {"user_id": user_id, "name": name, "time": time, "datetime": datetime}
        try:
            response = self.gateway.table(self.table_name).insert(payload).execute()
        except (APIError, HTTPError):
            logger.exception("Error adding event %r for user %s", name, user_id)
            return None
        rows = response.data or []
        if not rows:
            logger.error("Insert of event %r returned no row", name)
            return None
        event = Event.from_record(rows[0])
        logger.info("Event %s created for user %s", event.id, user_id)
        return event

    def delete(self, event_id: str) -> bool:
        try:
            response = self.gateway.table(self.table_name).delete().eq("id", event_id).execute()
        except (APIError, HTTPError):
            logger.exception("Error deleting event %s", event_id)
            return False
        if not response.data:
            logger.info("Delete of event %s matched no rows", event_id)
        else:
            logger.info("Event %s deleted", event_id)
        return True

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from ..core import MonthCursor, build_month_view, day_of, flatten, group_events
from ..domain import (
    CalendarDay,
    Event,
    EventDuration,
    MalformedTimestamp,
    MonthView,
    MutationState,
    NewEvent,
    PersistenceError,
    SubmissionInProgress,
    ValidationError,
)
from .context import ServiceContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CalendarService:
    """Runs add/delete against the store and mirrors server state by full reload.

    Every successful mutation is followed by a complete fetch and regroup of
    the user's events; nothing is patched locally. Failed mutations leave
    ``days`` exactly as it was.
    """

    context: ServiceContext
    days: List[CalendarDay] = field(default_factory=list)
    state: MutationState = MutationState.IDLE
    cursor: MonthCursor = field(default_factory=MonthCursor.current)
    selected_day: date = field(default_factory=date.today)
    _mutation_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    # ------------------------------------------------------------------ reads

    def reload(self) -> List[CalendarDay]:
        user_id = self.context.gateway.current_user_id()
        events = self.context.events.fetch_for_user(user_id)
        self.days = group_events(events)
        logger.debug("Reloaded %d events across %d days", len(events), len(self.days))
        return self.days

    def clear(self) -> None:
        self.days = []
        self.state = MutationState.IDLE

    def events(self) -> List[Event]:
        return flatten(self.days)

    def events_for_day(self, target_day: date) -> List[Event]:
        for calendar_day in self.days:
            if calendar_day.day == target_day:
                return list(calendar_day.events)
        return []

    def month_view(self, reference: Optional[date] = None, *, today: Optional[date] = None) -> MonthView:
        month = reference or self.cursor.reference
        return build_month_view(month, self.days, today=today, selected=self.selected_day)

    # ------------------------------------------------------------------ navigation

    def show_next_month(self) -> MonthCursor:
        self.cursor = self.cursor.next_month()
        return self.cursor

    def show_previous_month(self) -> MonthCursor:
        self.cursor = self.cursor.previous_month()
        return self.cursor

    def show_today(self, today: Optional[date] = None) -> MonthCursor:
        self.cursor = MonthCursor.current(today)
        return self.cursor

    def select_day(self, day: date) -> None:
        self.selected_day = day

    # ------------------------------------------------------------------ mutations

    @staticmethod
    def compose_event(day: date, name: str, duration: EventDuration = EventDuration.FULL_DAY) -> NewEvent:
        """Build the payload the add-event form submits: noon on ``day``, labelled by duration."""
        return NewEvent(name=name, time=duration.label, datetime=f"{day.isoformat()}T12:00:00")

    def add_event(self, new_event: NewEvent) -> Event:
        name = (new_event.name or "").strip()
        if not name:
            raise ValidationError("Please fill in the event name.")
        try:
            day_of(Event(id="", user_id="", name=name, time=new_event.time, datetime=new_event.datetime))
        except MalformedTimestamp as exc:
            raise ValidationError(f"Event datetime must be a real date shaped YYYY-MM-DDTHH:MM:SS, got {new_event.datetime!r}.") from exc

        if not self._mutation_lock.acquire(blocking=False):
            logger.info("Ignoring add_event for %r: a mutation is already in flight", name)
            raise SubmissionInProgress("An event is already being saved.")
        try:
            self.state = MutationState.SUBMITTING
            user_id = self.context.gateway.current_user_id()
            saved = self.context.events.insert(user_id, name, new_event.time, new_event.datetime)
            if saved is None:
                self.state = MutationState.FAILED
                raise PersistenceError("Failed to add event. Please try again.")
            self.state = MutationState.SUCCESS
            self._reload_after_mutation()
            return saved
        finally:
            self.state = MutationState.IDLE
            self._mutation_lock.release()

    def delete_event(self, event_id: str) -> None:
        if not event_id:
            raise ValidationError("An event id is required.")
        if not self._mutation_lock.acquire(blocking=False):
            logger.info("Ignoring delete_event for %s: a mutation is already in flight", event_id)
            raise SubmissionInProgress("Another change is still being saved.")
        try:
            self.state = MutationState.SUBMITTING
            if not self.context.events.delete(event_id):
                self.state = MutationState.FAILED
                raise PersistenceError("Failed to delete event. Please try again.")
            self.state = MutationState.SUCCESS
            self._reload_after_mutation()
        finally:
            self.state = MutationState.IDLE
            self._mutation_lock.release()

    def _reload_after_mutation(self) -> None:
        self.state = MutationState.RELOADING
        self.reload()

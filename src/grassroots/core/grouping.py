from __future__ import annotations

import re
from datetime import date
from typing import Dict, Iterable, List

from ..domain import CalendarDay, Event, MalformedTimestamp

# Local wall-clock timestamp as written by the add-event form, e.g. 2024-12-21T12:00:00.
_TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?")


def date_key(event: Event) -> str:
    """Return the ``YYYY-MM-DD`` prefix of the event timestamp, without any timezone math."""
    value = event.datetime
    if not isinstance(value, str) or not _TIMESTAMP_RE.fullmatch(value):
        raise MalformedTimestamp(value, event_id=event.id)
    return value[:10]


def _day_from_key(key: str, event: Event) -> date:
    year, month, day = (int(part) for part in key.split("-"))
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise MalformedTimestamp(event.datetime, event_id=event.id) from exc


def day_of(event: Event) -> date:
    """Calendar date the event is bucketed under; the date must exist."""
    return _day_from_key(date_key(event), event)


def group_events(events: Iterable[Event]) -> List[CalendarDay]:
    """Bucket events by calendar date.

    Events keep their input order inside a bucket, and buckets appear in the
    order their date was first seen. Fed with the store's ascending
    ``datetime`` order this yields chronologically sorted days.
    """
    buckets: Dict[date, CalendarDay] = {}
    for event in events:
        day = day_of(event)
        bucket = buckets.get(day)
        if bucket is None:
            bucket = buckets[day] = CalendarDay(day=day)
        bucket.events.append(event)
    return list(buckets.values())


def flatten(days: Iterable[CalendarDay]) -> List[Event]:
    return [event for calendar_day in days for event in calendar_day.events]


def index_by_day(days: Iterable[CalendarDay]) -> Dict[date, CalendarDay]:
    return {calendar_day.day: calendar_day for calendar_day in days}

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain import (
    CalendarDay,
    Event,
    EventDuration,
    GridCell,
    MonthView,
    UserProfile,
)


class EventPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str
    name: str
    time: str
    datetime: str

    @classmethod
    def from_domain(cls, event: Event) -> "EventPayload":
        return cls(id=event.id, user_id=event.user_id, name=event.name, time=event.time, datetime=event.datetime)


class CalendarDayPayload(BaseModel):
    day: date
    events: List[EventPayload] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, calendar_day: CalendarDay) -> "CalendarDayPayload":
        return cls(day=calendar_day.day, events=[EventPayload.from_domain(event) for event in calendar_day.events])


class GridCellPayload(BaseModel):
    day: date
    in_current_month: bool
    is_today: bool
    is_selected: bool
    events: List[EventPayload] = Field(default_factory=list)
    overflow_count: int = 0

    @classmethod
    def from_domain(cls, cell: GridCell, *, limit: int) -> "GridCellPayload":
        return cls(
            day=cell.day,
            in_current_month=cell.in_current_month,
            is_today=cell.is_today,
            is_selected=cell.is_selected,
            events=[EventPayload.from_domain(event) for event in cell.visible_events(limit)],
            overflow_count=cell.overflow_count(limit),
        )


class MonthPayload(BaseModel):
    title: str
    year: int
    month: int
    first_day: date
    last_day: date
    cells: List[GridCellPayload]

    @classmethod
    def from_domain(cls, view: MonthView, *, limit: int) -> "MonthPayload":
        return cls(
            title=view.title,
            year=view.reference.year,
            month=view.reference.month,
            first_day=view.first_day,
            last_day=view.last_day,
            cells=[GridCellPayload.from_domain(cell, limit=limit) for cell in view.cells],
        )


class ProfilePayload(BaseModel):
    id: str
    email: str
    first_name: str
    username: str
    color: str

    @classmethod
    def from_domain(cls, profile: UserProfile) -> "ProfilePayload":
        return cls(
            id=profile.id,
            email=profile.email,
            first_name=profile.first_name,
            username=profile.username,
            color=profile.color,
        )


class CredentialsRequest(BaseModel):
    email: str
    password: str


class UserPayload(BaseModel):
    id: str
    email: str


class SignUpResponse(BaseModel):
    user: Optional[UserPayload] = None
    confirmation_required: bool


class NewEventRequest(BaseModel):
    """Either ``day`` + ``duration`` (as the add-event form sends) or a raw ``datetime`` + ``time``."""

    name: str
    day: Optional[date] = None
    duration: EventDuration = EventDuration.FULL_DAY
    datetime: Optional[str] = None
    time: Optional[str] = None


class SelectDayRequest(BaseModel):
    day: date


class ProfileUpdateRequest(BaseModel):
    first_name: str
    username: str
    color: str

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from ..config.settings import DEFAULT_EVENT_COLOR


@dataclass(slots=True)
class Event:
    id: str
    user_id: str
    name: str
    time: str
    datetime: str

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Event":
        return cls(
            id=str(record["id"]),
            user_id=str(record["user_id"]),
            name=str(record["name"]),
            time=str(record.get("time") or ""),
            datetime=str(record["datetime"]),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "time": self.time,
            "datetime": self.datetime,
        }


@dataclass(frozen=True, slots=True)
class NewEvent:
    """Caller-supplied event fields, before the store assigns an id."""

    name: str
    time: str
    datetime: str


@dataclass(slots=True)
class CalendarDay:
    day: date
    events: List[Event] = field(default_factory=list)


@dataclass(slots=True)
class GridCell:
    day: date
    in_current_month: bool
    is_today: bool
    is_selected: bool = False
    events: List[Event] = field(default_factory=list)

    def visible_events(self, limit: int = 3) -> List[Event]:
        return self.events[:limit]

    def overflow_count(self, limit: int = 3) -> int:
        return max(len(self.events) - limit, 0)


@dataclass(slots=True)
class MonthView:
    reference: date
    first_day: date
    last_day: date
    cells: List[GridCell]

    @property
    def title(self) -> str:
        return self.reference.strftime("%B, %Y")

    @property
    def weeks(self) -> List[List[GridCell]]:
        return [self.cells[index : index + 7] for index in range(0, len(self.cells), 7)]


@dataclass(slots=True)
class UserProfile:
    id: str
    email: str
    first_name: str = "User"
    username: str = ""
    color: str = DEFAULT_EVENT_COLOR
    updated_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "UserProfile":
        return cls(
            id=str(record["id"]),
            email=str(record.get("email") or ""),
            first_name=record.get("first_name") or "User",
            username=record.get("username") or "",
            color=record.get("color") or DEFAULT_EVENT_COLOR,
            updated_at=record.get("updated_at"),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "username": self.username,
            "color": self.color,
        }

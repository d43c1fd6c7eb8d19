from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from dateutil.relativedelta import relativedelta

from ..domain import CalendarDay, GridCell, MonthView
from .grouping import index_by_day

# Weeks always start on Sunday.
_CALENDAR = calendar.Calendar(firstweekday=calendar.SUNDAY)


def first_of_month(reference: date) -> date:
    return reference.replace(day=1)


def last_of_month(reference: date) -> date:
    return reference.replace(day=calendar.monthrange(reference.year, reference.month)[1])


def grid_days(reference: date) -> List[date]:
    """Dates from the Sunday on/before the 1st through the Saturday on/after month end."""
    weeks = _CALENDAR.monthdatescalendar(reference.year, reference.month)
    return [day for week in weeks for day in week]


def month_grid(
    reference: date,
    days: Iterable[CalendarDay] = (),
    *,
    today: Optional[date] = None,
    selected: Optional[date] = None,
) -> List[GridCell]:
    current_day = today or date.today()
    by_day = index_by_day(days)
    cells: list[GridCell] = []
    for day in grid_days(reference):
        bucket = by_day.get(day)
        cells.append(
            GridCell(
                day=day,
                in_current_month=(day.year, day.month) == (reference.year, reference.month),
                is_today=day == current_day,
                is_selected=selected is not None and day == selected,
                events=list(bucket.events) if bucket else [],
            )
        )
    return cells


def build_month_view(
    reference: date,
    days: Iterable[CalendarDay] = (),
    *,
    today: Optional[date] = None,
    selected: Optional[date] = None,
) -> MonthView:
    first_day = first_of_month(reference)
    return MonthView(
        reference=first_day,
        first_day=first_day,
        last_day=last_of_month(reference),
        cells=month_grid(first_day, days, today=today, selected=selected),
    )


@dataclass(frozen=True)
class MonthCursor:
    """The month currently on screen, always pinned to its first day."""

    reference: date

    def __post_init__(self) -> None:
        if self.reference.day != 1:
            object.__setattr__(self, "reference", first_of_month(self.reference))

    @classmethod
    def current(cls, today: Optional[date] = None) -> "MonthCursor":
        return cls(today or date.today())

    def shifted(self, months: int) -> "MonthCursor":
        return MonthCursor(self.reference + relativedelta(months=months))

    def next_month(self) -> "MonthCursor":
        return self.shifted(1)

    def previous_month(self) -> "MonthCursor":
        return self.shifted(-1)

    def same_month(self, other: date) -> bool:
        return (self.reference.year, self.reference.month) == (other.year, other.month)

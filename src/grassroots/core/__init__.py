"""Pure calendar logic: event grouping and month grid generation."""

from .grid import MonthCursor, build_month_view, first_of_month, grid_days, last_of_month, month_grid
from .grouping import date_key, day_of, flatten, group_events, index_by_day

__all__ = [
    "MonthCursor",
    "build_month_view",
    "date_key",
    "day_of",
    "first_of_month",
    "flatten",
    "grid_days",
    "group_events",
    "index_by_day",
    "last_of_month",
    "month_grid",
]

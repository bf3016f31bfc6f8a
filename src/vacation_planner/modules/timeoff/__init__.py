"""Timeoff module."""

from vacation_planner.modules.timeoff.engine import DayClassifier, expand_window, rank_periods, search_periods
from vacation_planner.modules.timeoff.holidays import HolidayIndex, LibraryHolidayProvider, build_holiday_index

__all__ = [
    "DayClassifier",
    "HolidayIndex",
    "LibraryHolidayProvider",
    "build_holiday_index",
    "expand_window",
    "rank_periods",
    "search_periods",
]

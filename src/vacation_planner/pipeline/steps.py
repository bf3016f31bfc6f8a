"""Pipeline step wiring."""

from __future__ import annotations

from typing import List, Optional

from vacation_planner.core.models import RankedPeriod, SearchConfig, SearchOutcome
from vacation_planner.modules.timeoff.engine import DayClassifier, rank_periods, sweep_day_counts
from vacation_planner.modules.timeoff.holidays import HolidayIndex, HolidayProvider, build_holiday_index, normalize_country_input


def run_holidays(config: SearchConfig, provider: Optional[HolidayProvider] = None) -> HolidayIndex:
    country_code, subdivision_code = normalize_country_input(config.country_code, config.subdivision_code)
    year_from, year_to = config.year_span
    return build_holiday_index(country_code, subdivision_code, year_from, year_to, provider)


def run_search(config: SearchConfig, classifier: DayClassifier) -> List[SearchOutcome]:
    return sweep_day_counts(config, classifier)


def run_rank(outcomes: List[SearchOutcome]) -> List[RankedPeriod]:
    return rank_periods(outcomes)

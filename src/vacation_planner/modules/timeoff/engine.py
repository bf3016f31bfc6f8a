"""Vacation period search and ranking engine."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from itertools import groupby
from typing import FrozenSet, Iterable, List, Optional, Sequence

from vacation_planner.core.errors import InvalidConfigurationError
from vacation_planner.core.models import (
    ONE_DAY,
    DateRange,
    DayKind,
    PeriodGroup,
    RankedPeriod,
    SearchConfig,
    SearchOutcome,
    VacationCandidate,
)
from vacation_planner.modules.timeoff.holidays import HolidayIndex

LOG = logging.getLogger(__name__)

WEEKEND_DAYS: FrozenSet[int] = frozenset({5, 6})


class DayClassifier:
    """Workday/weekend/holiday predicates over a fixed holiday index."""

    def __init__(self, index: HolidayIndex, weekend_days: Iterable[int] = WEEKEND_DAYS) -> None:
        self.index = index
        self.weekend_days = frozenset(weekend_days)

    def is_weekend(self, day: date) -> bool:
        return day.weekday() in self.weekend_days

    def is_holiday(self, day: date) -> bool:
        return self.index.is_holiday(day)

    def is_non_workday(self, day: date) -> bool:
        return self.is_weekend(day) or self.is_holiday(day)

    def is_workday(self, day: date) -> bool:
        return not self.is_non_workday(day)

    def kind(self, day: date) -> DayKind:
        if self.is_holiday(day):
            return DayKind.HOLIDAY
        if self.is_weekend(day):
            return DayKind.WEEKEND
        return DayKind.WORKDAY

    def holiday_name(self, day: date) -> Optional[str]:
        return self.index.name_for(day)


def expand_window(
    core_start: date,
    core_end: date,
    classifier: DayClassifier,
    lower_bound: date = date.min,
    upper_bound: date = date.max,
) -> DateRange:
    """Attach the contiguous non-workdays touching ``[core_start, core_end]``.

    The walk stops at the first workday on each side; it never jumps over a
    workday to reach a farther weekend or holiday.
    """
    extended_start = core_start
    while extended_start > lower_bound and classifier.is_non_workday(extended_start - ONE_DAY):
        extended_start -= ONE_DAY

    extended_end = core_end
    while extended_end < upper_bound and classifier.is_non_workday(extended_end + ONE_DAY):
        extended_end += ONE_DAY

    return DateRange(extended_start, extended_end)


def has_overlap(window: DateRange, existing_periods: Iterable[DateRange], min_gap: int = 0) -> bool:
    buffered = window.buffered(min_gap)
    return any(buffered.overlaps(period) for period in existing_periods)


def search_periods(
    horizon: DateRange,
    day_count: int,
    classifier: DayClassifier,
    existing_periods: Iterable[DateRange] = (),
    min_gap: int = 0,
) -> SearchOutcome:
    """Collect every admissible ``day_count`` vacation starting inside ``horizon``.

    Candidates start on a workday and their core block must end within the
    horizon. A candidate whose extended window, widened by ``min_gap`` days on
    each side, touches one of ``existing_periods`` is rejected. An empty
    outcome (``found`` is false) means the horizon admits no placement.
    """
    if day_count < 1:
        raise InvalidConfigurationError(f"day_count must be >= 1, got {day_count}")
    existing = tuple(existing_periods)
    span = timedelta(days=day_count - 1)
    candidates: List[VacationCandidate] = []

    for day in horizon.iter_days():
        if not classifier.is_workday(day):
            continue
        core_end = day + span
        if core_end > horizon.end:
            break
        extended = expand_window(day, core_end, classifier)
        if existing and has_overlap(extended, existing, min_gap):
            continue
        candidates.append(
            VacationCandidate(
                core_start=day,
                core_end=core_end,
                extended_start=extended.start,
                extended_end=extended.end,
                day_count=day_count,
            )
        )

    if not candidates:
        LOG.debug("No candidate for %d vacation days in %s..%s", day_count, horizon.start, horizon.end)
    return SearchOutcome(day_count=day_count, horizon_start=horizon.start, candidates=tuple(candidates))


def sweep_day_counts(config: SearchConfig, classifier: DayClassifier) -> List[SearchOutcome]:
    outcomes: List[SearchOutcome] = []
    horizon = config.horizon
    for day_count in config.day_counts:
        outcome = search_periods(
            horizon,
            day_count,
            classifier,
            existing_periods=(),
            min_gap=config.min_gap_between_periods,
        )
        if not outcome.found:
            LOG.info("No valid periods found for %d vacation days", day_count)
        outcomes.append(outcome)
    return outcomes


def rank_periods(outcomes: Iterable[SearchOutcome]) -> List[RankedPeriod]:
    ranked: List[RankedPeriod] = []
    for outcome in outcomes:
        if not outcome.found:
            continue
        for candidate in outcome.candidates:
            total_days_off = (candidate.extended_end - candidate.extended_start).days + 1
            extra_days = total_days_off - candidate.day_count
            if extra_days <= 0:
                continue
            ranked.append(RankedPeriod(candidate=candidate, extra_days=extra_days))
    ranked.sort(key=lambda period: (-period.extra_days, period.core_start))
    return ranked


def group_by_extra_days(periods: Sequence[RankedPeriod]) -> List[PeriodGroup]:
    return [
        PeriodGroup(extra_days=extra_days, periods=tuple(items))
        for extra_days, items in groupby(periods, key=lambda period: period.extra_days)
    ]

"""Shared domain models for the vacation planner."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

if TYPE_CHECKING:
    from vacation_planner.modules.timeoff.holidays import HolidayIndex

ONE_DAY = timedelta(days=1)


def calendar_day(value: date) -> date:
    """Drop the time of day from ``datetime`` instants."""
    if isinstance(value, datetime):
        return value.date()
    return value


class DayKind(Enum):
    WORKDAY = "WORK"
    WEEKEND = "WEEKEND"
    HOLIDAY = "HOLIDAY"


class DayRole(Enum):
    CORE = "CORE"
    BONUS = "BONUS"
    PLAIN = "PLAIN"


@dataclass(frozen=True, order=True)
class Holiday:
    date: date
    name: str


@dataclass(frozen=True)
class HolidaySpan:
    """A provider entry covering ``[start, end)``."""

    start: date
    end: date
    name: str

    def iter_days(self) -> Iterator[date]:
        day = calendar_day(self.start)
        end = calendar_day(self.end)
        while day < end:
            yield day
            day += ONE_DAY


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"DateRange end {self.end} is before start {self.start}")

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def overlaps(self, other: "DateRange") -> bool:
        return self.start <= other.end and self.end >= other.start

    def buffered(self, gap: int) -> "DateRange":
        delta = timedelta(days=gap)
        return DateRange(self.start - delta, self.end + delta)

    def iter_days(self) -> Iterator[date]:
        day = self.start
        while day <= self.end:
            yield day
            day += ONE_DAY


@dataclass(frozen=True)
class SearchConfig:
    country_code: str
    horizon_start: date
    horizon_end: date
    min_days: int = 5
    max_days: int = 30
    subdivision_code: Optional[str] = None
    min_gap_between_periods: int = 0

    @property
    def horizon(self) -> DateRange:
        return DateRange(self.horizon_start, self.horizon_end)

    @property
    def day_counts(self) -> range:
        return range(self.min_days, self.max_days + 1)

    @property
    def year_span(self) -> Tuple[int, int]:
        return self.horizon_start.year, self.horizon_end.year


@dataclass(frozen=True)
class VacationCandidate:
    """A block of ``day_count`` vacation days and the days off around it."""

    core_start: date
    core_end: date
    extended_start: date
    extended_end: date
    day_count: int

    def __post_init__(self) -> None:
        if not (self.extended_start <= self.core_start <= self.core_end <= self.extended_end):
            raise ValueError("extended window must contain the core window")
        if (self.core_end - self.core_start).days + 1 != self.day_count:
            raise ValueError("core window length does not match day_count")

    @property
    def core(self) -> DateRange:
        return DateRange(self.core_start, self.core_end)

    @property
    def extended(self) -> DateRange:
        return DateRange(self.extended_start, self.extended_end)

    @property
    def total_days_off(self) -> int:
        return (self.extended_end - self.extended_start).days + 1

    @property
    def extra_days(self) -> int:
        return self.total_days_off - self.day_count


@dataclass(frozen=True)
class RankedPeriod:
    candidate: VacationCandidate
    extra_days: int

    @property
    def core_start(self) -> date:
        return self.candidate.core_start

    @property
    def core_end(self) -> date:
        return self.candidate.core_end

    @property
    def extended_start(self) -> date:
        return self.candidate.extended_start

    @property
    def extended_end(self) -> date:
        return self.candidate.extended_end

    @property
    def extended(self) -> DateRange:
        return self.candidate.extended

    @property
    def day_count(self) -> int:
        return self.candidate.day_count

    @property
    def total_days_off(self) -> int:
        return self.candidate.total_days_off


@dataclass(frozen=True)
class SearchOutcome:
    """Result of scanning the horizon for one vacation-day count."""

    day_count: int
    horizon_start: date
    candidates: Tuple[VacationCandidate, ...] = ()

    @property
    def found(self) -> bool:
        return bool(self.candidates)

    def ordered(self) -> List[VacationCandidate]:
        return sorted(
            self.candidates,
            key=lambda c: (-c.total_days_off, abs((c.core_start - self.horizon_start).days)),
        )


@dataclass(frozen=True)
class CalendarDay:
    date: date
    role: DayRole
    kind: DayKind
    holiday_name: Optional[str] = None


@dataclass(frozen=True)
class PeriodGroup:
    extra_days: int
    periods: Tuple[RankedPeriod, ...]


@dataclass
class RecommendationResult:
    config: SearchConfig
    periods: List[RankedPeriod]
    groups: List[PeriodGroup] = field(default_factory=list)
    skipped_day_counts: List[int] = field(default_factory=list)
    index: Optional[HolidayIndex] = None

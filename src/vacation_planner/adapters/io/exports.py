"""Export helpers for recommendation results."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from vacation_planner.core.models import (
    CalendarDay,
    DayKind,
    DayRole,
    PeriodGroup,
    RankedPeriod,
    RecommendationResult,
    VacationCandidate,
)
from vacation_planner.core.normalization import build_meta, format_display_date
from vacation_planner.modules.timeoff.engine import DayClassifier
from vacation_planner.modules.timeoff.holidays import HolidayIndex

Period = Union[RankedPeriod, VacationCandidate]


def calendar_days(period: Period, classifier: DayClassifier) -> List[CalendarDay]:
    days: List[CalendarDay] = []
    for day in period.extended.iter_days():
        kind = classifier.kind(day)
        if period.core_start <= day <= period.core_end:
            role = DayRole.CORE
        elif kind != DayKind.WORKDAY:
            role = DayRole.BONUS
        else:
            role = DayRole.PLAIN
        days.append(CalendarDay(date=day, role=role, kind=kind, holiday_name=classifier.holiday_name(day)))
    return days


def format_period(period: RankedPeriod) -> str:
    return (
        f"{format_display_date(period.core_start)} - {format_display_date(period.core_end)}: "
        f"{period.day_count} vacation days, {period.extra_days} extra days, "
        f"{period.total_days_off} total "
        f"({format_display_date(period.extended_start)} - {format_display_date(period.extended_end)})"
    )


def _serialize_day(day: CalendarDay) -> Dict[str, Any]:
    return {
        "date": day.date.isoformat(),
        "role": day.role.value,
        "kind": day.kind.value,
        "holiday_name": day.holiday_name,
    }


def serialize_period(period: RankedPeriod, classifier: Optional[DayClassifier] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "core_start": period.core_start.isoformat(),
        "core_end": period.core_end.isoformat(),
        "extended_start": period.extended_start.isoformat(),
        "extended_end": period.extended_end.isoformat(),
        "day_count": period.day_count,
        "extra_days": period.extra_days,
        "total_days": period.total_days_off,
    }
    if classifier is not None:
        payload["calendar"] = [_serialize_day(day) for day in calendar_days(period, classifier)]
    return payload


def _serialize_group(group: PeriodGroup) -> Dict[str, Any]:
    return {
        "extra_days": group.extra_days,
        "count": len(group.periods),
        "core_starts": [period.core_start.isoformat() for period in group.periods],
    }


def serialize_result(result: RecommendationResult, include_calendar: bool = True) -> Dict[str, Any]:
    config = result.config
    index = result.index if result.index is not None else HolidayIndex()
    classifier = DayClassifier(index) if include_calendar else None
    return {
        "config": {
            "country_code": config.country_code,
            "subdivision_code": config.subdivision_code,
            "horizon_start": config.horizon_start.isoformat(),
            "horizon_end": config.horizon_end.isoformat(),
            "min_days": config.min_days,
            "max_days": config.max_days,
        },
        "periods": [serialize_period(period, classifier) for period in result.periods],
        "groups": [_serialize_group(group) for group in result.groups],
        "skipped_day_counts": list(result.skipped_day_counts),
        "holidays": [
            {"date": holiday.date.isoformat(), "name": holiday.name}
            for holiday in index
            if config.horizon_start <= holiday.date <= config.horizon_end
        ],
        "meta": build_meta(),
    }

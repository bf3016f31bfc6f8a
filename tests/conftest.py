from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

import pytest

from vacation_planner.core.models import HolidaySpan
from vacation_planner.modules.timeoff.holidays import clear_index_cache


class FakeProvider:
    """In-memory provider knowing a single country, ``XX``."""

    def __init__(self, spans_by_year: Optional[Dict[int, List[HolidaySpan]]] = None) -> None:
        self.spans_by_year = spans_by_year or {}
        self.calls: List[Tuple[str, int, Optional[str]]] = []

    def get_holidays(self, country_code: str, year: int, subdivision: Optional[str] = None) -> List[HolidaySpan]:
        self.calls.append((country_code, year, subdivision))
        if country_code != "XX":
            return []
        return list(self.spans_by_year.get(year, []))

    def get_countries(self) -> Dict[str, str]:
        return {"XX": "Testland"}

    def get_subdivisions(self, country_code: str) -> Dict[str, str]:
        if country_code != "XX":
            return {}
        return {"N": "North", "S": "South"}


class BrokenProvider(FakeProvider):
    def get_holidays(self, country_code: str, year: int, subdivision: Optional[str] = None) -> List[HolidaySpan]:
        raise RuntimeError("calendar backend unavailable")


def single_day(day: date, name: str) -> HolidaySpan:
    return HolidaySpan(start=day, end=day + timedelta(days=1), name=name)


@pytest.fixture(autouse=True)
def _clear_index_cache():
    clear_index_cache()
    yield
    clear_index_cache()


@pytest.fixture
def new_year_provider() -> FakeProvider:
    return FakeProvider({2025: [single_day(date(2025, 1, 1), "New Year's Day")]})

"""Holiday provider and holiday index for vacation searches."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from functools import lru_cache
from typing import Dict, Iterable, Iterator, List, Optional, Protocol, Tuple

import holidays
import pycountry

from vacation_planner.core.errors import InvalidConfigurationError, ProviderError
from vacation_planner.core.models import Holiday, HolidaySpan, calendar_day

LOG = logging.getLogger(__name__)

_COUNTRY_ALIASES = {
    "BURMA": "MM",
    "CAPE VERDE": "CV",
    "CONGO (BRAZZAVILLE)": "CG",
    "CONGO (KINSHASA)": "CD",
    "EAST TIMOR": "TL",
    "MACAU": "MO",
    "SWAZILAND": "SZ",
    "TURKEY": "TR",
}


def _lookup(database, **kwargs):
    try:
        return database.get(**kwargs)
    except LookupError:
        return None


def _resolve_country_code(country_code: str) -> str:
    if not country_code:
        raise InvalidConfigurationError("country_code is required")
    raw = country_code.strip()
    if not raw:
        raise InvalidConfigurationError("country_code is required")
    alias = _COUNTRY_ALIASES.get(raw.upper())
    if alias:
        return alias
    upper = raw.upper()
    if len(upper) == 2 and upper.isalpha():
        return upper
    if len(upper) == 3 and upper.isalpha():
        match = _lookup(pycountry.countries, alpha_3=upper)
        if match:
            return match.alpha_2
    match = _lookup(pycountry.countries, name=raw)
    if not match:
        try:
            match = pycountry.countries.search_fuzzy(raw)[0]
        except LookupError:
            match = None
    if match:
        return match.alpha_2
    return upper


def normalize_country_input(
    country_code: str,
    subdiv: Optional[str] = None,
) -> Tuple[str, Optional[str]]:
    if not country_code:
        raise InvalidConfigurationError("country_code is required")
    raw = country_code.strip()
    if not raw:
        raise InvalidConfigurationError("country_code is required")
    normalized_subdiv = subdiv.strip().upper() if subdiv else None
    if not normalized_subdiv:
        for sep in ("-", "_"):
            if sep in raw:
                prefix, suffix = raw.split(sep, 1)
                prefix = prefix.strip()
                suffix = suffix.strip()
                if prefix and suffix:
                    raw = prefix
                    normalized_subdiv = suffix.upper()
                break
    return _resolve_country_code(raw), normalized_subdiv


class HolidayProvider(Protocol):
    def get_holidays(self, country_code: str, year: int, subdivision: Optional[str] = None) -> List[HolidaySpan]:
        ...

    def get_countries(self) -> Dict[str, str]:
        ...

    def get_subdivisions(self, country_code: str) -> Dict[str, str]:
        ...


class LibraryHolidayProvider:
    """Holiday provider backed by the ``holidays`` package."""

    def __init__(self, observed: bool = True) -> None:
        self.observed = observed

    def get_holidays(self, country_code: str, year: int, subdivision: Optional[str] = None) -> List[HolidaySpan]:
        try:
            holiday_map = holidays.country_holidays(
                country_code,
                subdiv=subdivision,
                years=[year],
                observed=self.observed,
            )
        except NotImplementedError:
            LOG.warning(
                "No holiday calendar for country=%s subdivision=%s; treating every weekday as a workday",
                country_code,
                subdivision,
            )
            return []
        except Exception as exc:
            raise ProviderError(f"Holiday lookup failed for {country_code} {year}") from exc
        return [
            HolidaySpan(start=day, end=day + timedelta(days=1), name=str(name))
            for day, name in sorted(holiday_map.items())
            if day.year == year
        ]

    def get_countries(self) -> Dict[str, str]:
        names: Dict[str, str] = {}
        for code in holidays.list_supported_countries(include_aliases=False):
            match = _lookup(pycountry.countries, alpha_2=code)
            names[code] = match.name if match else code
        return names

    def get_subdivisions(self, country_code: str) -> Dict[str, str]:
        supported = holidays.list_supported_countries(include_aliases=False)
        codes = supported.get(country_code.upper()) or []
        names: Dict[str, str] = {}
        for code in codes:
            match = _lookup(pycountry.subdivisions, code=f"{country_code.upper()}-{code}")
            names[code] = match.name if match else code
        return names


@lru_cache(maxsize=None)
def get_default_provider() -> LibraryHolidayProvider:
    return LibraryHolidayProvider()


class HolidayIndex:
    """Read-only set of holiday dates, with names for display."""

    def __init__(self, entries: Iterable[Holiday] = ()) -> None:
        self._holidays = frozenset(Holiday(date=calendar_day(h.date), name=h.name) for h in entries)
        grouped: Dict[date, List[str]] = {}
        for holiday in self._holidays:
            grouped.setdefault(holiday.date, []).append(holiday.name)
        self._names = {day: "; ".join(sorted(set(names))) for day, names in grouped.items()}

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and calendar_day(day) in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[Holiday]:
        return iter(sorted(self._holidays))

    @property
    def entries(self) -> frozenset:
        return self._holidays

    @property
    def dates(self) -> List[date]:
        return sorted(self._names)

    def is_holiday(self, day: date) -> bool:
        return calendar_day(day) in self._names

    def name_for(self, day: date) -> Optional[str]:
        return self._names.get(calendar_day(day))


def flatten_spans(spans: Iterable[HolidaySpan]) -> Iterator[Holiday]:
    for span in spans:
        for day in span.iter_days():
            yield Holiday(date=day, name=span.name)


class _ProviderKey:
    """Cache key comparing providers by identity, so they need not be hashable."""

    __slots__ = ("provider",)

    def __init__(self, provider: HolidayProvider) -> None:
        self.provider = provider

    def __hash__(self) -> int:
        return id(self.provider)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _ProviderKey) and other.provider is self.provider


def build_holiday_index(
    country_code: str,
    subdivision_code: Optional[str],
    year_from: int,
    year_to: int,
    provider: Optional[HolidayProvider] = None,
) -> HolidayIndex:
    """Holiday dates for a region and year span, memoized per provider instance."""
    key = _ProviderKey(provider or get_default_provider())
    return _cached_index(country_code, subdivision_code, year_from, year_to, key)


def clear_index_cache() -> None:
    _cached_index.cache_clear()


@lru_cache(maxsize=32)
def _cached_index(
    country_code: str,
    subdivision_code: Optional[str],
    year_from: int,
    year_to: int,
    key: _ProviderKey,
) -> HolidayIndex:
    provider = key.provider
    entries: List[Holiday] = []
    for year in range(year_from, year_to + 1):
        entries.extend(flatten_spans(provider.get_holidays(country_code, year, subdivision_code)))
    index = HolidayIndex(entries)
    LOG.debug(
        "Built holiday index for %s/%s %d-%d: %d dates",
        country_code,
        subdivision_code or "-",
        year_from,
        year_to,
        len(index),
    )
    return index

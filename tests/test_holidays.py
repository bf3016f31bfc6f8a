from __future__ import annotations

from datetime import date, datetime

import pytest

from conftest import FakeProvider, single_day
from vacation_planner.core.errors import InvalidConfigurationError
from vacation_planner.core.models import Holiday, HolidaySpan
from vacation_planner.modules.timeoff.holidays import (
    HolidayIndex,
    LibraryHolidayProvider,
    build_holiday_index,
    flatten_spans,
    normalize_country_input,
)


class TestFlattenSpans:
    def test_multi_day_span_is_end_exclusive(self) -> None:
        span = HolidaySpan(start=date(2025, 3, 3), end=date(2025, 3, 5), name="Carnival")
        assert list(flatten_spans([span])) == [
            Holiday(date=date(2025, 3, 3), name="Carnival"),
            Holiday(date=date(2025, 3, 4), name="Carnival"),
        ]

    def test_empty_span_covers_no_day(self) -> None:
        span = HolidaySpan(start=date(2025, 5, 1), end=date(2025, 5, 1), name="Labour Day")
        assert list(flatten_spans([span])) == []

    def test_reversed_span_covers_no_day(self) -> None:
        span = HolidaySpan(start=date(2025, 5, 2), end=date(2025, 5, 1), name="Labour Day")
        assert list(flatten_spans([span])) == []

    def test_instants_are_cut_to_calendar_days(self) -> None:
        span = HolidaySpan(start=datetime(2025, 1, 1, 0, 0), end=datetime(2025, 1, 2, 0, 0), name="New Year")
        holidays = list(flatten_spans([span]))
        assert holidays == [Holiday(date=date(2025, 1, 1), name="New Year")]
        assert type(holidays[0].date) is date


class TestHolidayIndex:
    def test_membership_and_names(self) -> None:
        index = HolidayIndex([Holiday(date=date(2025, 1, 1), name="New Year's Day")])
        assert date(2025, 1, 1) in index
        assert index.is_holiday(date(2025, 1, 1))
        assert not index.is_holiday(date(2025, 1, 2))
        assert index.name_for(date(2025, 1, 1)) == "New Year's Day"
        assert index.name_for(date(2025, 1, 2)) is None

    def test_shared_day_joins_names(self) -> None:
        index = HolidayIndex(
            [
                Holiday(date=date(2025, 4, 21), name="Tiradentes"),
                Holiday(date=date(2025, 4, 21), name="Easter Monday"),
            ]
        )
        assert len(index) == 1
        assert index.name_for(date(2025, 4, 21)) == "Easter Monday; Tiradentes"

    def test_iterates_in_date_order(self) -> None:
        index = HolidayIndex(
            [
                Holiday(date=date(2025, 12, 25), name="Christmas"),
                Holiday(date=date(2025, 1, 1), name="New Year"),
            ]
        )
        assert [h.date for h in index] == [date(2025, 1, 1), date(2025, 12, 25)]
        assert index.dates == [date(2025, 1, 1), date(2025, 12, 25)]

    def test_empty(self) -> None:
        index = HolidayIndex()
        assert len(index) == 0
        assert not index.is_holiday(date(2025, 1, 1))

    def test_lookup_by_instant(self) -> None:
        index = HolidayIndex([Holiday(date=date(2025, 1, 1), name="New Year's Day")])
        assert index.is_holiday(datetime(2025, 1, 1, 9, 30))
        assert datetime(2025, 1, 1, 23, 59) in index
        assert index.name_for(datetime(2025, 1, 1, 12, 0)) == "New Year's Day"
        assert not index.is_holiday(datetime(2025, 1, 2, 0, 0))

    def test_entries_given_as_instants(self) -> None:
        index = HolidayIndex([Holiday(date=datetime(2025, 1, 1, 0, 0), name="New Year's Day")])
        assert index.is_holiday(date(2025, 1, 1))
        assert index.dates == [date(2025, 1, 1)]


class TestBuildHolidayIndex:
    def test_queries_each_year_once(self) -> None:
        provider = FakeProvider(
            {
                2025: [single_day(date(2025, 12, 25), "Christmas")],
                2026: [single_day(date(2026, 1, 1), "New Year")],
            }
        )
        index = build_holiday_index("XX", None, 2025, 2026, provider)
        assert provider.calls == [("XX", 2025, None), ("XX", 2026, None)]
        assert index.dates == [date(2025, 12, 25), date(2026, 1, 1)]

    def test_memoized_per_region_and_span(self) -> None:
        provider = FakeProvider({2025: [single_day(date(2025, 1, 1), "New Year")]})
        first = build_holiday_index("XX", None, 2025, 2025, provider)
        second = build_holiday_index("XX", None, 2025, 2025, provider)
        assert first is second
        assert len(provider.calls) == 1
        build_holiday_index("XX", "N", 2025, 2025, provider)
        assert len(provider.calls) == 2

    def test_multi_day_spans_are_flattened(self) -> None:
        span = HolidaySpan(start=date(2025, 12, 24), end=date(2025, 12, 27), name="Christmas break")
        index = build_holiday_index("XX", None, 2025, 2025, FakeProvider({2025: [span]}))
        assert index.dates == [date(2025, 12, 24), date(2025, 12, 25), date(2025, 12, 26)]

    def test_provider_returning_instants(self) -> None:
        span = HolidaySpan(start=datetime(2025, 1, 1, 0, 0), end=datetime(2025, 1, 2, 0, 0), name="New Year")
        index = build_holiday_index("XX", None, 2025, 2025, FakeProvider({2025: [span]}))
        assert index.is_holiday(date(2025, 1, 1))
        assert not index.is_holiday(date(2025, 1, 2))

    def test_unhashable_provider_is_memoized(self) -> None:
        class UnhashableProvider(FakeProvider):
            __hash__ = None

        provider = UnhashableProvider({2025: [single_day(date(2025, 1, 1), "New Year")]})
        first = build_holiday_index("XX", None, 2025, 2025, provider)
        second = build_holiday_index("XX", None, 2025, 2025, provider)
        assert first is second
        assert len(provider.calls) == 1

    def test_separate_providers_do_not_share_entries(self) -> None:
        first = FakeProvider({2025: [single_day(date(2025, 1, 1), "New Year")]})
        second = FakeProvider()
        assert len(build_holiday_index("XX", None, 2025, 2025, first)) == 1
        assert len(build_holiday_index("XX", None, 2025, 2025, second)) == 0

    def test_unknown_region_is_empty(self) -> None:
        index = build_holiday_index("ZZ", None, 2025, 2025, FakeProvider())
        assert len(index) == 0


class TestNormalizeCountryInput:
    def test_two_letter_code(self) -> None:
        assert normalize_country_input(" br ") == ("BR", None)

    def test_combined_subdivision(self) -> None:
        assert normalize_country_input("br-sp") == ("BR", "SP")
        assert normalize_country_input("US_CA") == ("US", "CA")

    def test_explicit_subdivision_wins(self) -> None:
        assert normalize_country_input("US", " ny ") == ("US", "NY")

    def test_alpha_3_and_name(self) -> None:
        assert normalize_country_input("FRA")[0] == "FR"
        assert normalize_country_input("Germany")[0] == "DE"
        assert normalize_country_input("Turkey")[0] == "TR"

    def test_empty_country_rejected(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            normalize_country_input("  ")


class TestLibraryHolidayProvider:
    def test_us_federal_holidays(self) -> None:
        spans = LibraryHolidayProvider().get_holidays("US", 2025)
        days = {span.start for span in spans}
        assert date(2025, 1, 1) in days
        assert date(2025, 7, 4) in days
        assert all(span.start.year == 2025 for span in spans)
        assert all((span.end - span.start).days == 1 for span in spans)

    def test_unknown_country_degrades_to_empty(self, caplog) -> None:
        with caplog.at_level("WARNING"):
            assert LibraryHolidayProvider().get_holidays("ZZ", 2025) == []
        assert "No holiday calendar" in caplog.text

    def test_unknown_subdivision_degrades_to_empty(self) -> None:
        assert LibraryHolidayProvider().get_holidays("US", 2025, "ZZ") == []

    def test_countries_have_display_names(self) -> None:
        countries = LibraryHolidayProvider().get_countries()
        assert countries["US"] == "United States"
        assert "BR" in countries

    def test_subdivisions(self) -> None:
        provider = LibraryHolidayProvider()
        subdivisions = provider.get_subdivisions("BR")
        assert "SP" in subdivisions
        assert provider.get_subdivisions("ZZ") == {}

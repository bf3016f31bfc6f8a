"""Normalization helpers for dates and locale/timezone defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, Optional

from zoneinfo import ZoneInfo

from vacation_planner.core.errors import InvalidConfigurationError

DEFAULT_LOCALE = os.getenv("VACATION_PLANNER_LOCALE", "en-US")
DEFAULT_TIMEZONE = os.getenv("VACATION_PLANNER_TIMEZONE", "UTC")
DISPLAY_DATE_FORMAT = "%d/%m/%Y"


@dataclass(frozen=True)
class NormalizationConfig:
    locale: str
    timezone: str


def normalize_timezone(value: Optional[str]) -> str:
    if not value:
        value = DEFAULT_TIMEZONE
    try:
        ZoneInfo(value)
    except Exception:
        return "UTC"
    return value


def normalize_locale(value: Optional[str]) -> str:
    return value.strip() if value else DEFAULT_LOCALE


def load_normalization() -> NormalizationConfig:
    return NormalizationConfig(
        locale=normalize_locale(DEFAULT_LOCALE),
        timezone=normalize_timezone(DEFAULT_TIMEZONE),
    )


def today(timezone: Optional[str] = None) -> date:
    tz = ZoneInfo(normalize_timezone(timezone))
    return datetime.now(tz).date()


def one_year_after(start: date) -> date:
    try:
        return start.replace(year=start.year + 1)
    except ValueError:
        # Feb 29 has no counterpart next year.
        return start.replace(year=start.year + 1, day=28) + timedelta(days=1)


def parse_date(value: str) -> date:
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError as exc:
        raise InvalidConfigurationError(f"Invalid date {value!r}, expected YYYY-MM-DD") from exc


def format_display_date(value: date) -> str:
    return value.strftime(DISPLAY_DATE_FORMAT)


def build_meta() -> Dict[str, str]:
    config = load_normalization()
    return {
        "locale": config.locale,
        "timezone": config.timezone,
        "date_format": "YYYY-MM-DD",
        "display_date_format": "DD/MM/YYYY",
    }

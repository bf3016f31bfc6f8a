"""Request schemas and validation for vacation searches."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from vacation_planner.core.errors import InvalidConfigurationError
from vacation_planner.core.models import SearchConfig


class SearchPayload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    country_code: str = Field(..., min_length=1)
    subdivision_code: Optional[str] = None
    horizon_start: date
    horizon_end: date
    min_days: int = Field(5, ge=1)
    max_days: int = Field(30, ge=1)
    min_gap_between_periods: int = Field(0, ge=0)

    @model_validator(mode="after")
    def check_bounds(self) -> "SearchPayload":
        if self.horizon_end <= self.horizon_start:
            raise ValueError("horizon_end must be after horizon_start")
        if self.max_days < self.min_days:
            raise ValueError("max_days must be greater than or equal to min_days")
        return self

    def to_config(self) -> SearchConfig:
        return SearchConfig(
            country_code=self.country_code,
            subdivision_code=self.subdivision_code or None,
            horizon_start=self.horizon_start,
            horizon_end=self.horizon_end,
            min_days=self.min_days,
            max_days=self.max_days,
            min_gap_between_periods=self.min_gap_between_periods,
        )


def _describe(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


def parse_payload(data: dict) -> SearchConfig:
    try:
        payload = SearchPayload.model_validate(data)
    except ValidationError as exc:
        raise InvalidConfigurationError(_describe(exc)) from exc
    return payload.to_config()


def validate_config(config: SearchConfig) -> SearchConfig:
    """Check ``config`` against the payload rules; return a normalized copy."""
    return parse_payload(asdict(config))

"""Pipeline orchestrator for vacation period recommendations."""

from __future__ import annotations

import logging
import time
from typing import List, Optional

from vacation_planner.core.errors import StepFailedError
from vacation_planner.core.models import RecommendationResult, SearchConfig
from vacation_planner.core.schemas import validate_config
from vacation_planner.modules.timeoff.engine import DayClassifier, group_by_extra_days
from vacation_planner.modules.timeoff.holidays import HolidayProvider
from vacation_planner.pipeline.results import StepReport
from vacation_planner.pipeline.steps import run_holidays, run_rank, run_search

LOG = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000.0


class Orchestrator:
    def __init__(self, provider: Optional[HolidayProvider] = None) -> None:
        self.provider = provider
        self.reports: List[StepReport] = []

    def run(self, config: SearchConfig) -> RecommendationResult:
        self.reports.clear()
        started = time.perf_counter()
        # InvalidConfigurationError propagates as-is: nothing runs on a bad config.
        config = validate_config(config)
        self.reports.append(StepReport(name="validate", ok=True, duration_ms=_elapsed_ms(started)))

        started = time.perf_counter()
        try:
            index = run_holidays(config, self.provider)
            self.reports.append(
                StepReport(name="holidays", ok=True, payload=len(index), duration_ms=_elapsed_ms(started))
            )
        except Exception as exc:
            self.reports.append(StepReport(name="holidays", ok=False, message=str(exc)))
            raise StepFailedError("holidays step failed") from exc

        classifier = DayClassifier(index)
        started = time.perf_counter()
        try:
            outcomes = run_search(config, classifier)
            skipped = [outcome.day_count for outcome in outcomes if not outcome.found]
            self.reports.append(
                StepReport(name="search", ok=True, payload=skipped, duration_ms=_elapsed_ms(started))
            )
        except Exception as exc:
            self.reports.append(StepReport(name="search", ok=False, message=str(exc)))
            raise StepFailedError("search step failed") from exc

        started = time.perf_counter()
        try:
            periods = run_rank(outcomes)
            self.reports.append(
                StepReport(name="rank", ok=True, payload=len(periods), duration_ms=_elapsed_ms(started))
            )
        except Exception as exc:
            self.reports.append(StepReport(name="rank", ok=False, message=str(exc)))
            raise StepFailedError("rank step failed") from exc

        LOG.info(
            "Found %d periods for %s between %s and %s (%d-%d days)",
            len(periods),
            config.country_code,
            config.horizon_start,
            config.horizon_end,
            config.min_days,
            config.max_days,
        )
        return RecommendationResult(
            config=config,
            periods=periods,
            groups=group_by_extra_days(periods),
            skipped_day_counts=skipped,
            index=index,
        )


def recommend_periods(config: SearchConfig, provider: Optional[HolidayProvider] = None) -> RecommendationResult:
    return Orchestrator(provider=provider).run(config)

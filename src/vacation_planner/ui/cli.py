"""CLI entry point for the vacation planner."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

from vacation_planner.adapters.io.exports import format_period, serialize_result
from vacation_planner.adapters.storage.repositories import write_json
from vacation_planner.core.config import load_defaults, load_paths
from vacation_planner.core.errors import InvalidConfigurationError, StepFailedError
from vacation_planner.core.models import SearchConfig
from vacation_planner.core.normalization import one_year_after, parse_date, today
from vacation_planner.core.schemas import parse_payload
from vacation_planner.modules.timeoff.engine import group_by_extra_days
from vacation_planner.modules.timeoff.holidays import HolidayProvider, get_default_provider, normalize_country_input
from vacation_planner.pipeline.orchestrator import Orchestrator


def build_parser() -> argparse.ArgumentParser:
    defaults = load_defaults()
    parser = argparse.ArgumentParser(
        prog="vacation-planner",
        description="Find vacation dates that gain the most extra days off",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Rank vacation periods")
    search.add_argument("--country", type=str, default=defaults.country_code, help="Country code")
    search.add_argument("--subdivision", type=str, default=None, help="State/province code")
    search.add_argument("--start", type=str, default=None, help="First day to consider (YYYY-MM-DD, default: today)")
    search.add_argument("--end", type=str, default=None, help="Last day to consider (YYYY-MM-DD, default: one year later)")
    search.add_argument("--min-days", type=int, default=defaults.min_days, help="Minimum vacation days")
    search.add_argument("--max-days", type=int, default=defaults.max_days, help="Maximum vacation days")
    search.add_argument("--top", type=int, default=20, help="Number of periods to print (0 for all)")
    search.add_argument("--output", type=str, default=None, help="Write the full result as JSON to this path")
    search.add_argument("--save", action="store_true", help="Write the JSON result under outputs/reports")

    subparsers.add_parser("countries", help="List supported countries")

    subdivisions = subparsers.add_parser("subdivisions", help="List subdivisions of a country")
    subdivisions.add_argument("country", type=str, help="Country code")
    return parser


def _build_config(args: argparse.Namespace) -> SearchConfig:
    start = parse_date(args.start) if args.start else today()
    if args.end:
        end = parse_date(args.end)
    else:
        horizon_days = load_defaults().horizon_days
        end = start + timedelta(days=horizon_days) if horizon_days else one_year_after(start)
    return parse_payload(
        {
            "country_code": args.country,
            "subdivision_code": args.subdivision,
            "horizon_start": start,
            "horizon_end": end,
            "min_days": args.min_days,
            "max_days": args.max_days,
        }
    )


def _run_search(args: argparse.Namespace, provider: HolidayProvider) -> int:
    config = _build_config(args)
    result = Orchestrator(provider=provider).run(config)

    periods = result.periods[: args.top] if args.top > 0 else result.periods
    if not periods:
        print("No vacation period in this range gains extra days off.")
    for group in group_by_extra_days(periods):
        print(f"+{group.extra_days} extra days")
        for period in group.periods:
            print(f"  {format_period(period)}")
    if result.skipped_day_counts:
        skipped = ", ".join(str(count) for count in result.skipped_day_counts)
        print(f"No placement fits for: {skipped} vacation days")

    targets: List[Path] = []
    if args.output:
        targets.append(Path(args.output))
    if args.save:
        name = f"periods_{config.country_code}_{config.horizon_start.isoformat()}_{config.horizon_end.isoformat()}.json"
        targets.append(load_paths().reports_dir / name)
    if targets:
        payload = serialize_result(result)
        for target in targets:
            print(f"Wrote {write_json(target, payload)}")
    return 0


def _list_countries(provider: HolidayProvider) -> int:
    countries = provider.get_countries()
    for code, name in sorted(countries.items(), key=lambda item: item[1]):
        print(f"{code}\t{name}")
    return 0


def _list_subdivisions(country: str, provider: HolidayProvider) -> int:
    code, _ = normalize_country_input(country)
    subdivisions = provider.get_subdivisions(code)
    if not subdivisions:
        print(f"No subdivisions for {code}")
    for sub_code, name in sorted(subdivisions.items(), key=lambda item: item[1]):
        print(f"{sub_code}\t{name}")
    return 0


def main(argv: Optional[List[str]] = None, provider: Optional[HolidayProvider] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    provider = provider or get_default_provider()

    try:
        if args.command == "countries":
            return _list_countries(provider)
        if args.command == "subdivisions":
            return _list_subdivisions(args.country, provider)
        return _run_search(args, provider)
    except InvalidConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except StepFailedError as exc:
        cause = exc.__cause__ or exc
        print(f"error: {exc}: {cause}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

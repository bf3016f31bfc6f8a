"""Configuration helpers for filesystem layout and search defaults."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathsConfig:
    root: Path
    outputs_dir: Path
    reports_dir: Path

    @staticmethod
    def from_root(root: Path) -> "PathsConfig":
        root = root.resolve()
        outputs_dir = root / "outputs"
        reports_dir = outputs_dir / "reports"
        return PathsConfig(root=root, outputs_dir=outputs_dir, reports_dir=reports_dir)


@dataclass(frozen=True)
class SearchDefaults:
    country_code: str
    min_days: int
    max_days: int
    horizon_days: Optional[int] = None


def resolve_repo_root() -> Path:
    env_root = Path.cwd()
    for parent in [env_root] + list(env_root.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    return env_root


def load_paths() -> PathsConfig:
    return PathsConfig.from_root(resolve_repo_root())


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        LOG.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default


def load_defaults() -> SearchDefaults:
    country = os.getenv("VACATION_PLANNER_COUNTRY", "BR").strip() or "BR"
    return SearchDefaults(
        country_code=country.upper(),
        min_days=_env_int("VACATION_PLANNER_MIN_DAYS", 5),
        max_days=_env_int("VACATION_PLANNER_MAX_DAYS", 30),
        horizon_days=_env_int("VACATION_PLANNER_HORIZON_DAYS", 0) or None,
    )

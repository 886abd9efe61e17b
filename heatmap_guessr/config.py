"""
Runtime settings, read once from the environment.
A .env file next to the repo root is loaded first if present.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT_DIR / "data"

load_dotenv(ROOT_DIR / ".env")

logger = logging.getLogger(__name__)

DEFAULT_SALT = "heatmap-guessr-v1-salt-2024"
DEFAULT_TIMEZONE = "America/Chicago"
DEFAULT_LAUNCH_DATE = date(2025, 1, 1)
DEFAULT_ARCHIVE_DAYS = 30
DEFAULT_RATE_LIMIT = "200/15minutes"


@dataclass(frozen=True)
class Settings:
    pool_path: Path
    salt: str
    timezone: str
    launch_date: date
    archive_days: int
    frontend_url: str
    rate_limit: str
    log_level: str
    state_db_path: Path


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not an integer), using %d", name, raw, default)
        return default


def _date_env(name: str, default: date) -> date:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        logger.warning("Ignoring %s=%r (not YYYY-MM-DD), using %s", name, raw, default)
        return default


def _timezone_env(name: str, default: str) -> str:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        logger.warning("Ignoring %s=%r (unknown time zone), using %s", name, raw, default)
        return default
    return raw


def load_settings() -> Settings:
    """Build Settings from the current environment."""
    return Settings(
        pool_path=Path(os.environ.get("PUZZLE_POOL_PATH") or DATA_DIR / "puzzle_pool.json"),
        # Changing the salt reassigns every past and future day's puzzle.
        salt=os.environ.get("PUZZLE_SALT") or DEFAULT_SALT,
        timezone=_timezone_env("PUZZLE_TIMEZONE", DEFAULT_TIMEZONE),
        launch_date=_date_env("LAUNCH_DATE", DEFAULT_LAUNCH_DATE),
        archive_days=max(0, _int_env("ARCHIVE_DAYS", DEFAULT_ARCHIVE_DAYS)),
        frontend_url=os.environ.get("FRONTEND_URL") or "http://localhost:5173",
        # Per client address, shared by every route, e.g. "200/15minutes".
        rate_limit=os.environ.get("RATE_LIMIT") or DEFAULT_RATE_LIMIT,
        log_level=(os.environ.get("LOG_LEVEL") or "INFO").upper(),
        state_db_path=Path(os.environ.get("HEATMAP_STATE_DB") or DATA_DIR / "heatmap_state.duckdb"),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings; call get_settings.cache_clear() to re-read the environment."""
    return load_settings()

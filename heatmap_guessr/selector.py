"""
Daily puzzle selection: a date key plus a fixed salt, hashed, picks one pool entry.
Same date + same salt + same pool order always gives the same puzzle.
"""
from __future__ import annotations

import hashlib
import re
from datetime import date, datetime, timedelta
from typing import Sequence
from zoneinfo import ZoneInfo

from .config import get_settings
from .pool import PuzzleRecord, load_pool

DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class InvalidDateKey(ValueError):
    pass


def get_date_key(now: datetime | None = None, tz: str | None = None) -> str:
    """Today's YYYY-MM-DD in the reference time zone (America/Chicago by default)."""
    zone = ZoneInfo(tz or get_settings().timezone)
    if now is None:
        now = datetime.now(zone)
    elif now.tzinfo is None:
        raise ValueError("now must be timezone-aware")
    else:
        now = now.astimezone(zone)
    return now.strftime("%Y-%m-%d")


def is_date_key(value: object) -> bool:
    return isinstance(value, str) and DATE_KEY_RE.match(value) is not None


def parse_date_key(value: str) -> date:
    """Return the calendar date for a key, or raise InvalidDateKey."""
    if not is_date_key(value):
        raise InvalidDateKey("dateKey must be YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidDateKey(f"{value} is not a calendar date") from None


def puzzle_index(date_key: str, pool_size: int, salt: str | None = None) -> int:
    """First 8 hex digits of sha256(date_key + salt), as uint32, mod pool size."""
    if pool_size <= 0:
        raise ValueError("pool is empty")
    digest = hashlib.sha256((date_key + (salt if salt is not None else get_settings().salt)).encode("utf-8"))
    return int(digest.hexdigest()[:8], 16) % pool_size


def select_puzzle(
    date_key: str,
    pool: Sequence[PuzzleRecord] | None = None,
    salt: str | None = None,
) -> PuzzleRecord:
    pool = load_pool() if pool is None else pool
    return pool[puzzle_index(date_key, len(pool), salt)]


def get_todays_puzzle() -> PuzzleRecord:
    return select_puzzle(get_date_key())


def build_archive(
    today_key: str,
    pool: Sequence[PuzzleRecord] | None = None,
    *,
    days: int | None = None,
    launch: date | None = None,
    salt: str | None = None,
) -> list[dict]:
    """
    Past puzzles, newest first: every day strictly before today_key, at most
    `days` of them, never earlier than the launch date.
    """
    settings = get_settings()
    days = settings.archive_days if days is None else days
    launch = settings.launch_date if launch is None else launch
    pool = load_pool() if pool is None else pool

    today = parse_date_key(today_key)
    archive: list[dict] = []
    for offset in range(1, days + 1):
        d = today - timedelta(days=offset)
        if d < launch:
            break
        key = d.isoformat()
        puzzle = select_puzzle(key, pool, salt)
        archive.append({"dateKey": key, "title": puzzle.title, "id": puzzle.id})
    return archive

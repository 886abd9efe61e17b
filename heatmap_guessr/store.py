"""
Local persistence for player state (DuckDB): one JSON value per key.
Day state lives under "hg_state_<dateKey>", the streak under "hg_streak".

Writes are best-effort: a failed write is logged and the game carries on.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

import duckdb

from .config import get_settings
from .game import GameAttempt, Streak

logger = logging.getLogger(__name__)

STATE_PREFIX = "hg_state_"
PAST_PREFIX = "past_"
STREAK_KEY = "hg_streak"


def get_connection(path: Path | None = None) -> duckdb.DuckDBPyConnection:
    path = path or get_settings().state_db_path
    if str(path) != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    return duckdb.connect(str(path))


def init_db(conn: duckdb.DuckDBPyConnection) -> None:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS kv (
            key VARCHAR PRIMARY KEY,
            value VARCHAR NOT NULL
        )
    """)


class StateStore:
    """Key-value store for GameAttempt and Streak records."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.conn = get_connection(Path(path) if path is not None else None)
        init_db(self.conn)

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "StateStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def get(self, key: str) -> dict | None:
        row = self.conn.execute("SELECT value FROM kv WHERE key = ?", [key]).fetchone()
        if not row:
            return None
        try:
            return json.loads(row[0])
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable value for %s", key)
            return None

    def put(self, key: str, value: dict) -> bool:
        try:
            self.conn.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) "
                "ON CONFLICT (key) DO UPDATE SET value = excluded.value",
                [key, json.dumps(value)],
            )
        except duckdb.Error as e:
            logger.warning("Could not save %s: %s", key, e)
            return False
        return True

    @staticmethod
    def day_key(date_key: str, past: bool = False) -> str:
        return STATE_PREFIX + (PAST_PREFIX if past else "") + date_key

    def load_day_state(self, date_key: str, past: bool = False) -> GameAttempt | None:
        data = self.get(self.day_key(date_key, past))
        if not isinstance(data, dict) or data.get("dateKey") != date_key:
            return None
        try:
            return GameAttempt.from_dict(data)
        except (KeyError, TypeError, ValueError):
            logger.warning("Discarding malformed state for %s", date_key)
            return None

    def save_day_state(self, state: GameAttempt, past: bool = False) -> bool:
        return self.put(self.day_key(state.date_key, past), state.to_dict())

    def load_streak(self) -> Streak:
        data = self.get(STREAK_KEY)
        if not isinstance(data, dict):
            return Streak()
        try:
            return Streak.from_dict(data)
        except (TypeError, ValueError):
            return Streak()

    def save_streak(self, streak: Streak) -> bool:
        return self.put(STREAK_KEY, streak.to_dict())

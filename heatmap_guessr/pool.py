"""
Puzzle pool: the static, ordered list of TV series puzzles.

The pool is read from data/puzzle_pool.json (written by the offline build
script). If that file is missing or malformed the embedded demo set is used
instead for the rest of the process lifetime. Records are frozen dataclasses
so nothing downstream can mutate the pool after load.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .config import get_settings
from .demo_pool import DEMO_POOL

logger = logging.getLogger(__name__)

SOURCE_FILE = "file"
SOURCE_DEMO = "demo"


class PoolError(ValueError):
    """The pool source exists but does not describe a valid puzzle pool."""


@dataclass(frozen=True)
class Episode:
    number: int
    rating: float | None = None


@dataclass(frozen=True)
class Season:
    number: int
    episodes: tuple[Episode, ...] = ()


@dataclass(frozen=True)
class TitleEntry:
    """Autocomplete row: enough to type a guess, nothing that hints at the answer."""
    id: str
    title: str
    aliases: tuple[str, ...] = ()


@dataclass(frozen=True)
class PuzzleRecord:
    id: str
    title: str
    aliases: tuple[str, ...] = ()
    premiere_year: int | str | None = None
    runtime_bucket: str | None = None
    network: str | None = None
    genre: str | None = None
    status: str | None = None
    total_seasons: int = 0
    total_episodes: int = 0
    top_episode_title: str | None = None
    top_episode_lead: str | None = None
    tagline: str | None = None
    heatmap: tuple[Season, ...] = field(default=(), repr=False)

    def heatmap_dict(self) -> dict:
        """Heatmap in the wire shape the client renders."""
        return {
            "seasons": [
                {
                    "season": s.number,
                    "episodes": [{"ep": e.number, "rating": e.rating} for e in s.episodes],
                }
                for s in self.heatmap
            ]
        }

    def title_entry(self) -> TitleEntry:
        return TitleEntry(id=self.id, title=self.title, aliases=self.aliases)


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _parse_rating(value: Any, where: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PoolError(f"{where}: rating must be a number or null, got {value!r}")
    if not 0 <= value <= 10:
        raise PoolError(f"{where}: rating {value} outside [0, 10]")
    return float(value)


def _parse_heatmap(raw: Any, puzzle_id: str) -> tuple[Season, ...]:
    if raw is None:
        return ()
    seasons_raw = raw.get("seasons") if isinstance(raw, dict) else raw
    if not isinstance(seasons_raw, list):
        raise PoolError(f"{puzzle_id}: heatmap must hold a list of seasons")
    seasons: list[Season] = []
    for i, s in enumerate(seasons_raw, start=1):
        if not isinstance(s, dict):
            raise PoolError(f"{puzzle_id}: season {i} is not an object")
        number = s.get("season", i)
        episodes_raw = s.get("episodes") or []
        if not isinstance(episodes_raw, list):
            raise PoolError(f"{puzzle_id} S{number}: episodes must be a list")
        episodes: list[Episode] = []
        last = 0
        for e in episodes_raw:
            ep = e.get("ep", e.get("episodeNumber")) if isinstance(e, dict) else None
            if isinstance(ep, bool) or not isinstance(ep, int):
                raise PoolError(f"{puzzle_id} S{number}: episode number missing or not an int")
            if ep <= last:
                # Episode numbers must be unique and increasing within a season.
                raise PoolError(f"{puzzle_id} S{number}: episode {ep} out of order")
            last = ep
            episodes.append(Episode(ep, _parse_rating(e.get("rating"), f"{puzzle_id} S{number}E{ep}")))
        seasons.append(Season(number, tuple(episodes)))
    return tuple(seasons)


def _parse_total(value: Any, counted: int, name: str, puzzle_id: str) -> int:
    """Declared total, or the heatmap count when absent. A mismatch is kept but logged."""
    if value is None:
        return counted
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise PoolError(f"{puzzle_id}: {name} must be a non-negative integer, got {value!r}")
    if value != counted:
        logger.warning("%s: %s is %d but the heatmap has %d", puzzle_id, name, value, counted)
    return value


def parse_record(raw: Any) -> PuzzleRecord:
    """Build a PuzzleRecord from one JSON object. Raises PoolError if invalid."""
    if not isinstance(raw, dict):
        raise PoolError(f"puzzle record must be an object, got {type(raw).__name__}")
    puzzle_id = raw.get("id")
    title = raw.get("title")
    if not isinstance(puzzle_id, str) or not puzzle_id.strip():
        raise PoolError(f"puzzle record missing id: {raw!r:.80}")
    if not isinstance(title, str) or not title.strip():
        raise PoolError(f"{puzzle_id}: missing title")
    aliases = raw.get("aliases") or []
    if not isinstance(aliases, list) or not all(isinstance(a, str) for a in aliases):
        raise PoolError(f"{puzzle_id}: aliases must be a list of strings")

    heatmap = _parse_heatmap(raw.get("heatmap"), puzzle_id)
    total_seasons = _parse_total(raw.get("totalSeasons"), len(heatmap), "totalSeasons", puzzle_id)
    total_episodes = _parse_total(
        raw.get("totalEpisodes"), sum(len(s.episodes) for s in heatmap), "totalEpisodes", puzzle_id
    )
    return PuzzleRecord(
        id=puzzle_id,
        title=title,
        aliases=tuple(aliases),
        premiere_year=raw.get("premiereYear"),
        runtime_bucket=_optional_str(raw.get("runtimeBucket")),
        network=_optional_str(raw.get("network")),
        genre=_optional_str(raw.get("genre")),
        status=_optional_str(raw.get("status")),
        total_seasons=total_seasons,
        total_episodes=total_episodes,
        top_episode_title=_optional_str(raw.get("topEpisodeTitle")),
        top_episode_lead=_optional_str(raw.get("topEpisodeLead")),
        tagline=_optional_str(raw.get("tagline")),
        heatmap=heatmap,
    )


def parse_pool(raw: Any) -> tuple[PuzzleRecord, ...]:
    """Validate a decoded JSON array into an ordered pool. Order is preserved."""
    if not isinstance(raw, list) or not raw:
        raise PoolError("puzzle pool must be a non-empty JSON array")
    records = tuple(parse_record(r) for r in raw)
    seen: set[str] = set()
    for r in records:
        if r.id in seen:
            raise PoolError(f"duplicate puzzle id {r.id!r}")
        seen.add(r.id)
    return records


def read_pool_file(path: Path) -> tuple[PuzzleRecord, ...]:
    """Read and validate a pool file. Raises OSError, ValueError (incl. PoolError)."""
    with open(path, "r", encoding="utf-8") as f:
        return parse_pool(json.load(f))


def demo_pool() -> tuple[PuzzleRecord, ...]:
    return parse_pool(DEMO_POOL)


class PuzzleService:
    """
    Holds the pool for the process lifetime. The source is read once in the
    constructor; a failed read falls back to the demo set and is never retried.
    """

    def __init__(self, pool_path: Path | None = None) -> None:
        path = Path(pool_path) if pool_path is not None else get_settings().pool_path
        try:
            pool = read_pool_file(path)
            source = SOURCE_FILE
            logger.info("Loaded %d puzzles from %s", len(pool), path)
        except (OSError, ValueError) as e:
            pool = demo_pool()
            source = SOURCE_DEMO
            logger.warning("Puzzle pool unavailable (%s); using %d demo puzzles", e, len(pool))
        self._pool = pool
        self._source = source
        self._path = path
        self._titles = tuple(r.title_entry() for r in pool)

    @property
    def pool(self) -> tuple[PuzzleRecord, ...]:
        return self._pool

    @property
    def titles(self) -> tuple[TitleEntry, ...]:
        return self._titles

    @property
    def source(self) -> str:
        """SOURCE_FILE when the pool came from disk, SOURCE_DEMO for the embedded fallback."""
        return self._source

    @property
    def path(self) -> Path:
        return self._path

    def __len__(self) -> int:
        return len(self._pool)


_SERVICE: PuzzleService | None = None


def init_service(pool_path: Path | None = None) -> PuzzleService:
    """Build the process-wide service. Called once at startup (and by tests)."""
    global _SERVICE
    _SERVICE = PuzzleService(pool_path)
    return _SERVICE


def get_service() -> PuzzleService:
    if _SERVICE is None:
        return init_service()
    return _SERVICE


def load_pool() -> tuple[PuzzleRecord, ...]:
    return get_service().pool


def load_title_index() -> tuple[TitleEntry, ...]:
    return get_service().titles

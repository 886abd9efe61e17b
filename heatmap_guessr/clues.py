"""
Progressive clue disclosure. Each wrong guess unlocks one more tier; the
answer itself is never part of the payload built here.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .pool import PuzzleRecord

MAX_ATTEMPTS = 5

# Placeholder values the data build writes when a field could not be resolved.
SENTINELS = {"Unknown", "Various"}

DEFAULT_GENRE = "Drama"


@dataclass(frozen=True)
class ClueField:
    key: str  # name in the payload
    attr: str  # PuzzleRecord attribute
    fallback: Any = None


@dataclass(frozen=True)
class ClueTier:
    name: str
    unlocks_at: int  # attempts used
    fields: tuple[ClueField, ...]


# One tier per wrong guess, vague to specific.
CLUE_TIERS: tuple[ClueTier, ...] = (
    ClueTier("tier1", 1, (ClueField("premiereYear", "premiere_year"), ClueField("runtimeBucket", "runtime_bucket"))),
    ClueTier("tier2", 2, (ClueField("genre", "genre", DEFAULT_GENRE),)),
    ClueTier("tier3", 3, (ClueField("leadActor", "top_episode_lead"),)),
    ClueTier("tier4", 4, (ClueField("tagline", "tagline"),)),
)


def sanitize(value: Any, fallback: Any = None) -> Any:
    """Return fallback for None, blank strings and sentinel placeholders."""
    if value is None:
        return fallback
    if isinstance(value, str) and (not value.strip() or value.strip() in SENTINELS):
        return fallback
    return value


def clamp_attempts(attempts_used: int) -> int:
    return max(0, min(MAX_ATTEMPTS, attempts_used))


def unlocked_tiers(attempts_used: int) -> list[ClueTier]:
    return [t for t in CLUE_TIERS if attempts_used >= t.unlocks_at]


def build_public_payload(puzzle: PuzzleRecord, attempts_used: int) -> dict:
    """
    Client-safe view of a puzzle after `attempts_used` guesses.

    Always carries id, heatmap and season/episode totals. Clue tiers are
    added as they unlock. Title and aliases are never included; callers
    attach "answer" themselves once the game is over.
    """
    attempts_used = clamp_attempts(attempts_used)
    clues: dict[str, dict] = {}
    for tier in unlocked_tiers(attempts_used):
        values = {}
        for f in tier.fields:
            value = sanitize(getattr(puzzle, f.attr), f.fallback)
            # A clue that spells out the title would give the answer away.
            if isinstance(value, str) and value == puzzle.title:
                value = f.fallback
            values[f.key] = value
        clues[tier.name] = values
    return {
        "id": puzzle.id,
        "heatmap": puzzle.heatmap_dict(),
        "totalSeasons": puzzle.total_seasons,
        "totalEpisodes": puzzle.total_episodes,
        "clues": clues,
    }


def attach_answer(payload: dict, puzzle: PuzzleRecord) -> dict:
    payload["answer"] = puzzle.title
    return payload

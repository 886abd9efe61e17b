"""
Check a player's guess against the day's show.
A guess is correct when its normalized form equals the normalized title or any alias.
"""
from __future__ import annotations

from dataclasses import dataclass

from .clues import MAX_ATTEMPTS
from .normalize import normalize_title
from .pool import PuzzleRecord


@dataclass(frozen=True)
class GuessResult:
    correct: bool
    new_attempts_used: int
    is_game_over: bool
    reveal_answer: bool


def match_targets(puzzle: PuzzleRecord) -> set[str]:
    targets = {normalize_title(puzzle.title)}
    targets.update(normalize_title(a) for a in puzzle.aliases)
    targets.discard("")
    return targets


def evaluate_guess(puzzle: PuzzleRecord, raw_guess: str, prior_attempts_used: int) -> GuessResult:
    """
    Score one guess. Stateless: the caller supplies how many attempts were
    used before this one (0-4, validated at the HTTP boundary).
    """
    guess = normalize_title(raw_guess)
    correct = bool(guess) and guess in match_targets(puzzle)
    new_attempts = prior_attempts_used + 1
    game_over = correct or new_attempts >= MAX_ATTEMPTS
    return GuessResult(
        correct=correct,
        new_attempts_used=new_attempts,
        is_game_over=game_over,
        reveal_answer=correct or game_over,
    )

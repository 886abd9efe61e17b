"""
Play the daily puzzle in a terminal. Progress and streak are saved locally,
so quitting and re-running resumes the same day.
Run: python -m heatmap_guessr.play [--date YYYY-MM-DD] [--db PATH]
"""
from __future__ import annotations

import argparse
from typing import Callable

from .check import evaluate_guess
from .clues import CLUE_TIERS, MAX_ATTEMPTS, build_public_payload
from .game import GameAttempt, build_share_text, update_streak
from .pool import PuzzleRecord
from .selector import InvalidDateKey, get_date_key, parse_date_key, select_puzzle
from .store import StateStore

CLUE_LABELS = {
    "premiereYear": "Premiere year",
    "runtimeBucket": "Runtime",
    "genre": "Genre",
    "leadActor": "Lead actor",
    "tagline": "Tagline",
}


def render_heatmap(payload: dict) -> list[str]:
    """One line per season: episode ratings, '--' where a rating is missing."""
    lines = []
    for s in payload["heatmap"]["seasons"]:
        cells = [f"{e['rating']:.1f}" if e["rating"] is not None else " --" for e in s["episodes"]]
        lines.append(f"S{s['season']:<2} " + " ".join(cells))
    return lines


def render_clues(payload: dict) -> list[str]:
    lines = []
    for tier in CLUE_TIERS:
        values = payload["clues"].get(tier.name)
        if values is None:
            labels = " & ".join(CLUE_LABELS[f.key] for f in tier.fields)
            lines.append(f"  [locked] {labels}")
            continue
        for f in tier.fields:
            value = values.get(f.key)
            lines.append(f"  {CLUE_LABELS[f.key]}: {value if value is not None else '(none)'}")
    return lines


def play_game(
    puzzle: PuzzleRecord,
    state: GameAttempt,
    *,
    ask: Callable[[str], str] = input,
    say: Callable[[str], None] = print,
    on_update: Callable[[GameAttempt], None] | None = None,
) -> GameAttempt:
    """Prompt for guesses until the game ends or input runs out."""
    while not state.is_over:
        payload = build_public_payload(puzzle, state.attempts_used)
        say(f"{payload['totalSeasons']} seasons, {payload['totalEpisodes']} episodes")
        for line in render_heatmap(payload):
            say(line)
        say("Clues:")
        for line in render_clues(payload):
            say(line)
        try:
            guess = ask(f"Guess {state.attempts_used + 1}/{MAX_ATTEMPTS}: ").strip()
        except EOFError:
            say("")
            break
        if not guess:
            continue
        if state.has_guessed(guess):
            say("You already guessed that.")
            continue
        result = evaluate_guess(puzzle, guess, state.attempts_used)
        state.record(guess, result, puzzle.title if result.reveal_answer else None)
        if on_update is not None:
            on_update(state)
        if result.correct:
            say(f"Correct! It was {puzzle.title}.")
        elif result.is_game_over:
            say(f"Out of guesses. It was {puzzle.title}.")
        else:
            say("Not it.")
    return state


def main() -> None:
    p = argparse.ArgumentParser(description="Play Heatmap Guessr in the terminal.")
    p.add_argument("--date", help="Replay a past day (YYYY-MM-DD); defaults to today")
    p.add_argument("--db", help="Where to keep progress (DuckDB file)")
    args = p.parse_args()

    today = get_date_key()
    date_key = args.date or today
    try:
        if parse_date_key(date_key) > parse_date_key(today):
            p.error("that puzzle is not available yet")
    except InvalidDateKey as e:
        p.error(str(e))
    past = date_key != today

    puzzle = select_puzzle(date_key)
    with StateStore(args.db) as store:
        state = store.load_day_state(date_key, past) or GameAttempt(date_key)
        if state.is_over:
            print(f"Already played {date_key}.")
        else:
            state = play_game(puzzle, state, ask=input, on_update=lambda s: store.save_day_state(s, past))
        if not state.is_over:
            print("Progress saved.")
            return
        label = f"Past {date_key}" if past else date_key
        if not past:
            streak = update_streak(store.load_streak(), date_key, state.won)
            store.save_streak(streak)
            print(f"Streak: {streak.current} (best {streak.best})")
        print()
        print(build_share_text(label, state.guesses, state.won))


if __name__ == "__main__":
    main()

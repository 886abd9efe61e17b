import pytest

from heatmap_guessr.check import GuessResult
from heatmap_guessr.game import (
    GameAttempt,
    GuessEntry,
    Streak,
    build_share_text,
    previous_date_key,
    update_streak,
)

WRONG = GuessResult(correct=False, new_attempts_used=1, is_game_over=False, reveal_answer=False)


def test_record_and_duplicate_detection():
    state = GameAttempt("2025-03-10")
    state.record("The Wire", WRONG)
    assert state.attempts_used == 1
    assert state.attempts_left == 4
    assert state.has_guessed("wire")
    assert state.has_guessed("THE WIRE!")
    assert not state.has_guessed("Wire in the Blood")


def test_record_win_sets_answer():
    state = GameAttempt("2025-03-10")
    state.record("Lost", GuessResult(True, 1, True, True), answer="Lost")
    assert state.won and state.is_over
    assert state.answer == "Lost"
    with pytest.raises(ValueError):
        state.record("Lost", GuessResult(True, 2, True, True))


def test_dict_round_trip():
    state = GameAttempt("2025-03-10", [GuessEntry("Lost", False)], attempts_used=1)
    data = state.to_dict()
    assert data == {
        "dateKey": "2025-03-10",
        "guesses": [{"title": "Lost", "correct": False}],
        "attemptsUsed": 1,
        "won": False,
        "isOver": False,
        "answer": None,
    }
    assert GameAttempt.from_dict(data) == state


def test_previous_date_key_crosses_month():
    assert previous_date_key("2025-03-01") == "2025-02-28"


def test_streak_consecutive_wins():
    s = update_streak(Streak(), "2025-03-08", True)
    s = update_streak(s, "2025-03-09", True)
    assert (s.current, s.best, s.last_won_date) == (2, 2, "2025-03-09")


def test_streak_restarts_after_gap():
    s = Streak(current=4, best=4, last_won_date="2025-03-01")
    s = update_streak(s, "2025-03-10", True)
    assert (s.current, s.best) == (1, 4)


def test_loss_leaves_streak_alone():
    s = Streak(current=3, best=5, last_won_date="2025-03-09")
    assert update_streak(s, "2025-03-10", False) == s


def test_same_day_win_not_counted_twice():
    s = update_streak(Streak(), "2025-03-10", True)
    assert update_streak(s, "2025-03-10", True).current == 1


def test_share_text_win():
    text = build_share_text("2025-03-10", [GuessEntry("A", False), GuessEntry("B", True)], True)
    lines = text.split("\n")
    assert lines[0] == "Heatmap Guessr: TV Edition"
    assert lines[1] == "2025-03-10  2/5"
    assert lines[3] == "\U0001F7E5\U0001F7E9"


def test_share_text_loss_pads_remaining():
    text = build_share_text("2025-03-10", [GuessEntry("A", False)] * 2, False)
    lines = text.split("\n")
    assert lines[1] == "2025-03-10  X/5"
    assert lines[3] == "\U0001F7E5" * 2 + "⬜" * 3

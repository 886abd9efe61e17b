"""
Player-side game state: guesses for one day, the win streak, and the
shareable result grid. None of this is held by the server.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, timedelta

from .check import GuessResult
from .clues import MAX_ATTEMPTS
from .normalize import normalize_title

SHARE_HEADER = "Heatmap Guessr: TV Edition"
SHARE_URL = "https://heatmapguessr.com"
SQUARE_CORRECT = "\U0001F7E9"
SQUARE_WRONG = "\U0001F7E5"
SQUARE_UNUSED = "⬜"


@dataclass
class GuessEntry:
    title: str
    correct: bool


@dataclass
class GameAttempt:
    date_key: str
    guesses: list[GuessEntry] = field(default_factory=list)
    attempts_used: int = 0
    won: bool = False
    is_over: bool = False
    answer: str | None = None

    def has_guessed(self, title: str) -> bool:
        """Duplicate check, using the same normalization the server matches with."""
        norm = normalize_title(title)
        return any(normalize_title(g.title) == norm for g in self.guesses)

    def record(self, title: str, result: GuessResult, answer: str | None = None) -> None:
        if self.is_over:
            raise ValueError(f"game for {self.date_key} is already over")
        self.guesses.append(GuessEntry(title, result.correct))
        self.attempts_used = result.new_attempts_used
        self.won = result.correct
        self.is_over = result.is_game_over
        if answer is not None:
            self.answer = answer

    @property
    def attempts_left(self) -> int:
        return max(0, MAX_ATTEMPTS - self.attempts_used)

    def to_dict(self) -> dict:
        return {
            "dateKey": self.date_key,
            "guesses": [asdict(g) for g in self.guesses],
            "attemptsUsed": self.attempts_used,
            "won": self.won,
            "isOver": self.is_over,
            "answer": self.answer,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GameAttempt":
        return cls(
            date_key=data["dateKey"],
            guesses=[GuessEntry(g["title"], bool(g["correct"])) for g in data.get("guesses", [])],
            attempts_used=int(data.get("attemptsUsed", 0)),
            won=bool(data.get("won", False)),
            is_over=bool(data.get("isOver", False)),
            answer=data.get("answer"),
        )


@dataclass
class Streak:
    current: int = 0
    best: int = 0
    last_won_date: str | None = None

    def to_dict(self) -> dict:
        return {"current": self.current, "best": self.best, "lastWonDate": self.last_won_date}

    @classmethod
    def from_dict(cls, data: dict) -> "Streak":
        return cls(
            current=int(data.get("current", 0)),
            best=int(data.get("best", 0)),
            last_won_date=data.get("lastWonDate"),
        )


def previous_date_key(date_key: str) -> str:
    return (date.fromisoformat(date_key) - timedelta(days=1)).isoformat()


def update_streak(streak: Streak, date_key: str, won: bool) -> Streak:
    """
    A win extends the streak if the last win was the day before, otherwise
    starts a new one. A loss leaves it alone; only a missed day breaks it.
    """
    if not won:
        return streak
    if streak.last_won_date == date_key:
        return streak
    consecutive = streak.last_won_date == previous_date_key(date_key)
    current = streak.current + 1 if consecutive else 1
    return Streak(current=current, best=max(streak.best, current), last_won_date=date_key)


def build_share_text(label: str, guesses: list[GuessEntry], won: bool) -> str:
    """Wordle-style result: one square per guess, grey padding on a loss."""
    score = f"{len(guesses)}/{MAX_ATTEMPTS}" if won else f"X/{MAX_ATTEMPTS}"
    squares = "".join(SQUARE_CORRECT if g.correct else SQUARE_WRONG for g in guesses)
    if not won:
        squares += SQUARE_UNUSED * max(0, MAX_ATTEMPTS - len(guesses))
    return "\n".join([SHARE_HEADER, f"{label}  {score}", "", squares, "", SHARE_URL])

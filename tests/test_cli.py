import sys

import pytest

from heatmap_guessr import daily, play
from heatmap_guessr.selector import puzzle_index, select_puzzle


def test_daily_prints_answer_key(service, monkeypatch, capsys):
    monkeypatch.setattr(daily, "get_service", lambda: service)
    monkeypatch.setattr(sys, "argv", ["daily", "--date", "2025-03-10"])
    daily.main()
    out = capsys.readouterr().out
    puzzle = select_puzzle("2025-03-10", service.pool)
    assert "Date: 2025-03-10" in out
    assert f"Index: {puzzle_index('2025-03-10', len(service))}" in out
    assert f"{puzzle.title}  [{puzzle.id}]" in out


def test_daily_rejects_bad_date(service, monkeypatch):
    monkeypatch.setattr(daily, "get_service", lambda: service)
    monkeypatch.setattr(sys, "argv", ["daily", "--date", "2025-02-30"])
    with pytest.raises(SystemExit):
        daily.main()


def test_play_rejects_future_date(tmp_path, monkeypatch):
    monkeypatch.setattr(play, "get_date_key", lambda: "2025-03-10")
    monkeypatch.setattr(sys, "argv", ["play", "--date", "2025-03-11", "--db", str(tmp_path / "s.duckdb")])
    with pytest.raises(SystemExit):
        play.main()


def test_play_saves_progress_when_input_ends(tmp_path, monkeypatch, capsys):
    def no_input(_prompt):
        raise EOFError

    monkeypatch.setattr(play, "get_date_key", lambda: "2025-03-10")
    monkeypatch.setattr("builtins.input", no_input)
    monkeypatch.setattr(sys, "argv", ["play", "--date", "2025-03-01", "--db", str(tmp_path / "s.duckdb")])
    play.main()
    assert "Progress saved." in capsys.readouterr().out

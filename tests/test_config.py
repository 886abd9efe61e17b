import re

import pytest
from fastapi.testclient import TestClient

from heatmap_guessr.app import app, puzzle_service
from heatmap_guessr.config import DEFAULT_TIMEZONE, get_settings, load_settings
from heatmap_guessr.selector import get_date_key


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in ("PUZZLE_TIMEZONE", "ARCHIVE_DAYS", "LAUNCH_DATE"):
        monkeypatch.delenv(name, raising=False)
    s = load_settings()
    assert s.timezone == DEFAULT_TIMEZONE
    assert s.archive_days == 30
    assert s.launch_date.isoformat() == "2025-01-01"


def test_valid_timezone_is_kept(monkeypatch):
    monkeypatch.setenv("PUZZLE_TIMEZONE", "Europe/London")
    assert load_settings().timezone == "Europe/London"


@pytest.mark.parametrize("value", ["America/Chicgo", "Not/AZone", "../etc/passwd", "America"])
def test_unknown_timezone_falls_back(monkeypatch, caplog, value):
    monkeypatch.setenv("PUZZLE_TIMEZONE", value)
    with caplog.at_level("WARNING", logger="heatmap_guessr.config"):
        assert load_settings().timezone == DEFAULT_TIMEZONE
    assert "PUZZLE_TIMEZONE" in caplog.text


@pytest.mark.parametrize("name, value", [("ARCHIVE_DAYS", "lots"), ("LAUNCH_DATE", "soon")])
def test_bad_values_fall_back(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    s = load_settings()
    assert s.archive_days == 30
    assert s.launch_date.isoformat() == "2025-01-01"


def test_bad_timezone_does_not_break_routes(monkeypatch, fresh_settings, service):
    monkeypatch.setenv("PUZZLE_TIMEZONE", "America/Chicgo")
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", get_date_key())

    app.dependency_overrides[puzzle_service] = lambda: service
    try:
        with TestClient(app) as client:
            assert client.get("/puzzle/today").status_code == 200
            assert client.get("/puzzle/archive").status_code == 200
    finally:
        app.dependency_overrides.clear()

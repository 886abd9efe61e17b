import json

import pytest
from fastapi.testclient import TestClient

from heatmap_guessr.app import app, limiter, puzzle_service, today_key
from heatmap_guessr.demo_pool import DEMO_POOL
from heatmap_guessr.pool import PuzzleService

TODAY = "2025-03-10"


@pytest.fixture
def service(tmp_path):
    # No pool file at this path, so the demo set is used.
    return PuzzleService(tmp_path / "missing.json")


@pytest.fixture
def pool(service):
    return service.pool


@pytest.fixture
def pool_file(tmp_path):
    def write(records):
        path = tmp_path / "puzzle_pool.json"
        path.write_text(json.dumps(records), encoding="utf-8")
        return path
    return write


@pytest.fixture
def demo_records():
    return json.loads(json.dumps(DEMO_POOL))


@pytest.fixture
def client(service):
    app.dependency_overrides[puzzle_service] = lambda: service
    app.dependency_overrides[today_key] = lambda: TODAY
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_rate_limit():
    # The limiter counts per client address for the whole process.
    limiter.reset()
    yield

import dataclasses

import pytest

from heatmap_guessr.pool import (
    SOURCE_DEMO,
    SOURCE_FILE,
    PoolError,
    PuzzleService,
    parse_pool,
    parse_record,
)


def _record(**overrides):
    rec = {
        "id": "fargo",
        "title": "Fargo",
        "aliases": [],
        "premiereYear": 2014,
        "runtimeBucket": "60 min",
        "genre": "Crime",
        "heatmap": {"seasons": [{"season": 1, "episodes": [{"ep": 1, "rating": 8.9}, {"ep": 2, "rating": 8.7}]}]},
    }
    rec.update(overrides)
    return rec


def test_loads_pool_file_in_order(pool_file):
    path = pool_file([_record(), _record(id="lost", title="Lost")])
    service = PuzzleService(path)
    assert service.source == SOURCE_FILE
    assert [p.id for p in service.pool] == ["fargo", "lost"]


def test_missing_file_falls_back_to_demo(tmp_path):
    service = PuzzleService(tmp_path / "nope.json")
    assert service.source == SOURCE_DEMO
    assert len(service) > 0


def test_corrupt_file_falls_back_to_demo(tmp_path):
    path = tmp_path / "puzzle_pool.json"
    path.write_text("[{not json", encoding="utf-8")
    assert PuzzleService(path).source == SOURCE_DEMO


@pytest.mark.parametrize(
    "records",
    [
        [],
        {"id": "x"},
        [_record(id="")],
        [_record(title=None)],
        [_record(), _record()],
        [_record(aliases="fargo")],
        [_record(heatmap={"seasons": [{"season": 1, "episodes": [{"ep": 2}, {"ep": 1}]}]})],
        [_record(heatmap={"seasons": [{"season": 1, "episodes": [{"ep": 1}, {"ep": 1}]}]})],
        [_record(heatmap={"seasons": [{"season": 1, "episodes": [{"ep": 1, "rating": 11}]}]})],
        [_record(heatmap={"seasons": [{"season": 1, "episodes": 7}]})],
    ],
)
def test_malformed_pool_falls_back_to_demo(pool_file, records):
    assert PuzzleService(pool_file(records)).source == SOURCE_DEMO


def test_parse_pool_rejects_duplicate_ids():
    with pytest.raises(PoolError):
        parse_pool([_record(), _record()])


def test_totals_default_to_heatmap_counts():
    rec = parse_record(_record())
    assert rec.total_seasons == 1
    assert rec.total_episodes == 2


@pytest.mark.parametrize("value", [True, -1, "5", 2.0])
def test_bad_totals_are_rejected(value):
    with pytest.raises(PoolError):
        parse_record(_record(totalSeasons=value))
    with pytest.raises(PoolError):
        parse_record(_record(totalEpisodes=value))


def test_total_disagreeing_with_heatmap_is_logged(caplog):
    with caplog.at_level("WARNING", logger="heatmap_guessr.pool"):
        rec = parse_record(_record(totalEpisodes=10))
    assert rec.total_episodes == 10
    assert "fargo: totalEpisodes is 10 but the heatmap has 2" in caplog.text


def test_matching_totals_are_quiet(caplog):
    with caplog.at_level("WARNING", logger="heatmap_guessr.pool"):
        parse_record(_record(totalSeasons=1, totalEpisodes=2))
    assert caplog.records == []


def test_missing_rating_is_allowed():
    rec = parse_record(_record(heatmap={"seasons": [{"season": 1, "episodes": [{"ep": 1, "rating": None}]}]}))
    assert rec.heatmap[0].episodes[0].rating is None


def test_heatmap_round_trips_to_wire_shape():
    rec = parse_record(_record())
    assert rec.heatmap_dict() == {
        "seasons": [{"season": 1, "episodes": [{"ep": 1, "rating": 8.9}, {"ep": 2, "rating": 8.7}]}]
    }


def test_records_are_immutable(pool):
    with pytest.raises(dataclasses.FrozenInstanceError):
        pool[0].title = "Something Else"


def test_demo_totals_match_heatmaps(pool):
    for p in pool:
        assert p.total_seasons == len(p.heatmap)
        assert p.total_episodes == sum(len(s.episodes) for s in p.heatmap)


def test_title_index_has_no_metadata(service):
    assert len(service.titles) == len(service.pool)
    entry = service.titles[0]
    assert set(dataclasses.asdict(entry)) == {"id", "title", "aliases"}

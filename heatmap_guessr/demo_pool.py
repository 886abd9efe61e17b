"""
Embedded demo puzzles, used when data/puzzle_pool.json has not been built.

Same JSON shape as the generated pool file so both go through the same
parser. Ratings are per-episode averages, one list per season.

Record order is part of the daily mapping: adding, removing or reordering
entries moves every date to a different show.
"""
from __future__ import annotations


def _heatmap(*seasons: list[float]) -> dict:
    return {
        "seasons": [
            {"season": n, "episodes": [{"ep": i, "rating": r} for i, r in enumerate(ratings, start=1)]}
            for n, ratings in enumerate(seasons, start=1)
        ]
    }


def _show(**fields) -> dict:
    # Totals derived from the heatmap so they can never disagree with it.
    seasons = fields["heatmap"]["seasons"]
    fields.setdefault("totalSeasons", len(seasons))
    fields.setdefault("totalEpisodes", sum(len(s["episodes"]) for s in seasons))
    fields.setdefault("aliases", [])
    return fields


DEMO_POOL: list[dict] = [
    _show(
        id="breaking-bad",
        title="Breaking Bad",
        aliases=["breaking bad", "bb"],
        premiereYear=2008,
        runtimeBucket="45 min",
        network="AMC",
        genre="Crime Drama",
        status="Ended",
        topEpisodeTitle="Ozymandias",
        topEpisodeLead="Bryan Cranston",
        tagline="Remember my name.",
        heatmap=_heatmap(
            [9.0, 8.8, 8.5, 8.4, 8.6, 8.7, 9.3],
            [8.8, 8.3, 8.2, 8.4, 8.5, 8.5, 8.6, 8.7, 8.8, 8.8, 9.0, 9.0, 9.5],
            [8.9, 8.5, 8.4, 8.6, 9.0, 9.0, 8.8, 8.8, 8.9, 9.3, 9.0, 9.2, 9.5],
            [8.9, 8.8, 8.7, 8.8, 8.9, 8.9, 9.0, 9.1, 9.3, 9.3, 9.6, 9.7, 9.9],
            [9.0, 9.0, 9.1, 9.2, 9.3, 9.2, 9.1, 9.9, 9.6, 9.4, 9.5, 9.7, 9.5, 9.6, 9.7, 9.9],
        ),
    ),
    _show(
        id="the-wire",
        title="The Wire",
        aliases=["the wire", "wire"],
        premiereYear=2002,
        runtimeBucket="60 min",
        network="HBO",
        genre="Crime Drama",
        status="Ended",
        topEpisodeTitle="-30-",
        topEpisodeLead="Dominic West",
        tagline="Listen carefully.",
        heatmap=_heatmap(
            [8.5, 8.4, 8.5, 8.6, 8.7, 8.8, 8.8, 8.9, 8.9, 9.0, 9.1, 9.5, 9.6],
            [8.5, 8.4, 8.5, 8.6, 8.7, 8.8, 8.8, 8.9, 8.9, 9.0, 9.1, 9.3],
            [8.7, 8.8, 8.9, 9.0, 9.0, 9.1, 9.1, 9.2, 9.2, 9.3, 9.4, 9.6],
            [9.0, 9.1, 9.1, 9.2, 9.3, 9.3, 9.4, 9.4, 9.5, 9.5, 9.6, 9.7, 9.8],
            [8.8, 8.8, 8.9, 9.0, 9.0, 9.1, 9.1, 9.2, 9.2, 9.6],
        ),
    ),
    _show(
        id="the-sopranos",
        title="The Sopranos",
        aliases=["the sopranos", "sopranos"],
        premiereYear=1999,
        runtimeBucket="60 min",
        network="HBO",
        genre="Crime Drama",
        status="Ended",
        topEpisodeTitle="Pine Barrens",
        topEpisodeLead="James Gandolfini",
        tagline="Family. Redefined.",
        heatmap=_heatmap(
            [9.1, 8.5, 8.5, 8.5, 8.7, 8.7, 8.8, 8.8, 8.9, 9.0, 9.0, 9.1, 9.4],
            [8.7, 8.8, 8.8, 8.9, 8.9, 9.0, 9.1, 9.1, 9.2, 9.2, 9.3, 9.3, 9.5],
            [8.8, 8.9, 9.0, 9.2, 9.3, 9.0, 9.5, 9.0, 9.0, 9.0, 9.1, 9.2, 9.3],
            [8.8, 8.9, 9.0, 9.1, 9.0, 9.0, 9.1, 9.1, 9.2, 9.3, 9.3, 9.3, 9.5],
            [9.0, 9.1, 9.1, 9.2, 9.2, 9.3, 9.4, 9.4, 9.5, 9.5, 9.6, 9.7, 9.8],
            [9.0, 9.0, 9.1, 9.1, 9.2, 9.2, 9.3, 9.3, 9.3, 9.4, 9.4, 9.5, 9.5,
             9.5, 9.6, 9.6, 9.7, 9.2, 9.5, 9.5, 9.7],
        ),
    ),
    _show(
        id="game-of-thrones",
        title="Game of Thrones",
        aliases=["game of thrones", "got", "game of thrones hbo"],
        premiereYear=2011,
        runtimeBucket="60 min",
        network="HBO",
        genre="Fantasy Drama",
        status="Ended",
        topEpisodeTitle="The Rains of Castamere",
        topEpisodeLead="Peter Dinklage",
        tagline="Winter is coming.",
        heatmap=_heatmap(
            [9.1, 8.8, 8.7, 8.8, 8.8, 9.0, 9.1, 9.0, 9.6, 9.5],
            [8.8, 8.8, 8.8, 8.8, 8.9, 9.0, 9.0, 9.0, 9.6, 9.5],
            [8.9, 8.8, 8.8, 8.9, 8.9, 9.0, 9.0, 9.0, 9.9, 9.5],
            [9.0, 9.1, 8.8, 9.0, 8.9, 9.2, 9.1, 9.7, 9.9, 9.7],
            [8.6, 8.7, 8.7, 8.8, 8.7, 8.9, 9.0, 9.9, 9.1, 9.1],
            [8.9, 9.3, 8.7, 8.7, 9.6, 8.9, 8.8, 8.9, 9.9, 9.9],
            [8.7, 8.8, 9.0, 9.4, 8.9, 9.5, 9.4],
            [7.6, 7.8, 7.7, 5.5, 6.0, 4.1],
        ),
    ),
    _show(
        id="the-office-us",
        title="The Office",
        aliases=["the office", "the office us", "office"],
        premiereYear=2005,
        runtimeBucket="22 min",
        network="NBC",
        genre="Comedy",
        status="Ended",
        topEpisodeTitle="Goodbye, Michael",
        topEpisodeLead="Steve Carell",
        tagline=None,
        heatmap=_heatmap(
            [7.5, 7.7, 7.8, 8.0, 8.0, 8.2],
            [8.3, 8.4, 8.5, 8.7, 8.8, 9.1, 8.5, 8.7, 9.0, 8.8, 9.1, 8.7,
             8.5, 8.7, 8.7, 8.5, 8.6, 8.7, 8.8, 8.7, 8.6, 9.3],
            [8.8, 8.7, 8.6, 8.8, 8.8, 9.0, 8.7, 8.9, 8.7, 8.8, 8.7, 8.6,
             8.6, 8.7, 8.5, 8.6, 8.7, 8.8, 8.8, 8.9, 9.0, 9.1, 9.1],
            [8.8, 8.8, 9.0, 8.8, 8.7, 8.8, 8.9, 8.8, 8.8, 8.9, 9.0, 9.1, 8.8, 9.4],
            [8.5, 8.7, 8.8, 8.8, 8.7, 8.9, 8.9, 8.9, 8.8, 8.6, 8.7, 8.6, 8.6, 8.5,
             8.7, 8.8, 8.8, 8.5, 8.8, 8.6, 8.7, 9.7, 9.7, 9.5, 9.5, 9.1, 9.0, 9.6],
            [8.6, 8.6, 8.5, 8.5, 8.7, 8.7, 8.5, 8.4, 8.4, 8.5, 8.3, 8.5, 8.7, 8.5,
             8.5, 8.5, 8.5, 8.6, 8.6, 8.7, 8.7, 8.7],
            [8.3, 8.2, 8.3, 8.5, 8.4, 8.6, 8.6, 8.6, 8.5, 8.5, 8.7, 8.7, 8.8, 8.8,
             8.8, 9.8, 8.3, 8.2, 8.2, 8.3, 8.4, 8.4, 8.4, 8.5, 8.5, 8.7],
            [7.8, 7.6, 7.7, 7.6, 7.7, 7.7, 7.9, 7.9, 7.9, 7.9, 7.8, 8.0, 8.2, 7.9,
             7.9, 7.9, 8.1, 8.0, 8.0, 8.0, 8.0, 8.0, 8.1, 8.1],
            [8.0, 7.9, 7.8, 8.0, 8.0, 8.2, 8.0, 8.0, 8.1, 8.0, 8.0, 7.9, 8.1, 8.2,
             8.3, 8.4, 8.4, 8.4, 8.6, 8.7, 8.7, 9.8, 9.8],
        ),
    ),
]

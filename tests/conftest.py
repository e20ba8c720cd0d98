"""Shared pytest fixtures for test modules."""

from __future__ import annotations

import pytest

from batting_analysis.domain.game_log import GameLogRow
from batting_analysis.ingest.column_maps import game_log_row
from batting_analysis.players.context import PlayerContext, build_player_context
from tests.helpers import HIGH_PATTERN, LOW_PATTERN, batter_games, game_log_fields

# Two teams, four games; totals are worked out by hand in tests/teams/test_aggregator.py.
TWO_TEAM_GAMES = [
    (
        "20010401", "AAA", "BBB", 5, 3,
        {"ab": 35, "h": 10, "doubles": 2, "triples": 0, "hr": 1, "rbi": 5, "sh": 0, "sf": 1, "hbp": 0, "bb": 3},
        {"ab": 32, "h": 8, "doubles": 1, "triples": 1, "hr": 0, "rbi": 3, "sh": 1, "sf": 0, "hbp": 1, "bb": 2},
    ),
    (
        "20010402", "AAA", "BBB", 2, 4,
        {"ab": 33, "h": 7, "doubles": 1, "triples": 0, "hr": 0, "rbi": 2, "sh": 0, "sf": 0, "hbp": 1, "bb": 2},
        {"ab": 34, "h": 11, "doubles": 2, "triples": 0, "hr": 1, "rbi": 4, "sh": 0, "sf": 1, "hbp": 0, "bb": 4},
    ),
    (
        "20010403", "BBB", "AAA", 6, 1,
        {"ab": 36, "h": 12, "doubles": 3, "triples": 0, "hr": 2, "rbi": 6, "sh": 0, "sf": 0, "hbp": 0, "bb": 5},
        {"ab": 31, "h": 6, "doubles": 0, "triples": 0, "hr": 0, "rbi": 1, "sh": 0, "sf": 0, "hbp": 0, "bb": 1},
    ),
    (
        "20010404", "BBB", "AAA", 0, 3,
        {"ab": 30, "h": 4, "doubles": 0, "triples": 0, "hr": 0, "rbi": 0, "sh": 0, "sf": 0, "hbp": 0, "bb": 2},
        {"ab": 32, "h": 9, "doubles": 1, "triples": 1, "hr": 1, "rbi": 3, "sh": 0, "sf": 1, "hbp": 1, "bb": 3},
    ),
]


@pytest.fixture
def two_team_fields() -> list[list[str]]:
    return [game_log_fields(*game) for game in TWO_TEAM_GAMES]


@pytest.fixture
def two_team_rows(two_team_fields: list[list[str]]) -> list[GameLogRow]:
    return [game_log_row(fields) for fields in two_team_fields]


@pytest.fixture
def batter_context() -> PlayerContext:
    """Three qualified batters with 160 games of 4 at-bats each."""
    events = (
        batter_games("lowbat01", LOW_PATTERN * 20)
        + batter_games("highbat01", HIGH_PATTERN * 20)
        + batter_games("midbat01", [1, 1, 1, 1, 1, 1, 2, 0] * 20)
    )
    return build_player_context(events)

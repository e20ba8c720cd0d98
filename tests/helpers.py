import csv
from collections.abc import Sequence
from pathlib import Path

from batting_analysis.domain.event import EventRow
from batting_analysis.ingest.column_maps import HOME_OFFENSE_START, OFFENSE_FIELDS, VISITING_OFFENSE_START

GAME_LOG_WIDTH = 161

# Per-game hits over 4 at-bats, repeated to 160 games: .1875 and .3125 season averages.
LOW_PATTERN = [0, 1, 2, 1, 0, 2, 0, 0]
HIGH_PATTERN = [1, 2, 1, 0, 2, 1, 1, 2]


def game_log_fields(
    date: str,
    visitor: str,
    home: str,
    visitor_score: int | None,
    home_score: int | None,
    visitor_line: dict[str, int] | None = None,
    home_line: dict[str, int] | None = None,
) -> list[str]:
    """Build one retrosheet game-log row; offensive fields not given are left blank."""
    fields = [""] * GAME_LOG_WIDTH
    fields[0] = date
    fields[3] = visitor
    fields[6] = home
    fields[9] = "" if visitor_score is None else str(visitor_score)
    fields[10] = "" if home_score is None else str(home_score)
    for start, line in ((VISITING_OFFENSE_START, visitor_line or {}), (HOME_OFFENSE_START, home_line or {})):
        for offset, name in enumerate(OFFENSE_FIELDS):
            if name in line:
                fields[start - 1 + offset] = str(line[name])
    return fields


def write_rows(path: Path, rows: Sequence[Sequence[object]]) -> Path:
    with open(path, "w", newline="") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_NONNUMERIC)
        for row in rows:
            writer.writerow(row)
    return path


def event(
    game_id: str,
    player_id: str,
    *,
    event_code: int = 2,
    at_bat: int = 1,
    hit_value: int = 0,
    sacrifice_hit: int = 0,
    sacrifice_fly: int = 0,
) -> EventRow:
    return EventRow(
        game_id=game_id,
        player_id=player_id,
        event_code=event_code,
        at_bat=at_bat,
        hit_value=hit_value,
        sacrifice_hit=sacrifice_hit,
        sacrifice_fly=sacrifice_fly,
    )


def batter_games(player_id: str, hits_per_game: Sequence[int], at_bats_per_game: int = 4) -> list[EventRow]:
    """Events for a batter with a fixed number of at-bats per game and the given hits in each game."""
    rows: list[EventRow] = []
    for game_number, hits in enumerate(hits_per_game):
        game_id = f"G{game_number:04d}"
        for slot in range(at_bats_per_game):
            if slot < hits:
                rows.append(event(game_id, player_id, event_code=20, hit_value=1))
            else:
                rows.append(event(game_id, player_id))
    return rows


def event_fields(row: EventRow) -> list[object]:
    return [
        row.game_id,
        row.player_id,
        row.event_code,
        row.at_bat,
        row.hit_value,
        row.sacrifice_hit,
        row.sacrifice_fly,
    ]


def team_line(index: int) -> dict[str, int]:
    """A per-game batting line that differs by team so OBP and SLG are not collinear."""
    return {
        "ab": 30 + index,
        "h": 7 + (index * 3) % 5,
        "doubles": index % 3,
        "triples": 0,
        "hr": (index * 2) % 3,
        "rbi": 3,
        "sh": 0,
        "sf": 0,
        "hbp": 0,
        "bb": 2 + (index % 2) * 2,
    }


def round_robin_season(season: int, teams: int = 5) -> list[list[str]]:
    rows: list[list[str]] = []
    day = 1
    for v in range(teams):
        for h in range(teams):
            if v == h:
                continue
            rows.append(
                game_log_fields(
                    f"{season}04{day % 28 + 1:02d}",
                    f"T{v}",
                    f"T{h}",
                    3 + v,
                    2 + h,
                    team_line(v),
                    team_line(h),
                )
            )
            day += 1
    return rows

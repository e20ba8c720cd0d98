from collections.abc import Sequence

from batting_analysis.domain.event import EventRow
from batting_analysis.domain.game_log import GameLogRow, OffenseLine

# 1-based retrosheet game-log columns.
DATE_COLUMN = 1
VISITING_TEAM_COLUMN = 4
HOME_TEAM_COLUMN = 7
VISITING_SCORE_COLUMN = 10
HOME_SCORE_COLUMN = 11
VISITING_OFFENSE_START = 22
HOME_OFFENSE_START = 50

# Offensive block order, starting at the block's first column.
OFFENSE_FIELDS = ("ab", "h", "doubles", "triples", "hr", "rbi", "sh", "sf", "hbp", "bb")

GAME_LOG_MIN_COLUMNS = HOME_OFFENSE_START + len(OFFENSE_FIELDS) - 1
EVENT_COLUMNS = 7


class RowFormatError(ValueError):
    """Raised by row mappers; sources attach the file location and re-raise as ParseError."""


def _to_optional_int(value: str, column: int) -> int | None:
    stripped = value.strip()
    if stripped == "":
        return None
    try:
        return int(stripped)
    except ValueError:
        raise RowFormatError(f"column {column}: expected an integer, got {value!r}") from None


def _to_int(value: str, column: int) -> int:
    result = _to_optional_int(value, column)
    if result is None:
        raise RowFormatError(f"column {column}: missing value")
    return result


def _to_bounded_int(value: str, column: int, low: int, high: int) -> int:
    result = _to_int(value, column)
    if not low <= result <= high:
        raise RowFormatError(f"column {column}: expected {low}-{high}, got {result}")
    return result


def _field(row: Sequence[str], column: int) -> str:
    return row[column - 1]


def _offense_line(row: Sequence[str], start: int) -> OffenseLine:
    values = {
        name: _to_optional_int(_field(row, start + offset), start + offset)
        for offset, name in enumerate(OFFENSE_FIELDS)
    }
    return OffenseLine(**values)


def game_log_row(row: Sequence[str]) -> GameLogRow:
    if len(row) < GAME_LOG_MIN_COLUMNS:
        raise RowFormatError(f"expected at least {GAME_LOG_MIN_COLUMNS} columns, got {len(row)}")
    date = _field(row, DATE_COLUMN).strip()
    if len(date) < 4 or not date[:4].isdigit():
        raise RowFormatError(f"column {DATE_COLUMN}: expected a yyyymmdd date, got {date!r}")
    return GameLogRow(
        date=date,
        visiting_team=_field(row, VISITING_TEAM_COLUMN).strip(),
        home_team=_field(row, HOME_TEAM_COLUMN).strip(),
        visiting_score=_to_optional_int(_field(row, VISITING_SCORE_COLUMN), VISITING_SCORE_COLUMN),
        home_score=_to_optional_int(_field(row, HOME_SCORE_COLUMN), HOME_SCORE_COLUMN),
        visiting=_offense_line(row, VISITING_OFFENSE_START),
        home=_offense_line(row, HOME_OFFENSE_START),
    )


def event_row(row: Sequence[str]) -> EventRow:
    if len(row) != EVENT_COLUMNS:
        raise RowFormatError(f"expected {EVENT_COLUMNS} columns, got {len(row)}")
    return EventRow(
        game_id=row[0].strip(),
        player_id=row[1].strip(),
        event_code=_to_int(row[2], 3),
        at_bat=_to_bounded_int(row[3], 4, 0, 1),
        hit_value=_to_bounded_int(row[4], 5, 0, 4),
        sacrifice_hit=_to_bounded_int(row[5], 6, 0, 1),
        sacrifice_fly=_to_bounded_int(row[6], 7, 0, 1),
    )

import csv
import logging
import re
from collections.abc import Callable
from pathlib import Path
from typing import Generic, TypeVar

from batting_analysis.domain.event import EventRow
from batting_analysis.domain.game_log import GameLogRow
from batting_analysis.exceptions import ParseError
from batting_analysis.ingest.column_maps import RowFormatError, event_row, game_log_row

logger = logging.getLogger(__name__)

_GAME_LOG_NAME = re.compile(r"^GL(\d{4})\.TXT$", re.IGNORECASE)

T = TypeVar("T")


class HeaderlessCsvSource(Generic[T]):
    """Reads a header-less CSV file, mapping each non-blank row to a record."""

    def __init__(self, path: str | Path, mapper: Callable[[list[str]], T], source_type: str) -> None:
        self._path = Path(path)
        self._mapper = mapper
        self._source_type = source_type

    @property
    def source_type(self) -> str:
        return self._source_type

    @property
    def source_detail(self) -> str:
        return str(self._path)

    def fetch(self, encoding: str = "utf-8") -> list[T]:
        logger.debug("Reading %s file %s", self._source_type, self._path)
        records: list[T] = []
        line_number = 0
        try:
            with open(self._path, encoding=encoding, newline="") as f:
                for line_number, row in enumerate(csv.reader(f), start=1):
                    if not row or all(field.strip() == "" for field in row):
                        continue
                    try:
                        records.append(self._mapper(row))
                    except RowFormatError as err:
                        raise ParseError(str(err), self._path, line_number) from err
        except OSError as err:
            raise ParseError(f"cannot read file: {err.strerror}", self._path) from err
        except UnicodeDecodeError as err:
            raise ParseError(f"not valid {encoding} text: {err.reason}", self._path) from err
        except csv.Error as err:
            raise ParseError(f"malformed CSV: {err}", self._path, line_number + 1) from err
        logger.debug("Read %d rows from %s", len(records), self._path)
        return records


def game_log_source(path: str | Path) -> HeaderlessCsvSource[GameLogRow]:
    return HeaderlessCsvSource(path, game_log_row, "game_log")


def event_source(path: str | Path) -> HeaderlessCsvSource[EventRow]:
    return HeaderlessCsvSource(path, event_row, "events")


def find_game_logs(directory: str | Path) -> dict[int, Path]:
    """Map season to ``GL<year>.TXT`` file found in ``directory``."""
    root = Path(directory)
    if not root.is_dir():
        raise ParseError("game log directory not found", root)
    found: dict[int, Path] = {}
    for path in sorted(root.iterdir()):
        match = _GAME_LOG_NAME.match(path.name)
        if match and path.is_file():
            found[int(match.group(1))] = path
    return found


def load_season_logs(directory: str | Path, first: int, last: int) -> dict[int, list[GameLogRow]]:
    """Load every yearly game log between ``first`` and ``last`` inclusive, ordered by season."""
    available = find_game_logs(directory)
    seasons: dict[int, list[GameLogRow]] = {}
    for season in range(first, last + 1):
        path = available.get(season)
        if path is None:
            logger.warning("No game log for %d in %s", season, directory)
            continue
        seasons[season] = game_log_source(path).fetch()
    logger.info("Loaded %d seasons of game logs from %s", len(seasons), directory)
    return seasons

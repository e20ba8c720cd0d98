import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from batting_analysis.domain.event import EventRow
from batting_analysis.exceptions import MissingValueError
from batting_analysis.players.averages import DEFAULT_GAMES, DEFAULT_PA_PER_GAME, season_batting_averages

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerContext:
    """Event rows grouped by player and game, plus the qualified season averages."""

    games_by_player: Mapping[str, Mapping[str, tuple[EventRow, ...]]]
    averages: Mapping[str, float]

    def games_for(self, player_id: str) -> Mapping[str, tuple[EventRow, ...]]:
        games = self.games_by_player.get(player_id)
        if not games:
            raise MissingValueError(f"no events for player {player_id!r}")
        return games

    def season_average(self, player_id: str) -> float:
        avg = self.averages.get(player_id)
        if avg is None:
            raise MissingValueError(f"player {player_id!r} has no qualified season average")
        return avg

    @property
    def eligible_players(self) -> list[str]:
        return sorted(self.averages)


def group_events(events: Iterable[EventRow]) -> dict[str, dict[str, tuple[EventRow, ...]]]:
    grouped: dict[str, dict[str, list[EventRow]]] = defaultdict(lambda: defaultdict(list))
    for event in events:
        grouped[event.player_id][event.game_id].append(event)
    return {
        player_id: {game_id: tuple(rows) for game_id, rows in games.items()}
        for player_id, games in grouped.items()
    }


def build_player_context(
    events: Iterable[EventRow],
    games: int = DEFAULT_GAMES,
    pa_per_game: float = DEFAULT_PA_PER_GAME,
) -> PlayerContext:
    events = list(events)
    context = PlayerContext(
        games_by_player=group_events(events),
        averages=season_batting_averages(events, games, pa_per_game),
    )
    logger.debug("Built player context: %d players, %d qualified", len(context.games_by_player), len(context.averages))
    return context


def nearest_player(averages: Mapping[str, float], target: float) -> str:
    """Player whose average is closest to ``target``; ties go to the lowest player id."""
    if not averages:
        raise MissingValueError("no qualified players to match against")
    return min(sorted(averages), key=lambda player_id: abs(averages[player_id] - target))

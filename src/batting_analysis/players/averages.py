import logging
import math
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from batting_analysis.domain.event import EventRow

logger = logging.getLogger(__name__)

DEFAULT_GAMES = 162
DEFAULT_PA_PER_GAME = 3.1


@dataclass
class BatterTally:
    h: int = 0
    ab: int = 0
    sf: int = 0
    sh: int = 0
    non_ab_pa: int = 0
    games: set[str] = field(default_factory=set)

    @property
    def pa(self) -> int:
        return self.ab + self.sf + self.sh + self.non_ab_pa

    def add(self, event: EventRow) -> None:
        self.h += int(event.is_hit)
        self.ab += event.at_bat
        self.sf += event.sacrifice_fly
        self.sh += event.sacrifice_hit
        self.non_ab_pa += int(event.is_non_at_bat_appearance)
        self.games.add(event.game_id)


def tally_batters(events: Iterable[EventRow]) -> dict[str, BatterTally]:
    tallies: dict[str, BatterTally] = defaultdict(BatterTally)
    for event in events:
        tallies[event.player_id].add(event)
    return dict(tallies)


def eligibility_threshold(games: int = DEFAULT_GAMES, pa_per_game: float = DEFAULT_PA_PER_GAME) -> int:
    """Minimum plate appearances for a qualifying average: ``floor(pa_per_game * games)``."""
    return math.floor(Decimal(str(pa_per_game)) * games)


def qualified_average(tally: BatterTally, threshold: int) -> float | None:
    if tally.pa < threshold or tally.ab == 0:
        return None
    return round(tally.h / tally.ab, 3)


def season_batting_averages(
    events: Iterable[EventRow],
    games: int = DEFAULT_GAMES,
    pa_per_game: float = DEFAULT_PA_PER_GAME,
) -> dict[str, float]:
    """Season batting average per player; players short of the plate-appearance threshold are left out."""
    threshold = eligibility_threshold(games, pa_per_game)
    averages: dict[str, float] = {}
    tallies = tally_batters(events)
    for player_id in sorted(tallies):
        avg = qualified_average(tallies[player_id], threshold)
        if avg is not None:
            averages[player_id] = avg
    logger.info("%d of %d batters reached %d plate appearances", len(averages), len(tallies), threshold)
    return averages

import logging
import math
import random
import warnings
from collections.abc import Iterable

from batting_analysis.domain.event import EventRow
from batting_analysis.domain.simulation import GameSample
from batting_analysis.exceptions import InsufficientGamesWarning
from batting_analysis.players.context import PlayerContext

logger = logging.getLogger(__name__)


def game_batting(rows: Iterable[EventRow]) -> tuple[int, int]:
    """Hits and at-bats in one game's plate appearances."""
    hits = 0
    at_bats = 0
    for row in rows:
        hits += int(row.is_hit)
        at_bats += row.at_bat
    return hits, at_bats


def sample_games(context: PlayerContext, player_id: str, n: int, rng: random.Random) -> GameSample:
    """Draw ``n`` of a player's games at random and tally each one.

    Games are drawn without replacement unless the player appeared in fewer
    than ``n`` games, in which case they are drawn with replacement and an
    ``InsufficientGamesWarning`` is issued.
    """
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")
    games = context.games_for(player_id)
    game_ids = sorted(games)
    with_replacement = n > len(game_ids)
    if with_replacement:
        logger.debug("%s played %d games, sampling %d with replacement", player_id, len(game_ids), n)
        warnings.warn(
            f"{player_id} played {len(game_ids)} games; sampling {n} with replacement",
            InsufficientGamesWarning,
            stacklevel=2,
        )
        chosen = rng.choices(game_ids, k=n)
    else:
        chosen = rng.sample(game_ids, n)
    pairs = tuple(game_batting(games[game_id]) for game_id in chosen)
    return GameSample(player_id=player_id, pairs=pairs, with_replacement=with_replacement)


def sample_ratio(lo: GameSample, hi: GameSample) -> float | None:
    """``lo`` sample average over ``hi`` sample average; ``None`` if either sample has no at-bats."""
    if lo.at_bats == 0 or hi.at_bats == 0:
        return None
    # Cross-multiplied so equal averages give exactly 1.0.
    if lo.hits * hi.at_bats == hi.hits * lo.at_bats:
        return 1.0
    if hi.hits == 0:
        return math.inf
    return (lo.hits / lo.at_bats) / (hi.hits / hi.at_bats)


def compare_batters(
    context: PlayerContext,
    lo_player: str,
    hi_player: str,
    n: int,
    rng: random.Random,
) -> float | None:
    """Compare ``n``-game samples of two batters.

    Below 1.0 the sample ranks the batters correctly, above 1.0 it is
    misleading and exactly 1.0 is a tie.
    """
    lo = sample_games(context, lo_player, n, rng)
    hi = sample_games(context, hi_player, n, rng)
    return sample_ratio(lo, hi)

import logging
import math
import random
import warnings
from collections.abc import Sequence
from numbers import Real
from typing import TypeAlias

from scipy import stats

from batting_analysis.domain.simulation import DifferencePoint, SimulationResult, TrendLine
from batting_analysis.exceptions import InsufficientGamesWarning, MissingValueError
from batting_analysis.players.context import PlayerContext, nearest_player
from batting_analysis.simulation.sampling import compare_batters

logger = logging.getLogger(__name__)

PlayerTarget: TypeAlias = str | float


def resolve_player(context: PlayerContext, target: PlayerTarget) -> str:
    """A player id resolves to itself; a number resolves to the nearest qualified average."""
    if isinstance(target, str):
        context.season_average(target)
        return target
    if isinstance(target, Real):
        if not math.isfinite(target):
            raise ValueError(f"target average must be finite, got {target}")
        return nearest_player(context.averages, float(target))
    raise TypeError(f"target must be a player id or an average, got {type(target).__name__}")


def simulate(
    context: PlayerContext,
    lo_target: PlayerTarget,
    hi_target: PlayerTarget,
    games_per_sample: int,
    trials: int,
    rng: random.Random,
) -> SimulationResult:
    """Estimate how often ``games_per_sample`` games rank two batters by their true averages."""
    if trials < 1:
        raise ValueError(f"trials must be >= 1, got {trials}")
    lo_player = resolve_player(context, lo_target)
    hi_player = resolve_player(context, hi_target)
    if lo_player == hi_player:
        logger.warning("Both targets resolve to %s; every trial is a tie", lo_player)
    elif context.season_average(lo_player) > context.season_average(hi_player):
        logger.warning(
            "%s (%.3f) has a higher season average than %s (%.3f); success rate counts the reversed ranking",
            lo_player, context.season_average(lo_player), hi_player, context.season_average(hi_player),
        )
    oversampled = any(
        games_per_sample > len(context.games_for(player_id)) for player_id in (lo_player, hi_player)
    )
    successes = 0
    # One warning for the whole run rather than one per trial.
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", InsufficientGamesWarning)
        for _ in range(trials):
            ratio = compare_batters(context, lo_player, hi_player, games_per_sample, rng)
            if ratio is not None and ratio < 1.0:
                successes += 1
    if oversampled:
        warnings.warn(
            f"{games_per_sample}-game samples exceed games played by {lo_player} or {hi_player}",
            InsufficientGamesWarning,
            stacklevel=2,
        )
    result = SimulationResult(
        lo_player=lo_player,
        hi_player=hi_player,
        lo_average=context.season_average(lo_player),
        hi_average=context.season_average(hi_player),
        games_per_sample=games_per_sample,
        trials=trials,
        successes=successes,
        oversampled=oversampled,
    )
    logger.debug(
        "%s (%.3f) vs %s (%.3f): %d/%d correct",
        lo_player, result.lo_average, hi_player, result.hi_average, successes, trials,
    )
    return result


def difference_relation(
    context: PlayerContext,
    games_per_sample: int,
    trials: int,
    points: int,
    rng: random.Random,
) -> list[DifferencePoint]:
    """Simulate ``points`` random pairs of distinct qualified batters.

    Each pair is ordered so the lower true average is ``lo``, and records the
    gap in true averages against the simulated success rate.
    """
    players = context.eligible_players
    if len(players) < 2:
        raise MissingValueError(f"need at least 2 qualified players, found {len(players)}")
    relation: list[DifferencePoint] = []
    for _ in range(points):
        first, second = rng.sample(players, 2)
        lo, hi = sorted((first, second), key=lambda p: (context.season_average(p), p))
        result = simulate(context, lo, hi, games_per_sample, trials, rng)
        relation.append(
            DifferencePoint(
                lo_player=lo,
                hi_player=hi,
                difference=round(result.difference, 3),
                success_rate=result.success_rate,
            )
        )
    logger.info("Simulated %d player pairs at %d games per sample", len(relation), games_per_sample)
    return relation


def fit_trend(points: Sequence[DifferencePoint]) -> TrendLine:
    """Least-squares line of success rate against difference in true average."""
    if len(points) < 2:
        raise ValueError(f"need at least 2 points to fit a trend, got {len(points)}")
    differences = [p.difference for p in points]
    if len(set(differences)) == 1:
        raise ValueError("cannot fit a trend when every difference is identical")
    fit = stats.linregress(differences, [p.success_rate for p in points])
    return TrendLine(slope=float(fit.slope), intercept=float(fit.intercept), r_value=float(fit.rvalue))

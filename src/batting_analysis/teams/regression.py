import logging
from collections.abc import Iterable, Mapping, Sequence

import numpy as np
import numpy.typing as npt

from batting_analysis.domain.team_season import RegressionCoefficients, TeamSeasonStat
from batting_analysis.exceptions import SingularMatrixError

logger = logging.getLogger(__name__)

_N_COEFFICIENTS = 3


def design_matrix(stats: Iterable[TeamSeasonStat]) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """Build ``X = [1, OBP, SLG]`` and ``y = runs``, skipping teams with a missing OBP or SLG."""
    rows: list[tuple[float, float, float]] = []
    runs: list[float] = []
    for stat in stats:
        if stat.obp is None or stat.slg is None:
            logger.debug("Skipping %s %d: missing OBP or SLG", stat.team_id, stat.season)
            continue
        rows.append((1.0, stat.obp, stat.slg))
        runs.append(float(stat.runs))
    x = np.array(rows, dtype=np.float64).reshape(-1, _N_COEFFICIENTS)
    y = np.array(runs, dtype=np.float64)
    return x, y


def solve_normal_equations(x: npt.NDArray[np.float64], y: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Solve ``(XᵗX) β = Xᵗy`` for the least-squares coefficients."""
    xtx = x.T @ x
    xty = x.T @ y
    if not np.all(np.isfinite(xtx)) or np.linalg.matrix_rank(xtx) < xtx.shape[0]:
        raise SingularMatrixError(
            f"XᵗX is singular for {x.shape[0]} rows; need at least {x.shape[1]} rows with non-collinear predictors"
        )
    try:
        beta = np.linalg.solve(xtx, xty)
    except np.linalg.LinAlgError as err:
        raise SingularMatrixError(str(err)) from err
    if not np.all(np.isfinite(beta)):
        raise SingularMatrixError("normal equations produced non-finite coefficients")
    return beta


def estimate_run_coefficients(stats: Iterable[TeamSeasonStat]) -> RegressionCoefficients:
    x, y = design_matrix(stats)
    beta = solve_normal_equations(x, y)
    intercept, obp, slg = (round(float(b), 2) for b in beta)
    return RegressionCoefficients(intercept=intercept, obp=obp, slg=slg)


def coefficient_series(seasons: Mapping[int, Sequence[TeamSeasonStat]]) -> dict[int, RegressionCoefficients]:
    """Fit runs ~ OBP + SLG separately for each season, ordered by season."""
    series: dict[int, RegressionCoefficients] = {}
    for season in sorted(seasons):
        try:
            series[season] = estimate_run_coefficients(seasons[season])
        except SingularMatrixError as err:
            raise SingularMatrixError(f"season {season}: {err}") from err
    logger.info("Fitted run coefficients for %d seasons", len(series))
    return series

import logging
from collections.abc import Mapping

import numpy as np

from batting_analysis.domain.team_season import DecadeSummary, RegressionCoefficients

logger = logging.getLogger(__name__)

BASE_YEAR = 1900


def coefficient_ratios(series: Mapping[int, RegressionCoefficients]) -> dict[int, float | None]:
    return {season: coefficients.obp_slg_ratio for season, coefficients in series.items()}


def decade_bounds(index: int) -> tuple[int, int]:
    """Half-open season range ``[1900 + 10i, 1910 + 10i)`` of bucket ``index``."""
    return BASE_YEAR + 10 * index, BASE_YEAR + 10 + 10 * index


def summarize(values: list[float], start: int, stop: int) -> DecadeSummary:
    if not values:
        return DecadeSummary(start=start, stop=stop, count=0)
    data = np.array(values, dtype=np.float64)
    q1, median, q3 = np.percentile(data, [25, 50, 75])
    variance = round(float(np.var(data, ddof=1)), 3) if data.size > 1 else None
    return DecadeSummary(
        start=start,
        stop=stop,
        count=int(data.size),
        minimum=round(float(data.min()), 3),
        q1=round(float(q1), 3),
        median=round(float(median), 3),
        mean=round(float(data.mean()), 3),
        q3=round(float(q3), 3),
        maximum=round(float(data.max()), 3),
        variance=variance,
    )


def summarize_decades(ratios: Mapping[int, float | None], buckets: int = 10) -> list[DecadeSummary]:
    """Summarise OBP/SLG coefficient ratios for decade buckets ``1..buckets``.

    Missing ratios are dropped; seasons before 1910 fall in no bucket.
    """
    summaries: list[DecadeSummary] = []
    for index in range(1, buckets + 1):
        start, stop = decade_bounds(index)
        values = [r for season, r in sorted(ratios.items()) if start <= season < stop and r is not None]
        if not values:
            logger.debug("No ratios for %d-%d", start, stop - 1)
        summaries.append(summarize(values, start, stop))
    return summaries

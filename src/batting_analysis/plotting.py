import logging
from collections.abc import Sequence
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from batting_analysis.domain.simulation import DifferencePoint, TrendLine  # noqa: E402

logger = logging.getLogger(__name__)


def plot_difference_relation(
    points: Sequence[DifferencePoint],
    trend: TrendLine | None,
    path: str | Path,
    games_per_sample: int | None = None,
) -> Path:
    """Scatter true-average difference against success rate and draw the fitted line."""
    path = Path(path)
    differences = [p.difference for p in points]
    rates = [p.success_rate for p in points]

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.scatter(differences, rates, alpha=0.6, label="player pairs")
    if trend is not None and differences:
        lo, hi = min(differences), max(differences)
        ax.plot(
            [lo, hi],
            [trend.predict(lo), trend.predict(hi)],
            color="red",
            linewidth=2,
            label=f"fit: {trend.intercept:.3f} + {trend.slope:.3f}x (r={trend.r_value:.2f})",
        )
    ax.axhline(0.5, color="black", linestyle="--", linewidth=0.8)
    ax.set_xlabel("Difference in season batting average", fontsize=11)
    ax.set_ylabel("P(sample ranks batters correctly)", fontsize=11)
    title = "Detectability of batting-average gaps"
    if games_per_sample is not None:
        title += f" ({games_per_sample} games observed)"
    ax.set_title(title, fontsize=12, fontweight="bold")
    ax.legend(fontsize=9, loc="best")
    ax.grid(alpha=0.3)

    fig.tight_layout()
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    logger.info("Saved plot to %s", path)
    return path

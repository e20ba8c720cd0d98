from collections.abc import Iterable, Mapping, Sequence

from rich.console import Console
from rich.table import Table

from batting_analysis.domain.simulation import DifferencePoint, SimulationResult, TrendLine
from batting_analysis.domain.team_season import DecadeSummary, RegressionCoefficients, TeamSeasonStat

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

MISSING = "NA"


def _fmt(value: float | None, places: int = 3) -> str:
    return MISSING if value is None else f"{value:.{places}f}"


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def print_team_seasons(stats: Iterable[TeamSeasonStat]) -> None:
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Team")
    for name in ("G", "W", "R", "RBI", "AVG", "OBP", "SLG"):
        table.add_column(name, justify="right")
    for s in stats:
        table.add_row(
            s.team_id, str(s.games), str(s.wins), str(s.runs), str(s.rbi), _fmt(s.avg), _fmt(s.obp), _fmt(s.slg)
        )
    console.print(table)


def print_coefficient_series(series: Mapping[int, RegressionCoefficients]) -> None:
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Season")
    table.add_column("Intercept", justify="right")
    table.add_column("OBP", justify="right")
    table.add_column("SLG", justify="right")
    table.add_column("OBP/SLG", justify="right")
    for season, c in series.items():
        table.add_row(str(season), _fmt(c.intercept, 2), _fmt(c.obp, 2), _fmt(c.slg, 2), _fmt(c.obp_slg_ratio))
    console.print(table)


def print_decade_summaries(summaries: Sequence[DecadeSummary]) -> None:
    table = Table(title="OBP/SLG coefficient ratio by decade", show_edge=False, pad_edge=False)
    table.add_column("Decade")
    for name in ("N", "Min", "Q1", "Median", "Mean", "Q3", "Max", "Var"):
        table.add_column(name, justify="right")
    for d in summaries:
        table.add_row(
            d.label,
            str(d.count),
            _fmt(d.minimum),
            _fmt(d.q1),
            _fmt(d.median),
            _fmt(d.mean),
            _fmt(d.q3),
            _fmt(d.maximum),
            _fmt(d.variance),
        )
    console.print(table)


def print_batting_averages(averages: Mapping[str, float], top: int | None = None) -> None:
    ranked = sorted(averages.items(), key=lambda item: (-item[1], item[0]))
    if top is not None:
        ranked = ranked[:top]
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Player")
    table.add_column("AVG", justify="right")
    for rank, (player_id, avg) in enumerate(ranked, start=1):
        table.add_row(str(rank), player_id, _fmt(avg))
    console.print(table)
    console.print(f"  {len(averages)} qualified batters")


def print_simulation_result(result: SimulationResult) -> None:
    console.print(
        f"[bold]{result.lo_player}[/bold] ({_fmt(result.lo_average)}) vs "
        f"[bold]{result.hi_player}[/bold] ({_fmt(result.hi_average)})"
    )
    console.print(f"  Games per sample: {result.games_per_sample}")
    console.print(f"  Trials: {result.trials}")
    console.print(f"  Correct ranking: [bold green]{result.success_rate:.3f}[/bold green]")
    if result.oversampled:
        console.print("  [yellow]Sampled with replacement: a batter played fewer games than requested[/yellow]")


def print_difference_relation(points: Sequence[DifferencePoint], trend: TrendLine | None) -> None:
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Low")
    table.add_column("High")
    table.add_column("Diff", justify="right")
    table.add_column("P(correct)", justify="right")
    for p in sorted(points, key=lambda p: p.difference):
        table.add_row(p.lo_player, p.hi_player, _fmt(p.difference), _fmt(p.success_rate))
    console.print(table)
    if trend is not None:
        console.print(
            f"  Trend: P(correct) = {trend.intercept:.3f} + {trend.slope:.3f} * diff (r = {trend.r_value:.3f})"
        )

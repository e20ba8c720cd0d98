import math
import random
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer

from batting_analysis.cli._logging import configure_logging
from batting_analysis.cli._output import (
    print_batting_averages,
    print_coefficient_series,
    print_decade_summaries,
    print_difference_relation,
    print_error,
    print_simulation_result,
    print_team_seasons,
)
from batting_analysis.config import AnalysisSettings, build_overrides, create_config, load_analysis_settings
from batting_analysis.domain.team_season import RegressionCoefficients
from batting_analysis.exceptions import BattingAnalysisError
from batting_analysis.ingest.csv_source import event_source, game_log_source, load_season_logs
from batting_analysis.players.context import PlayerContext, build_player_context
from batting_analysis.players.averages import season_batting_averages
from batting_analysis.simulation.monte_carlo import PlayerTarget, difference_relation, fit_trend, simulate
from batting_analysis.teams.aggregator import aggregate_team_seasons
from batting_analysis.teams.regression import coefficient_series
from batting_analysis.teams.trend import coefficient_ratios, summarize_decades

app = typer.Typer(name="batting", help="Batting analysis: run-scoring regressions and sampling simulations.")

_ConfigOpt = Annotated[Path, typer.Option("--config", help="YAML config file")]
_GamesPerSampleOpt = Annotated[int | None, typer.Option("--games-per-sample", "-n", help="Games observed per batter")]
_TrialsOpt = Annotated[int | None, typer.Option("--trials", help="Monte Carlo trials per comparison")]
_SeedOpt = Annotated[int | None, typer.Option("--seed", help="Random seed for reproducibility")]
_EventsOpt = Annotated[Path | None, typer.Option("--events", help="Event extract CSV (overrides config)")]
_LogsDirOpt = Annotated[Path | None, typer.Option("--game-logs", help="Directory of GL<year>.TXT files")]
_FirstOpt = Annotated[int | None, typer.Option("--first", help="First season")]
_LastOpt = Annotated[int | None, typer.Option("--last", help="Last season")]


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    config: _ConfigOpt = Path("batting.yaml"),
) -> None:
    """Batting analysis: run-scoring regressions and sampling simulations."""
    configure_logging(verbose=verbose)
    ctx.obj = config
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


@contextmanager
def _handle_errors() -> Iterator[None]:
    try:
        yield
    except BattingAnalysisError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _settings(ctx: typer.Context, **overrides: object) -> AnalysisSettings:
    yaml_path = ctx.obj if isinstance(ctx.obj, Path) else Path("batting.yaml")
    cfg = create_config(yaml_path=str(yaml_path), overrides=build_overrides(**overrides))
    return load_analysis_settings(cfg)


def _parse_target(raw: str) -> PlayerTarget:
    """A numeric argument is a target average, anything else a player id."""
    try:
        target = float(raw)
    except ValueError:
        return raw
    # "nan" and "inf" parse as floats but match no average.
    return target if math.isfinite(target) else raw


def _rng(seed: int | None) -> random.Random:
    return random.Random(seed)


def _load_context(settings: AnalysisSettings) -> PlayerContext:
    events = event_source(settings.events_file).fetch()
    return build_player_context(events, settings.games, settings.pa_per_game)


def _season_coefficients(settings: AnalysisSettings) -> dict[int, RegressionCoefficients]:
    logs = load_season_logs(settings.game_logs_dir, settings.first_season, settings.last_season)
    seasons = {season: list(aggregate_team_seasons(rows).values()) for season, rows in logs.items()}
    return coefficient_series(seasons)


@app.command()
def teams(season_file: Annotated[Path, typer.Argument(help="Retrosheet game log for one season")]) -> None:
    """Aggregate one season's game log into team OBP, SLG and runs."""
    with _handle_errors():
        stats = aggregate_team_seasons(game_log_source(season_file).fetch())
    print_team_seasons(stats.values())


@app.command()
def regress(
    ctx: typer.Context,
    game_logs: _LogsDirOpt = None,
    first: _FirstOpt = None,
    last: _LastOpt = None,
) -> None:
    """Fit runs ~ OBP + SLG for every season."""
    with _handle_errors():
        settings = _settings(ctx, data__game_logs_dir=game_logs, seasons__first=first, seasons__last=last)
        series = _season_coefficients(settings)
    print_coefficient_series(series)


@app.command()
def trend(
    ctx: typer.Context,
    game_logs: _LogsDirOpt = None,
    first: _FirstOpt = None,
    last: _LastOpt = None,
    buckets: Annotated[int | None, typer.Option("--buckets", help="Number of decades from 1910")] = None,
) -> None:
    """Summarise the OBP/SLG coefficient ratio by decade."""
    with _handle_errors():
        settings = _settings(
            ctx,
            data__game_logs_dir=game_logs,
            seasons__first=first,
            seasons__last=last,
            seasons__decade_buckets=buckets,
        )
        series = _season_coefficients(settings)
        summaries = summarize_decades(coefficient_ratios(series), settings.decade_buckets)
    print_decade_summaries(summaries)


@app.command()
def averages(
    ctx: typer.Context,
    events: _EventsOpt = None,
    games: Annotated[int | None, typer.Option("--games", help="Games in the season")] = None,
    top: Annotated[int | None, typer.Option("--top", help="Only show the top N batters")] = None,
) -> None:
    """List qualified season batting averages."""
    with _handle_errors():
        settings = _settings(ctx, data__events_file=events, eligibility__games=games)
        rows = event_source(settings.events_file).fetch()
        result = season_batting_averages(rows, settings.games, settings.pa_per_game)
    print_batting_averages(result, top)


@app.command(name="simulate")
def simulate_cmd(
    ctx: typer.Context,
    lo: Annotated[str, typer.Argument(help="Lower batter: player id or target average")],
    hi: Annotated[str, typer.Argument(help="Higher batter: player id or target average")],
    events: _EventsOpt = None,
    games_per_sample: _GamesPerSampleOpt = None,
    trials: _TrialsOpt = None,
    seed: _SeedOpt = None,
) -> None:
    """Estimate how often a sample of games ranks two batters correctly."""
    with _handle_errors():
        settings = _settings(
            ctx,
            data__events_file=events,
            simulation__games_per_sample=games_per_sample,
            simulation__trials=trials,
            simulation__seed=seed,
        )
        context = _load_context(settings)
        result = simulate(
            context,
            _parse_target(lo),
            _parse_target(hi),
            settings.games_per_sample,
            settings.trials,
            _rng(settings.seed),
        )
    print_simulation_result(result)


@app.command()
def relation(
    ctx: typer.Context,
    events: _EventsOpt = None,
    games_per_sample: _GamesPerSampleOpt = None,
    trials: _TrialsOpt = None,
    points: Annotated[int | None, typer.Option("--points", help="Number of random batter pairs")] = None,
    seed: _SeedOpt = None,
    plot: Annotated[Path | None, typer.Option("--plot", help="Write a scatter plot PNG here")] = None,
) -> None:
    """Relate the gap in true averages to how often samples detect it."""
    with _handle_errors():
        settings = _settings(
            ctx,
            data__events_file=events,
            simulation__games_per_sample=games_per_sample,
            simulation__trials=trials,
            simulation__points=points,
            simulation__seed=seed,
        )
        context = _load_context(settings)
        relation_points = difference_relation(
            context, settings.games_per_sample, settings.trials, settings.points, _rng(settings.seed)
        )
    try:
        line = fit_trend(relation_points)
    except ValueError as e:
        print_error(f"cannot fit trend: {e}")
        line = None
    print_difference_relation(relation_points, line)
    if plot is not None:
        from batting_analysis.plotting import plot_difference_relation

        plot_difference_relation(relation_points, line, plot, settings.games_per_sample)

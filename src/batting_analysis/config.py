from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from batting_analysis.exceptions import ConfigError

_DEFAULTS: dict[str, object] = {
    "data": {
        "game_logs_dir": "data/gamelogs",
        "events_file": "data/events.csv",
    },
    "seasons": {
        "first": 1900,
        "last": 2009,
        "decade_buckets": 10,
    },
    "eligibility": {
        "games": 162,
        "pa_per_game": 3.1,
    },
    "simulation": {
        "games_per_sample": 20,
        "trials": 1000,
        "points": 50,
        "seed": None,
    },
}


@dataclass(frozen=True)
class AnalysisSettings:
    game_logs_dir: Path
    events_file: Path
    first_season: int
    last_season: int
    decade_buckets: int
    games: int
    pa_per_game: float
    games_per_sample: int
    trials: int
    points: int
    seed: int | None = None


def create_config(
    yaml_path: str = "batting.yaml",
    env_prefix: str = "BATTING",
    defaults: dict[str, object] | None = None,
    *,
    overrides: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file.
        env_prefix: Prefix for environment variables, e.g. ``BATTING__SIMULATION__TRIALS``.
        defaults: Default configuration values.
        overrides: Nested dict of values that win over every other layer (CLI options).
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if overrides:
        layers.insert(0, config_from_dict(overrides))

    return ConfigurationSet(*layers)


def build_overrides(**values: object) -> dict[str, object]:
    """Turn ``section__key=value`` keyword arguments into a nested override dict, skipping ``None``."""
    overrides: dict[str, dict[str, object]] = {}
    for name, value in values.items():
        if value is None:
            continue
        section, _, key = name.partition("__")
        overrides.setdefault(section, {})[key] = value
    return dict(overrides)


def _as_int(cfg: ConfigurationSet, key: str) -> int:
    raw = cfg[key]
    try:
        return int(str(raw))
    except ValueError as err:
        raise ConfigError(f"'{key}' must be an integer, got {raw!r}") from err


def _as_float(cfg: ConfigurationSet, key: str) -> float:
    raw = cfg[key]
    try:
        return float(str(raw))
    except ValueError as err:
        raise ConfigError(f"'{key}' must be a number, got {raw!r}") from err


def _as_optional_int(cfg: ConfigurationSet, key: str) -> int | None:
    raw = cfg.get(key)
    if raw is None or str(raw).strip().lower() in ("", "none", "null"):
        return None
    return _as_int(cfg, key)


def load_analysis_settings(cfg: ConfigurationSet | None = None) -> AnalysisSettings:
    if cfg is None:
        cfg = create_config()
    settings = AnalysisSettings(
        game_logs_dir=Path(str(cfg["data.game_logs_dir"])).expanduser(),
        events_file=Path(str(cfg["data.events_file"])).expanduser(),
        first_season=_as_int(cfg, "seasons.first"),
        last_season=_as_int(cfg, "seasons.last"),
        decade_buckets=_as_int(cfg, "seasons.decade_buckets"),
        games=_as_int(cfg, "eligibility.games"),
        pa_per_game=_as_float(cfg, "eligibility.pa_per_game"),
        games_per_sample=_as_int(cfg, "simulation.games_per_sample"),
        trials=_as_int(cfg, "simulation.trials"),
        points=_as_int(cfg, "simulation.points"),
        seed=_as_optional_int(cfg, "simulation.seed"),
    )
    validate_settings(settings)
    return settings


def validate_settings(settings: AnalysisSettings) -> None:
    if settings.first_season > settings.last_season:
        raise ConfigError(
            f"seasons.first ({settings.first_season}) must not be after seasons.last ({settings.last_season})"
        )
    if settings.games <= 0:
        raise ConfigError(f"eligibility.games must be > 0, got {settings.games}")
    if settings.pa_per_game < 0:
        raise ConfigError(f"eligibility.pa_per_game must be >= 0, got {settings.pa_per_game}")
    for name in ("games_per_sample", "trials", "points"):
        value = getattr(settings, name)
        if value <= 0:
            raise ConfigError(f"simulation.{name} must be > 0, got {value}")

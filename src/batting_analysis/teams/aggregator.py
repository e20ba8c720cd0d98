import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, fields

from batting_analysis.domain.game_log import GameLogRow, OffenseLine
from batting_analysis.domain.team_season import TeamSeasonStat

logger = logging.getLogger(__name__)

_SUMMED = ("ab", "h", "doubles", "triples", "hr", "rbi", "sf", "hbp", "bb")


@dataclass
class _TeamTotals:
    games: int = 0
    wins: int = 0
    runs: int = 0
    ab: int = 0
    h: int = 0
    doubles: int = 0
    triples: int = 0
    hr: int = 0
    rbi: int = 0
    sf: int = 0
    hbp: int = 0
    bb: int = 0

    def add_side(self, line: OffenseLine, score: int | None, won: bool) -> None:
        self.games += 1
        self.wins += int(won)
        self.runs += score or 0
        for name in _SUMMED:
            setattr(self, name, getattr(self, name) + (getattr(line, name) or 0))

    def __add__(self, other: "_TeamTotals") -> "_TeamTotals":
        return _TeamTotals(**{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)})


def _ratio(numerator: int, denominator: int) -> float | None:
    if denominator <= 0:
        return None
    return round(numerator / denominator, 3)


def batting_average(h: int, ab: int) -> float | None:
    return _ratio(h, ab)


def on_base_percentage(h: int, bb: int, hbp: int, ab: int, sf: int) -> float | None:
    return _ratio(h + bb + hbp, ab + bb + hbp + sf)


def slugging_percentage(h: int, doubles: int, triples: int, hr: int, ab: int) -> float | None:
    singles = h - doubles - triples - hr
    return _ratio(singles + 2 * doubles + 3 * triples + 4 * hr, ab)


def _side_totals(rows: Iterable[GameLogRow], *, home: bool) -> dict[str, _TeamTotals]:
    totals: dict[str, _TeamTotals] = defaultdict(_TeamTotals)
    for row in rows:
        team = row.home_team if home else row.visiting_team
        line = row.home if home else row.visiting
        score = row.home_score if home else row.visiting_score
        totals[team].add_side(line, score, row.winner == team)
    return totals


def _to_stat(team_id: str, season: int, t: _TeamTotals) -> TeamSeasonStat:
    return TeamSeasonStat(
        team_id=team_id,
        season=season,
        games=t.games,
        wins=t.wins,
        runs=t.runs,
        rbi=t.rbi,
        ab=t.ab,
        h=t.h,
        doubles=t.doubles,
        triples=t.triples,
        hr=t.hr,
        bb=t.bb,
        hbp=t.hbp,
        sf=t.sf,
        avg=batting_average(t.h, t.ab),
        obp=on_base_percentage(t.h, t.bb, t.hbp, t.ab, t.sf),
        slg=slugging_percentage(t.h, t.doubles, t.triples, t.hr, t.ab),
    )


def aggregate_team_seasons(rows: Iterable[GameLogRow]) -> dict[str, TeamSeasonStat]:
    """Sum one season's game logs into a record per team.

    Visiting and home appearances are totalled separately and then combined by
    team id, so a team seen on only one side still gets a record.
    """
    rows = list(rows)
    if not rows:
        return {}
    season = rows[0].season
    visiting = _side_totals(rows, home=False)
    home = _side_totals(rows, home=True)
    result: dict[str, TeamSeasonStat] = {}
    for team_id in sorted(visiting.keys() | home.keys()):
        combined = visiting.get(team_id, _TeamTotals()) + home.get(team_id, _TeamTotals())
        result[team_id] = _to_stat(team_id, season, combined)
    logger.debug("Aggregated %d games into %d teams for %d", len(rows), len(result), season)
    return result

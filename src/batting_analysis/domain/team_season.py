from dataclasses import dataclass


@dataclass(frozen=True)
class TeamSeasonStat:
    team_id: str
    season: int
    games: int = 0
    wins: int = 0
    runs: int = 0
    rbi: int = 0
    ab: int = 0
    h: int = 0
    doubles: int = 0
    triples: int = 0
    hr: int = 0
    bb: int = 0
    hbp: int = 0
    sf: int = 0
    avg: float | None = None
    obp: float | None = None
    slg: float | None = None


@dataclass(frozen=True)
class RegressionCoefficients:
    intercept: float
    obp: float
    slg: float

    @property
    def obp_slg_ratio(self) -> float | None:
        if self.slg == 0:
            return None
        return self.obp / self.slg


@dataclass(frozen=True)
class DecadeSummary:
    start: int
    stop: int
    count: int
    minimum: float | None = None
    q1: float | None = None
    median: float | None = None
    mean: float | None = None
    q3: float | None = None
    maximum: float | None = None
    variance: float | None = None

    @property
    def label(self) -> str:
        return f"{self.start}-{self.stop - 1}"

from dataclasses import dataclass


@dataclass(frozen=True)
class GameSample:
    player_id: str
    pairs: tuple[tuple[int, int], ...]
    with_replacement: bool = False

    @property
    def hits(self) -> int:
        return sum(h for h, _ in self.pairs)

    @property
    def at_bats(self) -> int:
        return sum(ab for _, ab in self.pairs)

    @property
    def average(self) -> float | None:
        if self.at_bats == 0:
            return None
        return self.hits / self.at_bats


@dataclass(frozen=True)
class SimulationResult:
    lo_player: str
    hi_player: str
    lo_average: float
    hi_average: float
    games_per_sample: int
    trials: int
    successes: int
    oversampled: bool = False

    @property
    def success_rate(self) -> float:
        return self.successes / self.trials

    @property
    def difference(self) -> float:
        return abs(self.hi_average - self.lo_average)


@dataclass(frozen=True)
class DifferencePoint:
    lo_player: str
    hi_player: str
    difference: float
    success_rate: float


@dataclass(frozen=True)
class TrendLine:
    slope: float
    intercept: float
    r_value: float

    def predict(self, difference: float) -> float:
        return self.intercept + self.slope * difference

from dataclasses import dataclass


@dataclass(frozen=True)
class OffenseLine:
    """One side's offensive counting stats for a single game. ``None`` marks a blank field."""

    ab: int | None = None
    h: int | None = None
    doubles: int | None = None
    triples: int | None = None
    hr: int | None = None
    rbi: int | None = None
    sh: int | None = None
    sf: int | None = None
    hbp: int | None = None
    bb: int | None = None


@dataclass(frozen=True)
class GameLogRow:
    date: str
    visiting_team: str
    home_team: str
    visiting_score: int | None
    home_score: int | None
    visiting: OffenseLine
    home: OffenseLine

    @property
    def season(self) -> int:
        return int(self.date[:4])

    @property
    def winner(self) -> str | None:
        if self.visiting_score is None or self.home_score is None:
            return None
        if self.visiting_score > self.home_score:
            return self.visiting_team
        if self.home_score > self.visiting_score:
            return self.home_team
        return None

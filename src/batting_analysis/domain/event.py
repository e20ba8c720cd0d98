from dataclasses import dataclass

# Walk, intentional walk and hit-by-pitch: plate appearances that are not at-bats.
NON_AT_BAT_EVENT_CODES = frozenset({14, 15, 16})


@dataclass(frozen=True)
class EventRow:
    game_id: str
    player_id: str
    event_code: int
    at_bat: int
    hit_value: int
    sacrifice_hit: int
    sacrifice_fly: int

    @property
    def is_hit(self) -> bool:
        return self.hit_value > 0

    @property
    def is_non_at_bat_appearance(self) -> bool:
        return self.event_code in NON_AT_BAT_EVENT_CODES

"""Game settings. Defaults follow the standard rules; a host may pass its own instance to Game.new_game."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GameSettings:
    rack_size: int = 7
    min_players: int = 2
    max_players: int = 4
    # bonus for placing a full rack in one move
    bingo_bonus: int = 50
    # None: game ends once every player passed in a row
    consecutive_pass_limit: Optional[int] = None

    def pass_limit(self, player_count: int) -> int:
        if self.consecutive_pass_limit is None:
            return player_count
        return self.consecutive_pass_limit


DEFAULT_SETTINGS = GameSettings()

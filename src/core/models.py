"""
Boundary layer data model(s).

These objects are handed out to callers outside the domain layer (service, rendering, input).
They are read-only snapshots: changing them never changes the game they were taken from.
"""

from dataclasses import dataclass

# Type aliases to make GameSnapshot easier to read
BoardRow = str
PlayerName = str


@dataclass(frozen=True)
class PlayerSnapshot:
    id: int
    name: PlayerName
    score: int
    rack: list[str]


@dataclass(frozen=True)
class GameSnapshot:
    """Transport-safe representation of a game: everything a display layer needs for one frame."""

    board: list[BoardRow]
    players: list[PlayerSnapshot]
    current_player_index: int
    bag_remaining: int
    status: str
    game_over: bool
    winners: list[PlayerName]

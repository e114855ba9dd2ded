"""Players, their racks, and the order in which they take turns"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.config import DEFAULT_SETTINGS
from src.core.exceptions import (
    GameSetupError,
    InvalidScoreError,
    TileNotInRackError,
)
from src.scrabble.bag import TileBag
from src.scrabble.tiles import Tile

logger = logging.getLogger(__name__)

RACK_SIZE = DEFAULT_SETTINGS.rack_size


@dataclass
class Player:
    id: int
    name: str
    score: int = 0
    rack: list[Tile] = field(default_factory=list)

    def add_points(self, points: int) -> None:
        # scores only ever go up
        if points < 0:
            raise InvalidScoreError(
                f"Cannot add negative points ({points}) to a score."
            )
        self.score += points

    def has_tiles(self, tiles: list[Tile]) -> bool:
        """Does the rack hold all of these tiles (counting duplicates)?"""
        needed = Counter(tile.face for tile in tiles)
        available = Counter(tile.face for tile in self.rack)
        return all(available[face] >= count for face, count in needed.items())

    def remove_tiles(self, tiles: list[Tile]) -> list[Tile]:
        """Take tiles off the rack, matched by how they look (a placed blank matches a blank on the rack)."""
        if not self.has_tiles(tiles):
            letters = "".join(tile.letter for tile in tiles)
            raise TileNotInRackError(
                f"{self.name} does not have the tiles {letters!r} on their rack."
            )
        removed: list[Tile] = []
        for tile in tiles:
            idx = next(i for i, own in enumerate(self.rack) if own.face == tile.face)
            removed.append(self.rack.pop(idx))
        return removed

    def rack_letters(self) -> list[str]:
        return [tile.letter for tile in self.rack]


@dataclass
class PlayerRoster:
    players: list[Player]
    current_index: int = 0
    rack_size: int = RACK_SIZE

    @classmethod
    def from_names(
        cls,
        names: list[str],
        min_players: int = DEFAULT_SETTINGS.min_players,
        max_players: int = DEFAULT_SETTINGS.max_players,
        rack_size: int = RACK_SIZE,
    ) -> Self:
        if not min_players <= len(names) <= max_players:
            raise GameSetupError(
                f"A game needs {min_players} to {max_players} players, got {len(names)}."
            )
        if len(set(names)) != len(names):
            raise GameSetupError(f"Player names must be unique: {names}")
        players = [Player(id=idx, name=name) for idx, name in enumerate(names)]
        return cls(players, rack_size=rack_size)

    def __len__(self) -> int:
        return len(self.players)

    def current(self) -> Player:
        return self.players[self.current_index % len(self.players)]

    def advance(self) -> None:
        self.current_index = (self.current_index + 1) % len(self.players)

    def find(self, name: str) -> Optional[Player]:
        return next((player for player in self.players if player.name == name), None)

    def refill(self, player: Player, bag: TileBag) -> list[Tile]:
        """Top the rack back up. Does nothing once the rack is full or the bag is empty."""
        missing = self.rack_size - len(player.rack)
        if missing <= 0:
            return []
        drawn = bag.draw_many(missing)
        player.rack.extend(drawn)
        return drawn

    def exchange(
        self, player: Player, bag: TileBag, tiles: Optional[list[Tile]] = None
    ) -> list[Tile]:
        """Swap tiles with the bag: the chosen tiles (default: the whole rack) go back in, the bag is mixed,
        and the same number is drawn out again. Returns the newly drawn tiles.
        """
        to_return = list(player.rack) if tiles is None else tiles
        returned = player.remove_tiles(to_return)
        bag.return_tiles(returned)
        drawn = bag.draw_many(len(returned))
        player.rack.extend(drawn)
        logger.debug("%s exchanged %d tiles", player.name, len(returned))
        return drawn

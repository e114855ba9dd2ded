"""The bag of face-down tiles every player draws from"""

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Self

from src.scrabble.letters import LETTER_DISTRIBUTION, validate_letter_table
from src.scrabble.tiles import Tile

logger = logging.getLogger(__name__)


@dataclass
class TileBag:
    tiles: list[Tile]
    rng: random.Random = field(default_factory=random.Random, repr=False)

    @classmethod
    def create(cls, rng: Optional[random.Random] = None) -> Self:
        """All 100 tiles of the standard distribution, in a random order.

        Pass a seeded `random.Random` to get a reproducible bag.
        """
        validate_letter_table()
        tiles = [
            Tile.from_letter(letter)
            for letter, count in LETTER_DISTRIBUTION.items()
            for _ in range(count)
        ]
        bag = cls(tiles, rng if rng is not None else random.Random())
        bag.shuffle()
        return bag

    def __len__(self) -> int:
        return len(self.tiles)

    def is_empty(self) -> bool:
        return not self.tiles

    def shuffle(self) -> None:
        """Fisher-Yates: walk down from the last tile, swapping each with a uniformly chosen tile at or below it."""
        for i in range(len(self.tiles) - 1, 0, -1):
            j = self.rng.randint(0, i)
            self.tiles[i], self.tiles[j] = self.tiles[j], self.tiles[i]

    def draw(self) -> Optional[Tile]:
        """Take one tile out of the bag. Returns None once the bag is empty (callers must check)."""
        if not self.tiles:
            return None
        # the order is already random, so taking the last tile is a uniform draw
        return self.tiles.pop()

    def draw_many(self, count: int) -> list[Tile]:
        """Draw up to `count` tiles; fewer if the bag runs out."""
        drawn: list[Tile] = []
        for _ in range(count):
            tile = self.draw()
            if tile is None:
                break
            drawn.append(tile)
        logger.debug("Drew %d of %d requested tiles, %d left", len(drawn), count, len(self))
        return drawn

    def return_tiles(self, tiles: list[Tile]) -> None:
        """Put tiles back (an exchange) and mix them in again."""
        self.tiles.extend(tiles)
        self.shuffle()

    def letter_counts(self) -> Counter[str]:
        return Counter(tile.letter for tile in self.tiles)

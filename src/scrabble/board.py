"""The Board holds the tiles placed so far and the premium squares they have used up"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import (
    BlankAssignmentError,
    BoardConfigurationError,
    OccupiedCellError,
    OutOfBoundsError,
)
from src.scrabble.multipliers import Multiplier, create_multipliers
from src.scrabble.square import BOARD_DIMENSIONS, Square
from src.scrabble.tiles import Tile

EMPTY_CELL = "."


@dataclass
class Board:
    position: dict[Square, Tile] = field(default_factory=dict)
    multipliers: dict[Square, Multiplier] = field(default_factory=create_multipliers)

    @classmethod
    def from_rows(cls, rows: list[str]) -> Self:
        """Construct a board from a text picture of it, one string per row.

        '.' is an empty cell, an upper case letter a normal tile and a lower case letter a blank
        standing in for that letter. Multipliers under the given tiles count as used up.
        ex. a board with CAT across the centre:
        7 rows of '...............', then '......CAT......', then 7 more empty rows
        """
        if len(rows) != BOARD_DIMENSIONS[0] or any(
            len(row) != BOARD_DIMENSIONS[1] for row in rows
        ):
            raise BoardConfigurationError(
                f"Board needs {BOARD_DIMENSIONS[0]} rows of {BOARD_DIMENSIONS[1]} characters."
            )
        board = cls()
        for row_idx, row in enumerate(rows):
            for col_idx, character in enumerate(row):
                if character == EMPTY_CELL:
                    continue
                if character.islower():
                    tile = Tile.blank().assign(character)
                else:
                    tile = Tile.from_letter(character)
                board.place(Square(row_idx, col_idx), tile)
        return board

    def to_rows(self) -> list[str]:
        """Read-only text picture of the board (inverse of `from_rows`)."""
        return [
            "".join(
                self._cell_to_text(Square(row, col))
                for col in range(BOARD_DIMENSIONS[1])
            )
            for row in range(BOARD_DIMENSIONS[0])
        ]

    def _cell_to_text(self, square: Square) -> str:
        tile = self.tile_at(square)
        if tile is None:
            return EMPTY_CELL
        return tile.display_letter

    def is_empty(self) -> bool:
        """True until the first tile has been placed"""
        return not self.position

    def covers(self, square: Square) -> bool:
        return square in self.position

    def tile_at(self, square: Square) -> Optional[Tile]:
        return self.position.get(square)

    def tile_count(self) -> int:
        return len(self.position)

    def multiplier_at(self, square: Square) -> Optional[Multiplier]:
        return self.multipliers.get(square)

    def place(self, square: Square, tile: Tile) -> None:
        """Put a tile on an empty cell. Any multiplier on that cell is used up."""
        if not square.is_within_bounds():
            raise OutOfBoundsError(
                f"Square {(square.row, square.col)} is not on the board."
            )
        if self.covers(square):
            raise OccupiedCellError(
                f"Square {square.to_label()} already holds {self.position[square].display_letter!r}."
            )
        if tile.is_blank and tile.assigned_letter is None:
            # a blank on the board always stands for some letter
            raise BlankAssignmentError(
                f"Blank placed on {square.to_label()} without a letter."
            )
        self.position[square] = tile
        multiplier = self.multiplier_at(square)
        if multiplier is not None and not multiplier.consumed:
            multiplier.consume()

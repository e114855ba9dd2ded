"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_uppercase

# (rows, columns)
BOARD_DIMENSIONS = (15, 15)


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    @classmethod
    def from_label(cls, label: str) -> Square:
        """Label notation: column letter then row number, 'A1' - 'O15' get converted to (0,0) - (14,14)"""
        label = label.strip().upper()
        col = ord(label[0]) - ord("A")
        row = int(label[1:]) - 1
        return cls(row, col)

    def to_label(self) -> str:
        return f"{ascii_uppercase[self.col]}{self.row + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def neighbours(self) -> list[Square]:
        """Orthogonally adjacent squares that exist on the board."""
        candidates = [
            Square(self.row - 1, self.col),
            Square(self.row + 1, self.col),
            Square(self.row, self.col - 1),
            Square(self.row, self.col + 1),
        ]
        return [square for square in candidates if square.is_within_bounds()]


# the first word of a game must cover this square
CENTER = Square(BOARD_DIMENSIONS[0] // 2, BOARD_DIMENSIONS[1] // 2)


def all_squares() -> list[Square]:
    return [
        Square(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
    ]

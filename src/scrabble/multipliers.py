"""Premium squares: fixed positions that scale a letter or a whole word the first time they are covered"""

from dataclasses import dataclass
from enum import Enum

from src.core.exceptions import BoardConfigurationError
from src.scrabble.square import CENTER, Square


class MultiplierKind(Enum):
    TRIPLE_WORD = "TW"
    DOUBLE_WORD = "DW"
    TRIPLE_LETTER = "TL"
    DOUBLE_LETTER = "DL"

    @property
    def letter_factor(self) -> int:
        return {MultiplierKind.TRIPLE_LETTER: 3, MultiplierKind.DOUBLE_LETTER: 2}.get(
            self, 1
        )

    @property
    def word_factor(self) -> int:
        return {MultiplierKind.TRIPLE_WORD: 3, MultiplierKind.DOUBLE_WORD: 2}.get(
            self, 1
        )


@dataclass
class Multiplier:
    kind: MultiplierKind
    consumed: bool = False

    def consume(self) -> None:
        """Covered by a tile: the bonus is spent for good."""
        self.consumed = True


Position = tuple[int, int]

TRIPLE_WORD_SQUARES: list[Position] = [
    (0, 0), (0, 7), (0, 14),
    (7, 0), (7, 14),
    (14, 0), (14, 7), (14, 14),
]  # fmt: skip

# NOTE: the centre square is a double word square as well, added separately below
DOUBLE_WORD_SQUARES: list[Position] = [
    (1, 1), (2, 2), (3, 3), (4, 4),
    (1, 13), (2, 12), (3, 11), (4, 10),
    (10, 4), (11, 3), (12, 2), (13, 1),
    (10, 10), (11, 11), (12, 12), (13, 13),
]  # fmt: skip

TRIPLE_LETTER_SQUARES: list[Position] = [
    (1, 5), (1, 9),
    (5, 1), (5, 5), (5, 9), (5, 13),
    (9, 1), (9, 5), (9, 9), (9, 13),
    (13, 5), (13, 9),
]  # fmt: skip

DOUBLE_LETTER_SQUARES: list[Position] = [
    (0, 3), (0, 11),
    (2, 6), (2, 8),
    (3, 0), (3, 7), (3, 14),
    (6, 2), (6, 6), (6, 8), (6, 12),
    (7, 3), (7, 11),
    (8, 2), (8, 6), (8, 8), (8, 12),
    (11, 0), (11, 7), (11, 14),
    (12, 6), (12, 8),
    (14, 3), (14, 11),
]  # fmt: skip

MULTIPLIER_LAYOUT: dict[MultiplierKind, list[Position]] = {
    MultiplierKind.TRIPLE_WORD: TRIPLE_WORD_SQUARES,
    MultiplierKind.DOUBLE_WORD: DOUBLE_WORD_SQUARES + [(CENTER.row, CENTER.col)],
    MultiplierKind.TRIPLE_LETTER: TRIPLE_LETTER_SQUARES,
    MultiplierKind.DOUBLE_LETTER: DOUBLE_LETTER_SQUARES,
}


def create_multipliers(
    layout: dict[MultiplierKind, list[Position]] = MULTIPLIER_LAYOUT,
) -> dict[Square, Multiplier]:
    """Build a fresh (nothing consumed) multiplier map. A square can only carry one kind of bonus."""
    multipliers: dict[Square, Multiplier] = {}
    for kind, positions in layout.items():
        for row, col in positions:
            square = Square(row, col)
            if not square.is_within_bounds():
                raise BoardConfigurationError(
                    f"{kind.name} square {(row, col)} lies outside the board."
                )
            if square in multipliers:
                raise BoardConfigurationError(
                    f"Square {(row, col)} is both {multipliers[square].kind.name} and {kind.name}."
                )
            multipliers[square] = Multiplier(kind)
    return multipliers

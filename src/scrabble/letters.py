"""Letter values and the standard distribution of letters over the 100 tiles of a game"""

from src.core.exceptions import LetterTableError

# A blank tile has no letter of its own until it is placed
BLANK = "?"

TOTAL_TILES = 100

LETTER_POINTS: dict[str, int] = {
    "A": 1, "B": 3, "C": 3, "D": 2, "E": 1, "F": 4, "G": 2, "H": 4,
    "I": 1, "J": 8, "K": 5, "L": 1, "M": 3, "N": 1, "O": 1, "P": 3,
    "Q": 10, "R": 1, "S": 1, "T": 1, "U": 1, "V": 4, "W": 4, "X": 8,
    "Y": 4, "Z": 10,
    BLANK: 0,
}  # fmt: skip

LETTER_DISTRIBUTION: dict[str, int] = {
    "A": 9, "B": 2, "C": 2, "D": 4, "E": 12, "F": 2, "G": 3, "H": 2,
    "I": 9, "J": 1, "K": 1, "L": 4, "M": 2, "N": 6, "O": 8, "P": 2,
    "Q": 1, "R": 6, "S": 4, "T": 6, "U": 4, "V": 2, "W": 2, "X": 1,
    "Y": 2, "Z": 1,
    BLANK: 2,
}  # fmt: skip


def is_playable_letter(letter: str) -> bool:
    """A letter a blank may stand for: a single character A-Z."""
    return len(letter) == 1 and "A" <= letter <= "Z"


def validate_letter_table(
    points: dict[str, int] = LETTER_POINTS,
    distribution: dict[str, int] = LETTER_DISTRIBUTION,
) -> None:
    """Refuse to start a game with a malformed letter table."""
    if set(points) != set(distribution):
        missing = set(points) ^ set(distribution)
        raise LetterTableError(
            f"Points and distribution tables disagree on letters: {sorted(missing)}"
        )

    for letter in distribution:
        if letter != BLANK and not is_playable_letter(letter):
            raise LetterTableError(f"Not a valid tile letter: {letter!r}")
        if points[letter] < 0 or distribution[letter] < 0:
            raise LetterTableError(f"Negative value in letter table for {letter!r}")

    if points.get(BLANK, 0) != 0:
        raise LetterTableError("A blank tile must be worth 0 points.")

    total = sum(distribution.values())
    if total != TOTAL_TILES:
        raise LetterTableError(
            f"Letter distribution adds up to {total} tiles, expected {TOTAL_TILES}."
        )

"""A single tile. Tiles never change once created; assigning a letter to a blank creates a new tile."""

from dataclasses import dataclass, replace
from typing import Optional, Self

from src.core.exceptions import BlankAssignmentError
from src.scrabble.letters import BLANK, LETTER_POINTS, is_playable_letter


@dataclass(frozen=True)
class Tile:
    letter: str
    points: int
    is_blank: bool = False
    # only set for a blank that has been given a letter at placement time
    assigned_letter: Optional[str] = None

    @classmethod
    def from_letter(cls, letter: str) -> Self:
        letter = letter.upper()
        if letter == BLANK:
            return cls.blank()
        return cls(letter, LETTER_POINTS[letter])

    @classmethod
    def blank(cls) -> Self:
        return cls(BLANK, 0, is_blank=True)

    def assign(self, letter: str) -> Self:
        """A blank standing in for `letter`. Still worth 0 points."""
        if not self.is_blank:
            raise BlankAssignmentError(
                f"Only a blank tile can be assigned a letter, not {self.letter!r}."
            )
        letter = letter.upper()
        if not is_playable_letter(letter):
            raise BlankAssignmentError(f"A blank cannot represent {letter!r}.")
        return replace(self, assigned_letter=letter)

    @property
    def face(self) -> tuple[str, bool]:
        """What the tile looks like on a rack (an assigned blank is still a blank)."""
        return self.letter, self.is_blank

    @property
    def display_letter(self) -> str:
        """Letter shown on the board: blanks show the letter they represent (lower case)."""
        if self.is_blank:
            return self.assigned_letter.lower() if self.assigned_letter else BLANK
        return self.letter

"""
Contract between the turn engine and whatever decides if a placement is a word and what it is worth.
-----

The engine only needs a `ScoringPolicy`: given the proposed tiles and the current board, either reject the
placement (with a reason to show the player) or accept it with a number of points.
A policy must not change the board it is handed.

`LinearPlacementPolicy` is the reference policy: it checks the geometry of a placement, scores the main word
with the premium squares, and leaves the question "is this a real word?" to a pluggable `WordValidator`.
Words formed across the main word are not scored.
"""

from dataclasses import dataclass
from typing import Protocol, Self

from src.core.config import DEFAULT_SETTINGS
from src.scrabble.board import Board
from src.scrabble.square import Square
from src.scrabble.tiles import Tile


@dataclass(frozen=True)
class TilePlacement:
    square: Square
    tile: Tile

    @classmethod
    def at(cls, row: int, col: int, tile: Tile) -> Self:
        return cls(Square(row, col), tile)


Placement = list[TilePlacement]


@dataclass(frozen=True)
class Accepted:
    points: int
    tiles_consumed: list[Tile]


@dataclass(frozen=True)
class Rejected:
    reason: str


Verdict = Accepted | Rejected


class ScoringPolicy(Protocol):
    def evaluate(self, placement: Placement, board: Board) -> Verdict:
        """Accept (with points) or reject the placement. Must not mutate `board`."""
        ...


class WordValidator(Protocol):
    def is_word(self, word: str) -> bool: ...


class AcceptAllWords:
    """Stand-in for a dictionary: any string of letters counts as a word."""

    def is_word(self, word: str) -> bool:
        return True


# (row step, column step)
ACROSS = (0, 1)
DOWN = (1, 0)


class LinearPlacementPolicy:
    """All new tiles in one row or column, forming one unbroken word that touches the tiles already played."""

    def __init__(
        self,
        validator: WordValidator | None = None,
        bingo_bonus: int = DEFAULT_SETTINGS.bingo_bonus,
        bingo_size: int = DEFAULT_SETTINGS.rack_size,
    ) -> None:
        self.validator = validator if validator is not None else AcceptAllWords()
        self.bingo_bonus = bingo_bonus
        self.bingo_size = bingo_size

    def evaluate(self, placement: Placement, board: Board) -> Verdict:
        if not placement:
            return Rejected("No tiles were placed.")

        new_tiles: dict[Square, Tile] = {}
        for entry in placement:
            if not entry.square.is_within_bounds():
                square = entry.square
                return Rejected(f"Square {(square.row, square.col)} is not on the board.")
            if entry.square in new_tiles:
                return Rejected(f"Two tiles placed on {entry.square.to_label()}.")
            if board.covers(entry.square):
                return Rejected(f"Square {entry.square.to_label()} is already taken.")
            new_tiles[entry.square] = entry.tile

        direction = self._direction(list(new_tiles), board)
        if direction is None:
            return Rejected("Tiles must be placed in a single row or column.")

        word_squares = self._word_squares(list(new_tiles), direction, board)
        if any(
            square not in new_tiles and not board.covers(square)
            for square in word_squares
        ):
            return Rejected("Tiles must form one word without gaps.")

        if not board.is_empty() and not self._touches_board(list(new_tiles), board):
            return Rejected("New tiles must connect to the tiles already on the board.")

        word = "".join(
            self._letter(new_tiles.get(square) or board.tile_at(square))
            for square in word_squares
        )
        if len(word) < 2:
            return Rejected("A word needs at least two letters.")
        if not self.validator.is_word(word):
            return Rejected(f"{word!r} is not a valid word.")

        points = self._score(word_squares, new_tiles, board)
        return Accepted(points=points, tiles_consumed=[entry.tile for entry in placement])

    # -- HELPERS --
    def _direction(
        self, squares: list[Square], board: Board
    ) -> tuple[int, int] | None:
        rows = {square.row for square in squares}
        cols = {square.col for square in squares}
        if len(squares) == 1:
            # a single tile reads along whichever line it extends on the board
            square = squares[0]
            left = Square(square.row, square.col - 1)
            right = Square(square.row, square.col + 1)
            if board.covers(left) or board.covers(right):
                return ACROSS
            return DOWN
        if len(rows) == 1:
            return ACROSS
        if len(cols) == 1:
            return DOWN
        return None

    def _word_squares(
        self, squares: list[Square], direction: tuple[int, int], board: Board
    ) -> list[Square]:
        """Squares of the main word: from the first to the last new tile, extended over adjacent board tiles."""
        d_row, d_col = direction
        ordered = sorted(squares, key=lambda sq: (sq.row, sq.col))
        start, end = ordered[0], ordered[-1]

        while board.covers(Square(start.row - d_row, start.col - d_col)):
            start = Square(start.row - d_row, start.col - d_col)
        while board.covers(Square(end.row + d_row, end.col + d_col)):
            end = Square(end.row + d_row, end.col + d_col)

        length = max(end.row - start.row, end.col - start.col) + 1
        return [
            Square(start.row + step * d_row, start.col + step * d_col)
            for step in range(length)
        ]

    def _touches_board(self, squares: list[Square], board: Board) -> bool:
        return any(
            board.covers(neighbour)
            for square in squares
            for neighbour in square.neighbours()
        )

    def _letter(self, tile: Tile | None) -> str:
        if tile is None:
            return ""
        if tile.is_blank:
            return tile.assigned_letter or ""
        return tile.letter

    def _score(
        self, word_squares: list[Square], new_tiles: dict[Square, Tile], board: Board
    ) -> int:
        """Letter bonuses per new tile, then the highest word bonus among the new tiles once over the sum."""
        letter_sum = 0
        word_factor = 1
        for square in word_squares:
            if square not in new_tiles:
                letter_sum += board.tile_at(square).points
                continue
            tile = new_tiles[square]
            multiplier = board.multiplier_at(square)
            if multiplier is None or multiplier.consumed:
                letter_sum += tile.points
                continue
            letter_sum += tile.points * multiplier.kind.letter_factor
            word_factor = max(word_factor, multiplier.kind.word_factor)

        points = letter_sum * word_factor
        if len(new_tiles) >= self.bingo_size:
            points += self.bingo_bonus
        return points

"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

import random
from typing import Callable

import pytest

from src.scrabble.board import Board
from src.scrabble.player import Player
from src.scrabble.scoring import Placement, TilePlacement
from src.scrabble.square import BOARD_DIMENSIONS, Square

EMPTY_ROW = "." * BOARD_DIMENSIONS[1]


@pytest.fixture
def seeded_rng() -> random.Random:
    """Same bag order on every run."""
    return random.Random(1234)


@pytest.fixture
def board_with_rows() -> Callable[[dict[int, str]], Board]:
    """Call the inner function with {row index: full row string} for the rows that hold tiles."""

    def _create_board(filled_rows: dict[int, str]) -> Board:
        rows = [filled_rows.get(idx, EMPTY_ROW) for idx in range(BOARD_DIMENSIONS[0])]
        return Board.from_rows(rows)

    return _create_board


@pytest.fixture
def rack_placement() -> Callable[[Player, list[Square]], Placement]:
    """Put the first tiles of a player's rack on the given squares (blanks are played as 'E')."""

    def _create_placement(player: Player, squares: list[Square]) -> Placement:
        placement: Placement = []
        for tile, square in zip(player.rack, squares):
            placed = tile.assign("E") if tile.is_blank else tile
            placement.append(TilePlacement(square, placed))
        return placement

    return _create_placement

"""Unit tests for /src/scrabble/game.py"""

import random
from typing import Callable
from unittest.mock import Mock

import pytest

from src.core.config import GameSettings
from src.core.exceptions import GameOverError, GameSetupError
from src.core.shared_types import GameStatus, TurnAction
from src.scrabble.game import Game, MoveResult
from src.scrabble.player import Player
from src.scrabble.scoring import Accepted, Placement, Rejected, TilePlacement
from src.scrabble.square import BOARD_DIMENSIONS, CENTER, Square, all_squares
from src.scrabble.tiles import Tile

PlacementFactory = Callable[[Player, list[Square]], Placement]

ACROSS_CENTER = [Square(7, col) for col in range(4, 11)]


def accept_all(points: int) -> Mock:
    """Scoring policy that accepts any placement for a fixed number of points."""
    policy = Mock()
    policy.evaluate.side_effect = lambda placement, board: Accepted(
        points, [entry.tile for entry in placement]
    )
    return policy


def tiles(letters: str) -> list[Tile]:
    return [Tile.from_letter(letter) for letter in letters]


@pytest.fixture
def game(seeded_rng: random.Random) -> Game:
    return Game.new_game(["Ada", "Bob"], rng=seeded_rng)


@pytest.fixture
def game_accepting_24(seeded_rng: random.Random) -> Game:
    return Game.new_game(["Ada", "Bob"], policy=accept_all(24), rng=seeded_rng)


# -- CREATION LOGIC --
def test_new_game(game: Game) -> None:
    assert game.status == GameStatus.IN_PROGRESS
    assert not game.game_over
    assert game.board.is_empty()
    assert game.current_player_index == 0
    assert game.current_player.name == "Ada"
    assert [len(player.rack) for player in game.players] == [7, 7]
    assert game.bag_remaining == 100 - 14
    assert game.tiles_in_play() == 100
    assert game.winners == []


def test_new_game_with_four_players(seeded_rng: random.Random) -> None:
    game = Game.new_game(["A", "B", "C", "D"], rng=seeded_rng)
    assert game.bag_remaining == 100 - 28
    assert game.tiles_in_play() == 100


def test_new_game_player_limits() -> None:
    with pytest.raises(GameSetupError):
        Game.new_game(["Solo"])


def test_new_game_with_custom_rack_size(seeded_rng: random.Random) -> None:
    game = Game.new_game(["Ada", "Bob"], rng=seeded_rng, settings=GameSettings(rack_size=5))
    assert [len(player.rack) for player in game.players] == [5, 5]


def test_snapshot(game: Game) -> None:
    snapshot = game.snapshot()

    assert len(snapshot.board) == BOARD_DIMENSIONS[0]
    assert snapshot.current_player_index == 0
    assert snapshot.bag_remaining == 86
    assert snapshot.status == "in progress"
    assert not snapshot.game_over
    assert [player.name for player in snapshot.players] == ["Ada", "Bob"]
    assert snapshot.players[0].rack == game.players[0].rack_letters()

    # a snapshot is a copy
    snapshot.players[0].rack.clear()
    assert len(game.players[0].rack) == 7


# -- SUBMIT MOVE --
def test_two_player_scenario(
    game_accepting_24: Game, rack_placement: PlacementFactory
) -> None:
    """Ada plays her whole rack across the centre for 24 points, then Bob passes."""
    game = game_accepting_24
    ada, bob = game.players
    placement = rack_placement(ada, ACROSS_CENTER)

    result = game.submit_move(placement)

    assert result == MoveResult(valid=True, score=24)
    assert ada.score == 24
    assert len(ada.rack) == 7
    assert game.bag_remaining == 100 - 14 - 7
    assert game.board.tile_count() == 7
    assert game.current_player is bob
    assert game.tiles_in_play() == 100

    board_before = game.board.to_rows()
    result = game.pass_turn()

    assert result.valid
    assert game.board.to_rows() == board_before
    assert (ada.score, bob.score) == (24, 0)
    assert game.current_player_index == 0
    assert game.tiles_in_play() == 100


def test_accepted_move_places_and_consumes(
    game: Game, rack_placement: PlacementFactory
) -> None:
    ada = game.current_player
    placement = rack_placement(ada, [CENTER, Square(7, 8)])

    result = game.submit_move(placement)

    assert result.valid
    assert result.score is not None
    assert ada.score == result.score
    for entry in placement:
        assert game.board.tile_at(entry.square) == entry.tile
    assert game.board.multiplier_at(CENTER).consumed
    assert game.turns[-1].action == TurnAction.PLACE
    assert game.turns[-1].score == result.score


def test_first_move_must_cover_center(
    game: Game, rack_placement: PlacementFactory
) -> None:
    ada = game.current_player
    rack_before = list(ada.rack)

    result = game.submit_move(rack_placement(ada, [Square(0, 0), Square(0, 1)]))

    assert not result.valid
    assert "center" in result.message
    assert game.board.is_empty()
    assert ada.rack == rack_before
    assert ada.score == 0
    assert game.current_player_index == 0
    assert game.turns == []


def test_first_move_rule_is_checked_before_the_policy(
    seeded_rng: random.Random, rack_placement: PlacementFactory
) -> None:
    policy = accept_all(10)
    game = Game.new_game(["Ada", "Bob"], policy=policy, rng=seeded_rng)

    game.submit_move(rack_placement(game.current_player, [Square(3, 3)]))

    policy.evaluate.assert_not_called()


def test_occupied_cell(game: Game, rack_placement: PlacementFactory) -> None:
    game.submit_move(rack_placement(game.current_player, [CENTER, Square(7, 8)]))
    tile_before = game.board.tile_at(CENTER)
    bob = game.current_player

    result = game.submit_move(rack_placement(bob, [Square(6, 7), CENTER]))

    assert not result.valid
    assert game.board.tile_at(CENTER) == tile_before
    assert not game.board.covers(Square(6, 7))
    assert game.current_player is bob


def test_out_of_bounds(game: Game) -> None:
    tile = game.current_player.rack[0]
    result = game.submit_move([TilePlacement(Square(15, 7), tile)])
    assert not result.valid
    assert game.board.is_empty()


def test_same_square_twice(game: Game) -> None:
    rack = game.current_player.rack
    result = game.submit_move(
        [TilePlacement(CENTER, rack[0]), TilePlacement(CENTER, rack[1])]
    )
    assert not result.valid


def test_empty_placement(game: Game) -> None:
    assert not game.submit_move([]).valid


def test_tiles_must_come_from_the_rack(game: Game) -> None:
    ada = game.current_player
    ada.rack = tiles("AEIOURS")

    result = game.submit_move([TilePlacement(CENTER, Tile.from_letter("Z"))])

    assert not result.valid
    assert ada.rack_letters() == list("AEIOURS")


def test_blank_needs_letter(game: Game) -> None:
    ada = game.current_player
    ada.rack = tiles("?ATERS")

    result = game.submit_move(
        [TilePlacement(CENTER, Tile.blank()), TilePlacement(Square(7, 8), Tile.from_letter("A"))]
    )

    assert not result.valid
    assert game.board.is_empty()


def test_normal_tile_cannot_carry_a_letter(game: Game) -> None:
    game.current_player.rack = tiles("AB")
    disguised = Tile("A", 1, is_blank=False, assigned_letter="B")

    result = game.submit_move(
        [TilePlacement(CENTER, disguised), TilePlacement(Square(7, 8), Tile.from_letter("B"))]
    )

    assert not result.valid


def test_blank_placed_with_letter(game: Game) -> None:
    ada = game.current_player
    ada.rack = tiles("?ATERS")
    placement = [
        TilePlacement(Square(7, 6), Tile.from_letter("A")),
        TilePlacement(CENTER, Tile.blank().assign("x")),
    ]

    result = game.submit_move(placement)

    assert result.valid
    # A(1) + blank(0), doubled by the centre square
    assert result.score == 2
    assert game.board.to_rows()[7][6:8] == "Ax"
    assert ada.rack_letters()[:4] == list("TERS")


def test_policy_rejection(seeded_rng: random.Random, rack_placement: PlacementFactory) -> None:
    policy = Mock()
    policy.evaluate.return_value = Rejected("'QZ' is not a valid word.")
    game = Game.new_game(["Ada", "Bob"], policy=policy, rng=seeded_rng)

    result = game.submit_move(rack_placement(game.current_player, [CENTER, Square(7, 8)]))

    assert result == MoveResult(valid=False, message="'QZ' is not a valid word.")
    assert game.board.is_empty()
    assert game.current_player_index == 0
    assert game.tiles_in_play() == 100


def test_rack_refill_with_short_bag(
    game_accepting_24: Game, rack_placement: PlacementFactory
) -> None:
    """Bag holds fewer tiles than were played: the rack does not get back to 7."""
    game = game_accepting_24
    ada = game.current_player
    game.bag.tiles = game.bag.tiles[:3]

    game.submit_move(rack_placement(ada, ACROSS_CENTER[:5]))

    assert len(ada.rack) == 2 + 3
    assert game.bag.is_empty()


# -- PASS / EXCHANGE --
def test_pass_turn(game: Game) -> None:
    result = game.pass_turn()
    assert result.valid
    assert result.score == 0
    assert game.current_player_index == 1
    assert game.turns[-1].action == TurnAction.PASS


def test_exchange_whole_rack(game: Game) -> None:
    ada = game.current_player

    result = game.exchange_tiles()

    assert result.valid
    assert len(ada.rack) == 7
    assert game.bag_remaining == 86
    assert game.current_player_index == 1
    assert game.turns[-1].action == TurnAction.EXCHANGE
    assert game.tiles_in_play() == 100


def test_exchange_some_tiles(game: Game) -> None:
    ada = game.current_player
    chosen = ada.rack[:2]

    result = game.exchange_tiles(chosen)

    assert result.valid
    assert len(ada.rack) == 7
    assert game.turns[-1].tiles == [tile.letter for tile in chosen]
    assert game.tiles_in_play() == 100


def test_exchange_tiles_not_on_rack(game: Game) -> None:
    ada = game.current_player
    ada.rack = tiles("AEIOURS")
    result = game.exchange_tiles(tiles("ZZ"))
    assert not result.valid
    assert game.current_player_index == 0


def test_exchange_nothing(game: Game) -> None:
    assert not game.exchange_tiles([]).valid


def test_repeated_exchange_with_small_bag(game: Game) -> None:
    game.bag.tiles = game.bag.tiles[:4]

    for _ in range(6):
        player = game.current_player
        before = len(game.bag) + len(player.rack)
        result = game.exchange_tiles()
        assert result.valid
        assert len(game.bag) + len(player.rack) == before


def test_exchange_with_empty_bag_is_a_pass(game: Game) -> None:
    game.bag.tiles = []
    ada = game.current_player
    rack_before = list(ada.rack)

    result = game.exchange_tiles()

    assert result.valid
    assert "empty" in result.message
    assert ada.rack == rack_before
    assert game.consecutive_passes == 1
    assert game.current_player_index == 1


# -- END OF GAME --
def test_everyone_passes(game: Game) -> None:
    game.pass_turn()
    assert not game.game_over
    game.pass_turn()

    assert game.game_over
    assert game.status == GameStatus.FINISHED
    # nobody scored: a tie
    assert game.winners == game.players


def test_move_resets_pass_count(game: Game, rack_placement: PlacementFactory) -> None:
    game.pass_turn()
    game.submit_move(rack_placement(game.current_player, [CENTER, Square(7, 8)]))
    game.pass_turn()
    assert not game.game_over


def test_custom_pass_limit(seeded_rng: random.Random) -> None:
    game = Game.new_game(
        ["Ada", "Bob"], rng=seeded_rng, settings=GameSettings(consecutive_pass_limit=4)
    )
    for _ in range(3):
        game.pass_turn()
    assert not game.game_over
    game.pass_turn()
    assert game.game_over


def test_no_commands_after_game_over(game: Game, rack_placement: PlacementFactory) -> None:
    game.pass_turn()
    game.pass_turn()

    with pytest.raises(GameOverError):
        game.pass_turn()
    with pytest.raises(GameOverError):
        game.exchange_tiles()
    with pytest.raises(GameOverError):
        game.submit_move(rack_placement(game.current_player, [CENTER]))


def test_play_until_out_of_tiles(
    seeded_rng: random.Random, rack_placement: PlacementFactory
) -> None:
    """Every command keeps all 100 tiles accounted for, and the game ends once a rack runs dry."""
    game = Game.new_game(["Ada", "Bob", "Cy"], policy=accept_all(5), rng=seeded_rng)
    # first move covers the centre, after that fill the board left to right, top to bottom
    free_squares = [CENTER] + [square for square in all_squares() if square != CENTER]

    commands = 0
    while not game.game_over:
        player = game.current_player
        previous_index = game.current_player_index
        played = min(2, len(player.rack))
        squares, free_squares = free_squares[:played], free_squares[played:]

        result = game.submit_move(rack_placement(player, squares))

        assert result.valid
        assert game.current_player_index == (previous_index + 1) % 3
        assert game.tiles_in_play() == 100
        commands += 1
        assert commands < 100

    assert game.bag.is_empty()
    assert any(not player.rack for player in game.players)
    assert game.board.tile_count() == 100 - sum(len(p.rack) for p in game.players)
    assert game.winners


# -- POLICY VERDICTS THAT DO NOT ADD UP --
@pytest.mark.parametrize(
    "consumed",
    [
        [],  # no tiles at all
        tiles("QQQQQ"),  # tiles the player does not have
    ],
)
def test_policy_must_consume_the_placed_tiles(
    seeded_rng: random.Random, rack_placement: PlacementFactory, consumed: list[Tile]
) -> None:
    policy = Mock()
    policy.evaluate.return_value = Accepted(24, consumed)
    game = Game.new_game(["Ada", "Bob"], policy=policy, rng=seeded_rng)
    ada = game.current_player
    rack_before = list(ada.rack)

    result = game.submit_move(rack_placement(ada, [CENTER, Square(7, 8)]))

    assert not result.valid
    assert game.board.is_empty()
    assert ada.score == 0
    assert ada.rack == rack_before
    assert game.current_player_index == 0
    assert game.tiles_in_play() == 100


def test_policy_cannot_hand_out_negative_points(
    seeded_rng: random.Random, rack_placement: PlacementFactory
) -> None:
    game = Game.new_game(["Ada", "Bob"], policy=accept_all(-5), rng=seeded_rng)

    placement = rack_placement(game.current_player, [CENTER, Square(7, 8)])

    result = game.submit_move(placement)

    assert not result.valid
    assert game.board.is_empty()
    assert game.current_player.score == 0

"""
The Game class is the entrypoint into the domain layer for the service layer (and any other caller: a renderer,
an input handler, a bot).
It is responsible for orchestrating everything needed to play a turn -->
validate the command, update board / rack / bag / score, hand the turn to the next player and decide when the game ends.

Callers only ever change a game through the three commands `submit_move`, `pass_turn` and `exchange_tiles`.
"""

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.config import DEFAULT_SETTINGS, GameSettings
from src.core.exceptions import (
    BlankAssignmentError,
    GameOverError,
    IllegalFirstMoveError,
    IllegalMoveError,
    OccupiedCellError,
    OutOfBoundsError,
    PlacementRejectedError,
    TileNotInRackError,
)
from src.core.models import GameSnapshot, PlayerSnapshot
from src.core.shared_types import GameStatus, TurnAction
from src.scrabble.bag import TileBag
from src.scrabble.board import Board
from src.scrabble.player import Player, PlayerRoster
from src.scrabble.scoring import (
    Accepted,
    LinearPlacementPolicy,
    Placement,
    Rejected,
    ScoringPolicy,
)
from src.scrabble.square import CENTER
from src.scrabble.tiles import Tile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveResult:
    valid: bool
    score: Optional[int] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class TurnRecord:
    player_id: int
    action: TurnAction
    score: int = 0
    tiles: list[str] = field(default_factory=list)


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    bag: TileBag
    roster: PlayerRoster
    policy: ScoringPolicy
    status: GameStatus = GameStatus.IN_PROGRESS
    settings: GameSettings = DEFAULT_SETTINGS
    consecutive_passes: int = 0
    turns: list[TurnRecord] = field(default_factory=list)

    @classmethod
    def new_game(
        cls,
        player_names: list[str],
        policy: Optional[ScoringPolicy] = None,
        rng: Optional[random.Random] = None,
        settings: Optional[GameSettings] = None,
    ) -> Self:
        """Set up board and bag, seat the players and deal everyone a full rack. The first player listed starts."""
        settings = settings or DEFAULT_SETTINGS
        roster = PlayerRoster.from_names(
            player_names,
            min_players=settings.min_players,
            max_players=settings.max_players,
            rack_size=settings.rack_size,
        )
        bag = TileBag.create(rng)
        for player in roster.players:
            roster.refill(player, bag)

        game = cls(
            board=Board(),
            bag=bag,
            roster=roster,
            policy=policy
            or LinearPlacementPolicy(
                bingo_bonus=settings.bingo_bonus, bingo_size=settings.rack_size
            ),
            settings=settings,
        )
        logger.info("New game for %s, %d tiles left in the bag", player_names, len(bag))
        return game

    # -- READ ACCESSORS --
    @property
    def players(self) -> list[Player]:
        return self.roster.players

    @property
    def current_player(self) -> Player:
        return self.roster.current()

    @property
    def current_player_index(self) -> int:
        return self.roster.current_index

    @property
    def bag_remaining(self) -> int:
        return len(self.bag)

    @property
    def game_over(self) -> bool:
        return self.status == GameStatus.FINISHED

    @property
    def winners(self) -> list[Player]:
        """Player(s) with the highest score, once the game has finished. Several on a tie."""
        if not self.game_over:
            return []
        best = max(player.score for player in self.players)
        return [player for player in self.players if player.score == best]

    def tiles_in_play(self) -> int:
        """Bag + racks + board. Always 100."""
        return (
            len(self.bag)
            + sum(len(player.rack) for player in self.players)
            + self.board.tile_count()
        )

    def snapshot(self) -> GameSnapshot:
        """Read-only copy of everything a display layer needs"""
        return GameSnapshot(
            board=self.board.to_rows(),
            players=[
                PlayerSnapshot(
                    id=player.id,
                    name=player.name,
                    score=player.score,
                    rack=player.rack_letters(),
                )
                for player in self.players
            ],
            current_player_index=self.current_player_index,
            bag_remaining=self.bag_remaining,
            status=str(self.status),
            game_over=self.game_over,
            winners=[player.name for player in self.winners],
        )

    # -- COMMANDS --
    def submit_move(self, placement: Placement) -> MoveResult:
        """
        Attempt to place tiles for the current player
        -----

        1. check the tiles can physically go there and come from the player's rack (nothing changes on failure)
        2. first move of the game must cover the centre square
        3. let the scoring policy accept or reject the placement
        4. accepted? place tiles, score, take tiles off the rack, refill the rack
        5. hand the turn to the next player, then check for the end of the game
        """
        self._assert_in_progress()
        player = self.current_player

        try:
            self._validate_placement(placement, player)
            verdict = self.policy.evaluate(placement, self.board)
            if isinstance(verdict, Rejected):
                raise PlacementRejectedError(verdict.reason)
            self._check_verdict(placement, verdict)
        except IllegalMoveError as e:
            logger.info("Move by %s refused: %s", player.name, e)
            return MoveResult(valid=False, message=str(e))

        self._apply_placement(placement, verdict, player)
        self.consecutive_passes = 0
        self._record(player, TurnAction.PLACE, verdict.points, verdict.tiles_consumed)
        logger.info(
            "%s scored %d points (total %d)", player.name, verdict.points, player.score
        )
        self._finish_turn()
        return MoveResult(valid=True, score=verdict.points)

    def pass_turn(self) -> MoveResult:
        """Give up the turn. Nothing changes except whose turn it is."""
        self._assert_in_progress()
        player = self.current_player
        self.consecutive_passes += 1
        self._record(player, TurnAction.PASS)
        self._finish_turn()
        return MoveResult(valid=True, score=0, message=f"{player.name} passed.")

    def exchange_tiles(self, tiles: Optional[list[Tile]] = None) -> MoveResult:
        """
        Swap tiles (default: the whole rack) with the bag and lose the turn.
        ----
        With an empty bag there is nothing to swap with, so the exchange counts as a pass.
        """
        self._assert_in_progress()
        player = self.current_player

        if self.bag.is_empty():
            self.consecutive_passes += 1
            self._record(player, TurnAction.PASS)
            self._finish_turn()
            return MoveResult(
                valid=True,
                score=0,
                message="The bag is empty, nothing to exchange. Turn passed.",
            )

        if tiles is not None and not tiles:
            return MoveResult(valid=False, message="Choose at least one tile to exchange.")
        if tiles is not None and not player.has_tiles(tiles):
            return MoveResult(
                valid=False, message="Can only exchange tiles that are on your rack."
            )

        returned = list(player.rack) if tiles is None else tiles
        self.roster.exchange(player, self.bag, tiles)
        self.consecutive_passes = 0
        self._record(player, TurnAction.EXCHANGE, tiles=returned)
        self._finish_turn()
        return MoveResult(
            valid=True, score=0, message=f"{player.name} exchanged {len(returned)} tiles."
        )

    # -- PRIVATE HELPERS ---
    def _assert_in_progress(self) -> None:
        if self.game_over:
            raise GameOverError(f"Game is not in progress. status: {self.status}")

    def _validate_placement(self, placement: Placement, player: Player) -> None:
        """Everything that can be checked without the scoring policy. Raises an IllegalMoveError."""
        if not placement:
            raise IllegalMoveError("Place at least one tile.")

        seen = set()
        for entry in placement:
            square = entry.square
            if not square.is_within_bounds():
                raise OutOfBoundsError(
                    f"Square {(square.row, square.col)} is not on the board."
                )
            if square in seen:
                raise IllegalMoveError(f"Two tiles placed on {square.to_label()}.")
            seen.add(square)
            if self.board.covers(square):
                raise OccupiedCellError(f"Square {square.to_label()} is already taken.")
            if entry.tile.is_blank and entry.tile.assigned_letter is None:
                raise BlankAssignmentError(
                    f"Choose a letter for the blank on {square.to_label()}."
                )
            if not entry.tile.is_blank and entry.tile.assigned_letter is not None:
                raise BlankAssignmentError("Only a blank can stand for another letter.")

        if not player.has_tiles([entry.tile for entry in placement]):
            raise TileNotInRackError(
                f"{player.name} does not have all of these tiles on their rack."
            )

        if self.board.is_empty() and CENTER not in seen:
            raise IllegalFirstMoveError(
                f"First word must cover the center square {CENTER.to_label()}."
            )

    def _check_verdict(self, placement: Placement, verdict: Accepted) -> None:
        """The policy must account for exactly the tiles that were placed, for a non-negative score."""
        placed = Counter(entry.tile.face for entry in placement)
        consumed = Counter(tile.face for tile in verdict.tiles_consumed)
        if placed != consumed:
            raise PlacementRejectedError(
                "Scoring policy reported different tiles than the ones placed."
            )
        if verdict.points < 0:
            raise PlacementRejectedError(
                f"Scoring policy gave a negative score ({verdict.points})."
            )

    def _apply_placement(
        self, placement: Placement, verdict: Accepted, player: Player
    ) -> None:
        """All checks passed: no step below can fail halfway."""
        for entry in placement:
            self.board.place(entry.square, entry.tile)
        player.add_points(verdict.points)
        player.remove_tiles(verdict.tiles_consumed)
        self.roster.refill(player, self.bag)

    def _record(
        self,
        player: Player,
        action: TurnAction,
        score: int = 0,
        tiles: Optional[list[Tile]] = None,
    ) -> None:
        self.turns.append(
            TurnRecord(
                player_id=player.id,
                action=action,
                score=score,
                tiles=[tile.letter for tile in tiles or []],
            )
        )

    def _finish_turn(self) -> None:
        """Next player is up, then check if the game has ended."""
        self.roster.advance()
        self._update_game_status()

    def _update_game_status(self) -> None:
        """
        Game ends when
        * the bag is empty and some player has used up their rack, or
        * every player passed in a row (nobody can / wants to move anymore).
        """
        out_of_tiles = self.bag.is_empty() and any(
            not player.rack for player in self.players
        )
        all_passed = self.consecutive_passes >= self.settings.pass_limit(
            len(self.players)
        )
        if out_of_tiles or all_passed:
            self._change_status(GameStatus.FINISHED)
            logger.info(
                "Game over, winner(s): %s",
                ", ".join(player.name for player in self.winners),
            )

    def _change_status(self, new_status: GameStatus) -> None:
        self.status = new_status

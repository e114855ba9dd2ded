"""Orchestration of communication from API router to the game engine and the game store (and the reverse direction)."""

import logging
import random
import threading
from collections import defaultdict
from contextlib import contextmanager
from typing import Callable, Iterator
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    ExchangeTilesRequest,
    GameResponse,
    GetGameRequest,
    GetRackRequest,
    MoveResponse,
    PassTurnRequest,
    PlaceTilesRequest,
    PlayerView,
    RackResponse,
    TilePlacementModel,
)
from src.core.exceptions import NotYourTurnError, RepositoryError
from src.db.repository import GameRepository
from src.scrabble.game import Game, MoveResult
from src.scrabble.scoring import ScoringPolicy, TilePlacement
from src.scrabble.square import Square
from src.scrabble.tiles import Tile

logger = logging.getLogger(__name__)


class ScrabbleService:
    """Orchestration of layers for a tile-placement game.

    Commands on the same game are serialized: drawing and refilling racks must never interleave.
    """

    def __init__(
        self,
        repository: GameRepository,
        policy_factory: Callable[[], ScoringPolicy] | None = None,
    ) -> None:
        self.repo = repository
        self.policy_factory = policy_factory
        self._locks: defaultdict[UUID, threading.Lock] = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Seat the players and deal the racks."""
        rng = random.Random(request.seed) if request.seed is not None else None
        policy = self.policy_factory() if self.policy_factory else None
        game = Game.new_game(request.player_names, policy=policy, rng=rng)
        game_id = self.repo.create_game(game)
        logger.info("Created game %s", game_id)
        return self._create_game_response(game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game = self._fetch_game(request.game_id)
        with self._game_lock(request.game_id):
            return self._create_game_response(request.game_id, game)

    def get_rack(self, request: GetRackRequest) -> RackResponse:
        """A player may only look at their own rack."""
        game = self._fetch_game(request.game_id)
        with self._game_lock(request.game_id):
            player = game.roster.find(request.player_name)
            if player is None:
                raise RepositoryError(
                    f"No player {request.player_name!r} in game {request.game_id}."
                )
            return RackResponse(
                game_id=request.game_id,
                player_name=player.name,
                rack=player.rack_letters(),
            )

    def place_tiles(self, request: PlaceTilesRequest) -> MoveResponse:
        """Make a move attempt."""
        game = self._fetch_game(request.game_id)
        with self._game_lock(request.game_id):
            self._assert_your_turn(game, request.player_name)
            placement = [self._to_placement(model) for model in request.placements]
            result = game.submit_move(placement)
            return self._create_move_response(request.game_id, game, result)

    def pass_turn(self, request: PassTurnRequest) -> MoveResponse:
        game = self._fetch_game(request.game_id)
        with self._game_lock(request.game_id):
            self._assert_your_turn(game, request.player_name)
            result = game.pass_turn()
            return self._create_move_response(request.game_id, game, result)

    def exchange_tiles(self, request: ExchangeTilesRequest) -> MoveResponse:
        game = self._fetch_game(request.game_id)
        with self._game_lock(request.game_id):
            self._assert_your_turn(game, request.player_name)
            tiles = (
                [Tile.from_letter(letter) for letter in request.letters]
                if request.letters is not None
                else None
            )
            result = game.exchange_tiles(tiles)
            return self._create_move_response(request.game_id, game, result)

    def list_games(self) -> list[UUID]:
        """Show all running games."""
        return self.repo.list_game_ids()

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)
        with self._locks_guard:
            self._locks.pop(request.game_id, None)

    # -- Internal helpers --
    @contextmanager
    def _game_lock(self, game_id: UUID) -> Iterator[None]:
        with self._locks_guard:
            lock = self._locks[game_id]
        with lock:
            yield

    def _assert_your_turn(self, game: Game, player_name: str) -> None:
        """You must wait for your turn before making a move."""
        player_to_move = game.current_player.name
        if player_name != player_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {player_to_move} to make a move first."
            )

    def _to_placement(self, model: TilePlacementModel) -> TilePlacement:
        tile = Tile.from_letter(model.letter)
        if model.blank_letter is not None:
            tile = tile.assign(model.blank_letter)
        return TilePlacement(Square.from_label(model.square), tile)

    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert a game snapshot to a GameResponse. Racks stay private."""
        snapshot = game.snapshot()
        return GameResponse(
            game_id=game_id,
            board=snapshot.board,
            players=[
                PlayerView(name=player.name, score=player.score, rack_size=len(player.rack))
                for player in snapshot.players
            ],
            current_player=snapshot.players[snapshot.current_player_index].name,
            bag_remaining=snapshot.bag_remaining,
            status=snapshot.status,
            winners=snapshot.winners,
        )

    def _create_move_response(
        self, game_id: UUID, game: Game, result: MoveResult
    ) -> MoveResponse:
        return MoveResponse(
            valid=result.valid,
            score=result.score,
            message=result.message,
            game=self._create_game_response(game_id, game),
        )

    def _fetch_game(self, game_id: UUID) -> Game:
        """Attempt to find the game in the repository and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game

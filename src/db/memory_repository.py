"""Implementation of (Game)Repository that keeps the live Game objects in a dictionary"""

from uuid import UUID, uuid4

from src.scrabble.game import Game


class InMemoryGameRepository:
    """Games live as long as the process does."""

    def __init__(self) -> None:
        self._games: dict[UUID, Game] = {}

    def get_game(self, game_id: UUID) -> Game | None:
        """Get game by ID, if record exists."""
        return self._games.get(game_id)

    def create_game(self, game: Game) -> UUID:
        """Store new game and return the newly created game ID."""
        new_id = uuid4()
        self._games[new_id] = game
        return new_id

    def delete_game(self, game_id: UUID) -> Game | None:
        """Remove a game's record."""
        return self._games.pop(game_id, None)

    def list_game_ids(self) -> list[UUID]:
        return list(self._games)

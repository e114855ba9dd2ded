"""Protocol repository (the engine keeps games in memory; a persistent store would implement the same methods)"""

from typing import Protocol
from uuid import UUID

from src.scrabble.game import Game


class GameRepository(Protocol):
    """Storage of running games"""

    def get_game(self, game_id: UUID) -> Game | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: Game) -> UUID:
        """Store new game and return the newly created game ID."""
        ...

    def delete_game(self, game_id: UUID) -> Game | None:
        """Remove a game's record."""
        ...

    def list_game_ids(self) -> list[UUID]:
        """IDs of all stored games."""
        ...

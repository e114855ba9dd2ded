"""
Exceptions shared by all layers.

Illegal moves are recoverable: the Game reports them back as an invalid MoveResult.
Everything else propagates to the caller (service / API layer).
"""


class GameError(Exception):
    """Base class for everything the game backend raises on purpose."""


# --- ILLEGAL MOVES (recoverable, caller may resubmit) ---
class IllegalMoveError(GameError):
    pass


class IllegalFirstMoveError(IllegalMoveError):
    pass


class OccupiedCellError(IllegalMoveError):
    pass


class OutOfBoundsError(IllegalMoveError):
    pass


class TileNotInRackError(IllegalMoveError):
    pass


class BlankAssignmentError(IllegalMoveError):
    pass


class PlacementRejectedError(IllegalMoveError):
    """The scoring policy refused the placement."""


# --- GAME STATE ---
class GameStateError(GameError):
    pass


class GameOverError(GameStateError):
    pass


class GameSetupError(GameStateError):
    pass


class InvalidScoreError(GameStateError):
    pass


class NotYourTurnError(GameError):
    pass


# --- CONSTRUCTION (fatal: abort startup) ---
class ConstructionError(GameError):
    pass


class LetterTableError(ConstructionError):
    pass


class BoardConfigurationError(ConstructionError):
    pass


# --- OTHER LAYERS ---
class RepositoryError(GameError):
    pass


class InvalidRequestError(GameError):
    pass

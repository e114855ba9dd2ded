"""Requests and Response models"""

from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel, field_validator, model_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import GameStatus
from src.scrabble.letters import BLANK, is_playable_letter
from src.scrabble.square import Square

PlayerName = str


def _validate_letter(value: str) -> str:
    letter = value.upper()
    if letter != BLANK and not is_playable_letter(letter):
        raise InvalidRequestError(
            f"{value!r} is not a tile. Use a letter A-Z or {BLANK!r} for a blank."
        )
    return letter


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_names: list[PlayerName]
    seed: Optional[int] = None

    @field_validator("player_names")
    @classmethod
    def validate_player_names(cls, value: list[str]) -> list[str]:
        names = [name.strip() for name in value]
        if any(not name for name in names):
            raise InvalidRequestError("Player names cannot be empty.")
        if len(set(names)) != len(names):
            raise InvalidRequestError(f"Player names must be unique: {names}")
        return names


class TilePlacementModel(BaseModel):
    square: str
    letter: str
    blank_letter: Optional[str] = None

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        def _is_label_notation(value: str) -> bool:
            value = value.strip().upper()
            if not 2 <= len(value) <= 3:
                return False
            if not (value[0].isalpha() and value[1:].isdecimal()):
                return False
            return Square.from_label(value).is_within_bounds()

        if not _is_label_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a square on the board (A1 - O15)."
            )
        return value.strip().upper()

    @field_validator("letter")
    @classmethod
    def validate_letter(cls, value: str) -> str:
        return _validate_letter(value)

    @field_validator("blank_letter")
    @classmethod
    def validate_blank_letter(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        letter = value.upper()
        if not is_playable_letter(letter):
            raise InvalidRequestError(f"A blank cannot stand for {value!r}.")
        return letter

    @model_validator(mode="after")
    def validate_blank_assignment(self) -> Self:
        if self.blank_letter is not None and self.letter != BLANK:
            raise InvalidRequestError(
                f"Only a blank ({BLANK!r}) can stand for another letter, not {self.letter!r}."
            )
        return self


class PlaceTilesRequest(BaseModel):
    game_id: UUID
    player_name: PlayerName
    placements: list[TilePlacementModel]


class PassTurnRequest(BaseModel):
    game_id: UUID
    player_name: PlayerName


class ExchangeTilesRequest(BaseModel):
    game_id: UUID
    player_name: PlayerName
    # None: exchange the whole rack
    letters: Optional[list[str]] = None

    @field_validator("letters")
    @classmethod
    def validate_letters(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        if value is None:
            return value
        return [_validate_letter(letter) for letter in value]


class GetGameRequest(BaseModel):
    game_id: UUID


class GetRackRequest(BaseModel):
    game_id: UUID
    player_name: PlayerName


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class PlayerView(BaseModel):
    name: PlayerName
    score: int
    rack_size: int


class GameResponse(BaseModel):
    game_id: UUID
    board: list[str]
    players: list[PlayerView]
    current_player: PlayerName
    bag_remaining: int
    status: GameStatus
    winners: list[PlayerName]


class RackResponse(BaseModel):
    game_id: UUID
    player_name: PlayerName
    rack: list[str]


class MoveResponse(BaseModel):
    valid: bool
    score: Optional[int] = None
    message: Optional[str] = None
    game: GameResponse

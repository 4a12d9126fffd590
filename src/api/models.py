"""Requests and Response models"""

from string import digits
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.chess.square import BOARD_DIMENSIONS, FILE_NAMES
from src.core.exceptions import InvalidRequestError, OutOfRangeError
from src.core.shared_types import Color, PieceType, Status

SquareName = str


def validate_square_name(value: str) -> str:
    """
    Squares travel as algebraic names ('e2').
    Something that is not a letter + a number cannot be interpreted at all, a name like 'i9' simply is not on the board.
    """
    if len(value) != 2 or not (value[0].isalpha() and value[1] in digits):
        raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")

    num_ranks, num_files = BOARD_DIMENSIONS
    if value[0] not in FILE_NAMES[:num_files] or not (1 <= int(value[1]) <= num_ranks):
        raise OutOfRangeError(f"Square {value!r} does not lie on the board.")
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    starting_fen: Optional[str] = None

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        parts = value.strip().split(" ")
        if len(parts) != 6:
            raise InvalidRequestError(
                "FEN string must contain 6 space-separated parts."
            )
        return value.strip()


class NewGameRequest(BaseModel):
    game_id: UUID


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class LegalDestinationsRequest(BaseModel):
    game_id: UUID
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return validate_square_name(value)


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: SquareName
    to_square: SquareName
    promote_to: Optional[PieceType] = None

    @field_validator("from_square", "to_square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return validate_square_name(value)


# --- RESPONSE MODELS ---
class PieceModel(BaseModel):
    type: PieceType
    color: Color


class GameResponse(BaseModel):
    game_id: UUID
    pieces: dict[SquareName, PieceModel]
    side_to_move: Color
    status: Status
    status_side: Optional[Color] = None
    castling_rights: dict[str, bool]
    en_passant_target: Optional[SquareName] = None
    half_move_clock: int
    full_move_number: int
    last_move: Optional[str] = None


class LegalDestinationsResponse(BaseModel):
    game_id: UUID
    square: SquareName
    destinations: list[SquareName]

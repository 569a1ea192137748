"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from chessroom.core.exceptions import InvalidRequestError
from chessroom.core.shared_types import Color, PieceType, Status

PieceColor = str
PlayerIdentity = str
AlgebraicSquare = str


def _is_algebraic_notation(value: str) -> bool:
    if len(value) != 2:
        return False
    return value[0] in "abcdefgh" and value[1] in "12345678"


# --- REQUEST MODELS ---
class CreateRoomRequest(BaseModel):
    player_name: str


class JoinRoomRequest(BaseModel):
    room_id: UUID
    player_name: str


class StartGameRequest(BaseModel):
    room_id: UUID


class GetRoomRequest(BaseModel):
    room_id: UUID


class LegalMovesRequest(BaseModel):
    room_id: UUID
    player_name: str


class MoveRequest(BaseModel):
    """
    Move the player's piece of `piece_type` to `to_square`.
    Without `from_square` the first such piece (a1 up to h8) is the one that moves.
    """

    room_id: UUID
    player_name: str
    piece_type: PieceType
    to_square: AlgebraicSquare
    from_square: Optional[AlgebraicSquare] = None
    promote_to: Optional[PieceType] = None

    @field_validator("to_square", "from_square")
    @classmethod
    def validate_square(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")
        return value


# --- RESPONSE MODELS ---
class RoomResponse(BaseModel):
    room_id: UUID
    players: dict[PieceColor, PlayerIdentity]
    player_count: int
    game_started: bool
    status: Status
    fen_state: Optional[str] = None
    active_color: Optional[Color] = None
    move_history: list[str] = []
    is_check: bool = False
    is_checkmate: bool = False
    is_stalemate: bool = False


class LegalMovesResponse(BaseModel):
    room_id: UUID
    player_name: str
    color: Color
    legal_moves: dict[AlgebraicSquare, list[AlgebraicSquare]]

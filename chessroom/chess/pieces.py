"""Defines the types of chess pieces"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto

from chessroom.chess.position import Position
from chessroom.core.exceptions import InvalidFENError


class PieceType(Enum):
    KING = auto()
    QUEEN = auto()
    ROOK = auto()
    BISHOP = auto()
    KNIGHT = auto()
    PAWN = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()

    @property
    def opponent(self) -> Color:
        return Color.BLACK if self == Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Direction of a pawn push along y: White moves UP the board, Black moves DOWN."""
        return 1 if self == Color.WHITE else -1


FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


@dataclass(frozen=True)
class Piece:
    """
    A piece standing on the board.

    Pieces are values: moving one produces a new Piece at the destination (see `moved_to`),
    the old one simply disappears together with the slot it was owned by.
    """

    type: PieceType
    color: Color
    position: Position
    has_moved: bool = False

    @classmethod
    def from_fen(cls, character: str, position: Position) -> Piece:
        # lower case: Black pieces, upper case: White pieces
        if character.lower() not in FEN_TO_PIECE:
            raise InvalidFENError(f"Unknown piece character: {character!r}")
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color, position)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )

    def moved_to(self, position: Position) -> Piece:
        return replace(self, position=position, has_moved=True)

    def promoted_to(self, new_type: PieceType) -> Piece:
        return replace(self, type=new_type)

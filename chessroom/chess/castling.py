"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from chessroom.chess.pieces import Color
from chessroom.chess.position import Position
from chessroom.core.exceptions import InvalidFENError


class CastlingDirection(Enum):
    """The four castling directions. Values represent their encodings in FEN string."""

    WHITE_KING_SIDE = "K"
    WHITE_QUEEN_SIDE = "Q"
    BLACK_KING_SIDE = "k"
    BLACK_QUEEN_SIDE = "q"

    @property
    def color(self) -> Color:
        return Color.WHITE if self.value.isupper() else Color.BLACK


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    NOTE: If castling rights have not been revoked, we already know the king / rook are still at their starting squares.
    """

    king_from: Position
    king_to: Position
    rook_from: Position
    rook_to: Position

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> CastlingSquares:
        """Convenience method: to make mapping shown below (from CastlingDirection) more readable"""
        return cls(
            Position.from_algebraic(k_from),
            Position.from_algebraic(k_to),
            Position.from_algebraic(r_from),
            Position.from_algebraic(r_to),
        )

    def path(self) -> list[Position]:
        """Squares strictly between king and rook. All of them must be empty to castle."""
        step = 1 if self.rook_from.x > self.king_from.x else -1
        return [
            Position(x, self.king_from.y)
            for x in range(self.king_from.x + step, self.rook_from.x, step)
        ]

    def king_route(self) -> list[Position]:
        """The squares the king stands on / passes over / lands on. None of them may be attacked."""
        step = 1 if self.king_to.x > self.king_from.x else -1
        return [
            Position(x, self.king_from.y)
            for x in range(self.king_from.x, self.king_to.x + step, step)
        ]


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[CastlingDirection, CastlingSquares] = {
    CastlingDirection.WHITE_KING_SIDE: CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1"
    ),
    CastlingDirection.WHITE_QUEEN_SIDE: CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1"
    ),
    CastlingDirection.BLACK_KING_SIDE: CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8"
    ),
    CastlingDirection.BLACK_QUEEN_SIDE: CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8"
    ),
}


@dataclass(frozen=True)
class CastlingRights:
    """Rights will be revoked during the game, never granted back."""

    white_king_side: bool = True
    white_queen_side: bool = True
    black_king_side: bool = True
    black_queen_side: bool = True

    @classmethod
    def none(cls) -> CastlingRights:
        return cls(False, False, False, False)

    @classmethod
    def from_fen(cls, castle_fen: str) -> CastlingRights:
        """parse the part of the FEN string that encodes castling rights"""
        allowed = {direction.value for direction in CastlingDirection} | {"-"}
        if not castle_fen or any(character not in allowed for character in castle_fen):
            raise InvalidFENError(f"Invalid castling rights: {castle_fen!r}")
        return cls(
            white_king_side="K" in castle_fen,
            white_queen_side="Q" in castle_fen,
            black_king_side="k" in castle_fen,
            black_queen_side="q" in castle_fen,
        )

    def to_fen(self) -> str:
        """create the part of the FEN string that encodes castling rights"""
        castling_chars = "".join(
            direction.value for direction in CastlingDirection if self.allows(direction)
        )
        return castling_chars or "-"

    def allows(self, direction: CastlingDirection) -> bool:
        return getattr(self, _FIELD_NAMES[direction])

    def directions(self, color: Color) -> list[CastlingDirection]:
        """The directions the player with `color` may still castle in"""
        return [
            direction
            for direction in CastlingDirection
            if direction.color == color and self.allows(direction)
        ]

    def revoke(self, *directions: CastlingDirection) -> CastlingRights:
        rights = {name: getattr(self, name) for name in _FIELD_NAMES.values()}
        for direction in directions:
            rights[_FIELD_NAMES[direction]] = False
        return CastlingRights(**rights)

    def revoke_all(self, color: Color) -> CastlingRights:
        return self.revoke(
            *[direction for direction in CastlingDirection if direction.color == color]
        )


_FIELD_NAMES: dict[CastlingDirection, str] = {
    CastlingDirection.WHITE_KING_SIDE: "white_king_side",
    CastlingDirection.WHITE_QUEEN_SIDE: "white_queen_side",
    CastlingDirection.BLACK_KING_SIDE: "black_king_side",
    CastlingDirection.BLACK_QUEEN_SIDE: "black_queen_side",
}

"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING_FOR_PLAYERS = "waiting for players"
    READY = "ready"
    IN_PROGRESS = "in progress"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW_FIFTY_MOVE_RULE = "draw by 50 moves"

    @property
    def is_over(self) -> bool:
        return self in (Status.CHECKMATE, Status.STALEMATE, Status.DRAW_FIFTY_MOVE_RULE)


# --- Color and PieceType as they travel across the boundary (strings). The domain uses its own Enums in chessroom/chess/pieces.py
# --- NOTE Same names on purpose: let the imports show which versions are used in what part of the code


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"

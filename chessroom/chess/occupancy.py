"""
Obstruction oracle: the single occupancy lookup every movement rule goes through.

Bounds are not checked here. Off-board candidates never become a Position (see `Position.shifted`).
"""

from enum import Enum, auto
from typing import Optional, Protocol

from chessroom.chess.pieces import Color, Piece
from chessroom.chess.position import Position


class Board(Protocol):
    """Just the part of the board the oracle needs"""

    def piece_at(self, position: Position) -> Optional[Piece]: ...


class Occupancy(Enum):
    EMPTY = auto()
    FRIENDLY = auto()
    ENEMY = auto()


class CapturePolicy(Enum):
    """
    How a movement rule treats the first occupied square it runs into.

    * BLOCKING: any occupant stops the piece and the square is not reachable (no captures at all).
    * CAPTURE: an enemy occupant is reachable (it can be taken), a friendly one is not.
    """

    BLOCKING = "blocking"
    CAPTURE = "capture"


def is_obstructed(position: Position, board: Board) -> bool:
    """True iff a piece of either color stands on the square"""
    return board.piece_at(position) is not None


def classify(position: Position, board: Board, color: Color) -> Occupancy:
    """Who stands on the square, seen from the player with the `color` pieces"""
    piece = board.piece_at(position)
    if piece is None:
        return Occupancy.EMPTY
    return Occupancy.FRIENDLY if piece.color == color else Occupancy.ENEMY


def is_reachable(occupancy: Occupancy, policy: CapturePolicy) -> bool:
    """Can a piece land on a square with this occupancy?"""
    if occupancy == Occupancy.EMPTY:
        return True
    return policy == CapturePolicy.CAPTURE and occupancy == Occupancy.ENEMY

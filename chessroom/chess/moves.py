"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the candidate destination set for each piece type.
Every rule asks the obstruction oracle (occupancy.py) about the squares it wants to visit.

Legality (turn order, king safety, special moves) is checked later by the executor.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from chessroom.chess.occupancy import (
    Board,
    CapturePolicy,
    Occupancy,
    classify,
    is_obstructed,
    is_reachable,
)
from chessroom.chess.pieces import FEN_TO_PIECE, PIECE_TO_FEN, Color, Piece, PieceType
from chessroom.chess.position import BOARD_DIMENSIONS, Position, Vector


class MoveType(Enum):
    NORMAL = "normal"
    CASTLING = "castling"
    EN_PASSANT = "en_passant"
    PROMOTION = "promotion"


@dataclass(frozen=True)
class Move:
    """
    One entry of the move history. Never changed after it has been appended.

    `piece` is the moving piece as it stood on `from_position` before the move.
    """

    from_position: Position
    to_position: Position
    piece: Piece
    captured_piece: Optional[Piece] = None
    promotion: Optional[PieceType] = None
    move_type: MoveType = MoveType.NORMAL

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    def to_uci(self) -> str:
        """
        Universal Chess Interface notation: <from_square><to_square>[promotion piece]

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "e7e8q" : (pawn) moves from e7 to e8 and promotes to a queen (the q)
        """
        piece_char = PIECE_TO_FEN[self.promotion] if self.promotion else ""
        return f"{self.from_position.to_algebraic()}{self.to_position.to_algebraic()}{piece_char}"

    def to_record(self) -> dict[str, Any]:
        """Plain (JSON friendly) representation for the persistence layer"""
        return {
            "from": self.from_position.to_algebraic(),
            "to": self.to_position.to_algebraic(),
            "piece": self.piece.to_fen(),
            "piece_has_moved": self.piece.has_moved,
            "captured": self.captured_piece.to_fen() if self.captured_piece else None,
            "captured_on": (
                self.captured_piece.position.to_algebraic() if self.captured_piece else None
            ),
            "captured_has_moved": (
                self.captured_piece.has_moved if self.captured_piece else None
            ),
            "promotion": PIECE_TO_FEN[self.promotion] if self.promotion else None,
            "move_type": self.move_type.value,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Move:
        from_position = Position.from_algebraic(record["from"])
        piece = Piece.from_fen(record["piece"], from_position)
        if record.get("piece_has_moved"):
            piece = Piece(piece.type, piece.color, from_position, has_moved=True)

        captured_piece: Optional[Piece] = None
        if record.get("captured"):
            captured_on = Position.from_algebraic(record["captured_on"])
            captured_piece = Piece.from_fen(record["captured"], captured_on)
            if record.get("captured_has_moved"):
                captured_piece = Piece(
                    captured_piece.type, captured_piece.color, captured_on, has_moved=True
                )

        promotion = FEN_TO_PIECE[record["promotion"]] if record.get("promotion") else None
        return cls(
            from_position=from_position,
            to_position=Position.from_algebraic(record["to"]),
            piece=piece,
            captured_piece=captured_piece,
            promotion=promotion,
            move_type=MoveType(record.get("move_type", MoveType.NORMAL.value)),
        )


# --- DIRECTIONS / OFFSETS ---
STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS
# Knights always move such that |delta_rank| + |delta_file| = 3
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]


# --- MOVEMENT RULES ---
def raycasting_move(
    position: Position,
    color: Color,
    board: Board,
    directions: list[Vector],
    policy: CapturePolicy = CapturePolicy.CAPTURE,
) -> set[Position]:
    """
    Raycasting algorithm
    -----

    We define move directions and move along them until we hit another piece or
    the edge of the board. The first occupied square always ends the ray;
    whether it is part of the result depends on the capture policy.
    """
    reachable: set[Position] = set()
    for direction in directions:
        target = position.shifted(direction)
        while target is not None:
            occupancy = classify(target, board, color)
            if occupancy != Occupancy.EMPTY:
                if is_reachable(occupancy, policy):
                    reachable.add(target)
                break
            reachable.add(target)
            target = target.shifted(direction)
    return reachable


def single_step_move(
    position: Position,
    color: Color,
    board: Board,
    deltas: list[Vector],
    policy: CapturePolicy = CapturePolicy.CAPTURE,
) -> set[Position]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just take a single step along a direction"""
    reachable: set[Position] = set()
    for delta in deltas:
        target = position.shifted(delta)
        if target is None:
            continue
        if is_reachable(classify(target, board, color), policy):
            reachable.add(target)
    return reachable


def pawn_start_row(color: Color) -> int:
    return 1 if color == Color.WHITE else BOARD_DIMENSIONS[1] - 2


def promotion_row(color: Color) -> int:
    return BOARD_DIMENSIONS[1] - 1 if color == Color.WHITE else 0


def candidate_pawn_moves(
    position: Position,
    color: Color,
    board: Board,
    policy: CapturePolicy = CapturePolicy.CAPTURE,
) -> set[Position]:
    """
    A pawn:
    - moves by a single square forward (onto an empty square only).
    - It can move by two in their first move (so when on their starting row), if both squares are empty.
    - takes diagonally

    With the BLOCKING policy only the single push exists.
    NOTE: En passant will be taken care of in the executor
    """
    reachable: set[Position] = set()
    single_push = position.shifted((0, color.forward))
    if single_push is None or is_obstructed(single_push, board):
        single_push = None
    else:
        reachable.add(single_push)

    if policy == CapturePolicy.BLOCKING:
        return reachable

    if single_push is not None and position.y == pawn_start_row(color):
        double_push = single_push.shifted((0, color.forward))
        if double_push is not None and not is_obstructed(double_push, board):
            reachable.add(double_push)

    for df in (-1, 1):
        target = position.shifted((df, color.forward))
        if target is not None and classify(target, board, color) == Occupancy.ENEMY:
            reachable.add(target)
    return reachable


def candidate_knight_moves(
    position: Position,
    color: Color,
    board: Board,
    policy: CapturePolicy = CapturePolicy.CAPTURE,
) -> set[Position]:
    return single_step_move(position, color, board, KNIGHT_DELTAS, policy)


def candidate_bishop_moves(
    position: Position,
    color: Color,
    board: Board,
    policy: CapturePolicy = CapturePolicy.CAPTURE,
) -> set[Position]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return raycasting_move(position, color, board, DIAGONALS, policy)


def candidate_rook_moves(
    position: Position,
    color: Color,
    board: Board,
    policy: CapturePolicy = CapturePolicy.CAPTURE,
) -> set[Position]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(position, color, board, STRAIGHTS, policy)


def candidate_queen_moves(
    position: Position,
    color: Color,
    board: Board,
    policy: CapturePolicy = CapturePolicy.CAPTURE,
) -> set[Position]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return candidate_rook_moves(position, color, board, policy) | candidate_bishop_moves(
        position, color, board, policy
    )


def candidate_king_moves(
    position: Position,
    color: Color,
    board: Board,
    policy: CapturePolicy = CapturePolicy.CAPTURE,
) -> set[Position]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (handled by the executor).
    """
    return single_step_move(position, color, board, KING_DELTAS, policy)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Position, Color, Board, CapturePolicy], set[Position]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def candidate_moves(
    piece: Piece, board: Board, policy: CapturePolicy = CapturePolicy.CAPTURE
) -> set[Position]:
    """Dispatch on the (closed) set of piece types"""
    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(piece.position, piece.color, board, policy)


# --- CAPTURING RULES / ATTACKING RULES ---
def raycasting_attack(
    position: Position,
    by_color: Color,
    by_piece_types: tuple[PieceType, ...],
    board: Board,
    directions: list[Vector],
) -> bool:
    """
    Raycasting algorithm for attacks.
    ---

    Where `raycasting_move()` determines
    _"What is the line-of-sight of the piece standing on the specified square?"_

    This function determines:
    _"Is the specified square in the line-of-sight of a piece of the specified color and that
    is allowed to move along the given direction?"_
    """
    for direction in directions:
        target = position.shifted(direction)
        while target is not None:
            piece_found = board.piece_at(target)
            if piece_found is not None:
                if piece_found.color == by_color and piece_found.type in by_piece_types:
                    return True
                break
            target = target.shifted(direction)
    return False


def single_step_attack(
    position: Position,
    by_color: Color,
    by_piece_type: PieceType,
    board: Board,
    deltas: list[Vector],
) -> bool:
    """Equivalent of `raycasting_attack()` for pieces that only take a single step."""
    for delta in deltas:
        target = position.shifted(delta)
        if target is None:
            continue
        piece_found = board.piece_at(target)
        if (
            piece_found is not None
            and piece_found.color == by_color
            and piece_found.type == by_piece_type
        ):
            return True
    return False


def is_attacked(position: Position, by_color: Color, board: Board) -> bool:
    """
    Could a piece of `by_color` take on the specified square?

    NOTE: Pawn moves are not symmetric. To check IF a white pawn attacks your square, look one row DOWN the board.
    """
    inverse_pawn_take_deltas: list[Vector] = [(1, -by_color.forward), (-1, -by_color.forward)]
    return (
        single_step_attack(position, by_color, PieceType.PAWN, board, inverse_pawn_take_deltas)
        or single_step_attack(position, by_color, PieceType.KNIGHT, board, KNIGHT_DELTAS)
        or single_step_attack(position, by_color, PieceType.KING, board, KING_DELTAS)
        or raycasting_attack(
            position, by_color, (PieceType.ROOK, PieceType.QUEEN), board, STRAIGHTS
        )
        or raycasting_attack(
            position, by_color, (PieceType.BISHOP, PieceType.QUEEN), board, DIAGONALS
        )
    )


# -- PAWN PROMOTION ---
PROMOTION_OPTIONS: list[PieceType] = [
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.ROOK,
    PieceType.QUEEN,
]

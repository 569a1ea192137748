"""
Rules on top of the plain movement geometry: castling, en passant, promotion, king safety, and applying a move to a GameState.

Only the CAPTURE policy knows these rules. With the BLOCKING policy pieces can never be taken,
so a king can never be attacked and the plain movement rules are all there is.
"""

from typing import Optional

from chessroom.chess.board import Board
from chessroom.chess.castling import CASTLING_RULES, CastlingDirection
from chessroom.chess.game_state import GameState
from chessroom.chess.moves import (
    Move,
    MoveType,
    candidate_moves,
    is_attacked,
    promotion_row,
)
from chessroom.chess.occupancy import CapturePolicy, Occupancy, classify, is_obstructed
from chessroom.chess.pieces import Color, Piece, PieceType
from chessroom.chess.position import Position


# --- KING SAFETY ---
def is_in_check(board: Board, color: Color) -> bool:
    """A board without a king of this color (test positions) is never in check."""
    king_position = board.locate(PieceType.KING, color)
    if king_position is None:
        return False
    return is_attacked(king_position, color.opponent, board)


def leaves_king_in_check(state: GameState, piece: Piece, destination: Position) -> bool:
    """
    Return True if the move puts (or leaves) you in check

    plan:
    1. Copy the state
    2. make the candidate move
    3. determine if king is in check on the new board
    """
    simulation = state.copy()
    promote_to = PieceType.QUEEN if is_promotion(piece, destination) else None
    apply_move(simulation, piece, destination, promote_to)
    return is_in_check(simulation.board, piece.color)


# --- CASTLING ---
def castling_destinations(state: GameState, king: Piece) -> dict[Position, CastlingDirection]:
    """
    Where the king may castle to.
    ---

    **you are allowed to castle if**

    * Castling rights are not yet revoked (and king and rook are still on their starting squares).
    * There is no piece in between the king and the rook.
    * You are not in check, and the king does not pass over or land on an attacked square.
    """
    destinations: dict[Position, CastlingDirection] = {}
    board = state.board
    for direction in state.castling_rights.directions(king.color):
        squares = CASTLING_RULES[direction]
        if king.position != squares.king_from:
            continue

        rook = board.piece_at(squares.rook_from)
        if rook is None or rook.type != PieceType.ROOK or rook.color != king.color:
            continue

        if any(is_obstructed(square, board) for square in squares.path()):
            continue

        if any(
            is_attacked(square, king.color.opponent, board) for square in squares.king_route()
        ):
            continue

        destinations[squares.king_to] = direction
    return destinations


def castling_direction_of(piece: Piece, destination: Position) -> Optional[CastlingDirection]:
    """A king jumping two files is castling. Which direction?"""
    if piece.type != PieceType.KING or abs(destination.x - piece.position.x) != 2:
        return None
    for direction, squares in CASTLING_RULES.items():
        if squares.king_from == piece.position and squares.king_to == destination:
            return direction
    return None


# --- EN PASSANT ---
def en_passant_victim(state: GameState, pawn: Piece) -> Optional[Position]:
    """
    Square of the opponent's pawn that can be taken en passant by this pawn (if any).

    NOTE The pawn removed stands on the same file as the en passant square,
    and on the same row the capturing pawn is standing on.
    """
    target = state.en_passant_target
    if pawn.type != PieceType.PAWN or target is None:
        return None
    if target.y - pawn.position.y != pawn.color.forward or abs(target.x - pawn.position.x) != 1:
        return None

    victim_square = Position(target.x, pawn.position.y)
    victim = state.board.piece_at(victim_square)
    if victim is None or victim.type != PieceType.PAWN or victim.color == pawn.color:
        return None
    return victim_square


def is_en_passant(state: GameState, piece: Piece, destination: Position) -> bool:
    return (
        destination == state.en_passant_target
        and en_passant_victim(state, piece) is not None
        and classify(destination, state.board, piece.color) == Occupancy.EMPTY
    )


# --- PROMOTION ---
def is_promotion(piece: Piece, destination: Position) -> bool:
    return piece.type == PieceType.PAWN and destination.y == promotion_row(piece.color)


# --- LEGAL MOVES ---
def legal_destinations(
    state: GameState, piece: Piece, policy: CapturePolicy = CapturePolicy.CAPTURE
) -> set[Position]:
    """
    All squares the piece may move to right now
    ----

    1. generate candidate moves, using the basic movement rules for the piece type
    2. add castling moves (king) and the en passant move (pawn)
    3. remove illegal options --> a move that would put you in check or you are in check and the move does not get you out of it.
    """
    destinations = candidate_moves(piece, state.board, policy)
    if policy == CapturePolicy.BLOCKING:
        return destinations

    if piece.type == PieceType.KING:
        destinations |= set(castling_destinations(state, piece))
    if en_passant_victim(state, piece) is not None:
        assert state.en_passant_target is not None
        destinations.add(state.en_passant_target)

    return {
        destination
        for destination in destinations
        if not leaves_king_in_check(state, piece, destination)
    }


def has_legal_move(state: GameState, policy: CapturePolicy = CapturePolicy.CAPTURE) -> bool:
    return any(
        legal_destinations(state, piece, policy)
        for piece in state.board.pieces(state.active_color)
    )


# --- APPLYING A MOVE ---
def apply_move(
    state: GameState,
    piece: Piece,
    destination: Position,
    promote_to: Optional[PieceType] = None,
) -> Move:
    """
    Update the state in place with a move that is already known to be legal.
    ---

    1. update the board (NOTE: castling moves the king and the rook, en passant removes the pawn that got passed)
    2. update castling rights, the en passant square, and the move counters
    3. hand the turn to the opponent
    4. append the move to the history
    """
    board = state.board
    captured: Optional[Piece] = None
    move_type = MoveType.NORMAL

    castling_direction = castling_direction_of(piece, destination)
    if castling_direction is not None:
        squares = CASTLING_RULES[castling_direction]
        board.move_piece(squares.king_from, squares.king_to)
        board.move_piece(squares.rook_from, squares.rook_to)
        move_type = MoveType.CASTLING
    elif is_en_passant(state, piece, destination):
        victim_square = en_passant_victim(state, piece)
        assert victim_square is not None
        captured = board.remove_piece(victim_square)
        board.move_piece(piece.position, destination)
        move_type = MoveType.EN_PASSANT
    else:
        captured = board.move_piece(piece.position, destination)

    promotion: Optional[PieceType] = None
    if is_promotion(piece, destination):
        promotion = promote_to or PieceType.QUEEN
        promoted = board.piece_at(destination)
        assert promoted is not None
        board.place_piece(promoted.promoted_to(promotion))
        move_type = MoveType.PROMOTION

    move = Move(
        from_position=piece.position,
        to_position=destination,
        piece=piece,
        captured_piece=captured,
        promotion=promotion,
        move_type=move_type,
    )

    _revoke_castling_rights_if_needed(state, move)
    state.en_passant_target = _en_passant_target_after(move)

    # half move clock: reset by a pawn move or a capture
    if piece.type == PieceType.PAWN or move.is_capture:
        state.fifty_move_counter = 0
    else:
        state.fifty_move_counter += 1

    if piece.color == Color.BLACK:
        state.full_move_number += 1

    state.active_color = piece.color.opponent
    state.move_history.append(move)
    return move


def _revoke_castling_rights_if_needed(state: GameState, move: Move) -> None:
    """
    Checks which rights should get revoked
    ----

    1. If you are moving your king (castling included) --> revoke both
    2. If you are moving a rook away from its starting square --> revoke that direction
    3. If you are taking your opponent's rook on its starting square --> revoke that direction of your opponent
    """
    rights = state.castling_rights
    if move.piece.type == PieceType.KING:
        rights = rights.revoke_all(move.piece.color)

    for direction, squares in CASTLING_RULES.items():
        if move.from_position == squares.rook_from and direction.color == move.piece.color:
            rights = rights.revoke(direction)
        if (
            move.captured_piece is not None
            and move.captured_piece.type == PieceType.ROOK
            and move.captured_piece.position == squares.rook_from
            and direction.color == move.captured_piece.color
        ):
            rights = rights.revoke(direction)

    state.castling_rights = rights


def _en_passant_target_after(move: Move) -> Optional[Position]:
    """A pawn that moved two squares can be taken on the square it skipped, for one turn only."""
    if move.piece.type != PieceType.PAWN:
        return None
    if abs(move.to_position.y - move.from_position.y) != 2:
        return None
    return Position(move.from_position.x, move.from_position.y + move.piece.color.forward)

"""Checks for ending the game. Run after every accepted move, for the player who is to move next."""

from chessroom.chess.game_state import GameState
from chessroom.chess.occupancy import CapturePolicy
from chessroom.chess.rules import has_legal_move, is_in_check
from chessroom.core.shared_types import Status

# 50 moves by each player
FIFTY_MOVE_LIMIT = 100


def evaluate(state: GameState, policy: CapturePolicy = CapturePolicy.CAPTURE) -> None:
    """
    Fill in the check flags and the status of the state.

    With the BLOCKING policy no piece can be taken, so the check flags stay False
    and only the fifty move rule can end the game.
    """
    if policy == CapturePolicy.CAPTURE:
        state.is_check = is_in_check(state.board, state.active_color)
        can_move = has_legal_move(state, policy)
        state.is_checkmate = state.is_check and not can_move
        state.is_stalemate = not state.is_check and not can_move
    else:
        state.is_check = False
        state.is_checkmate = False
        state.is_stalemate = False

    if state.is_checkmate:
        state.status = Status.CHECKMATE
    elif state.is_stalemate:
        state.status = Status.STALEMATE
    elif state.fifty_move_counter >= FIFTY_MOVE_LIMIT:
        state.status = Status.DRAW_FIFTY_MOVE_RULE
    else:
        state.status = Status.IN_PROGRESS

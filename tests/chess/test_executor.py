"""Unit tests for chessroom/chess/executor.py"""

from copy import deepcopy

import pytest

from chessroom.chess.executor import MoveExecutor
from chessroom.chess.game_state import GameState
from chessroom.chess.moves import MoveType
from chessroom.chess.occupancy import CapturePolicy
from chessroom.chess.pieces import Color, Piece, PieceType
from chessroom.chess.position import Position
from chessroom.core.exceptions import (
    GameNotInProgressError,
    IllegalMoveError,
    MoveError,
    NoSuchPieceError,
    NotYourTurnError,
)
from chessroom.core.shared_types import Status

WHITE = "alice"
BLACK = "bob"


@pytest.fixture
def executor() -> MoveExecutor:
    return MoveExecutor()


def sq(name: str) -> Position:
    return Position.from_algebraic(name)


# --- HAPPY PATH ---
@pytest.mark.parametrize("x", range(8))
def test_pawn_push_flips_turn(executor: MoveExecutor, players: dict[Color, str], x: int) -> None:
    """Moving the first pawn: with an origin any of the 8 pawns can push to row 2"""
    state = GameState.new_game()
    new_state = executor.attempt_move(
        state, players, WHITE, PieceType.PAWN, Position(x, 2), origin=Position(x, 1)
    )
    assert new_state.active_color == Color.BLACK
    assert len(new_state.move_history) == 1
    assert new_state.board.piece_at(Position(x, 1)) is None
    assert new_state.board.piece_at(Position(x, 2)) == Piece(
        PieceType.PAWN, Color.WHITE, Position(x, 2), has_moved=True
    )


def test_accepted_move_does_not_touch_input(executor: MoveExecutor, players: dict[Color, str]) -> None:
    state = GameState.new_game()
    before = deepcopy(state)
    new_state = executor.attempt_move(state, players, WHITE, PieceType.KNIGHT, sq("c3"))
    assert state == before
    assert new_state is not state


def test_first_piece_in_board_index_order_moves(executor: MoveExecutor, players: dict[Color, str]) -> None:
    """Without origin the a-pawn (first match from a1) is the pawn that moves"""
    state = GameState.new_game()
    new_state = executor.attempt_move(state, players, WHITE, PieceType.PAWN, sq("a3"))
    assert new_state.move_history[-1].from_position == sq("a2")


def test_first_match_decides_even_if_another_piece_could_go(
    executor: MoveExecutor, players: dict[Color, str]
) -> None:
    """Knight on b1 is found first; g1 could reach f3, but b1 cannot"""
    state = GameState.new_game()
    with pytest.raises(IllegalMoveError):
        executor.attempt_move(state, players, WHITE, PieceType.KNIGHT, sq("f3"))
    new_state = executor.attempt_move(
        state, players, WHITE, PieceType.KNIGHT, sq("f3"), origin=sq("g1")
    )
    assert new_state.board.piece_at(sq("f3")) is not None


def test_sequence_of_moves(executor: MoveExecutor, players: dict[Color, str]) -> None:
    state = GameState.new_game()
    for requester, piece_type, origin, destination in [
        (WHITE, PieceType.PAWN, "e2", "e4"),
        (BLACK, PieceType.PAWN, "e7", "e5"),
        (WHITE, PieceType.KNIGHT, "g1", "f3"),
        (BLACK, PieceType.KNIGHT, "b8", "c6"),
    ]:
        history_length = len(state.move_history)
        color = state.active_color
        state = executor.attempt_move(
            state, players, requester, piece_type, sq(destination), origin=sq(origin)
        )
        assert state.active_color == color.opponent
        assert len(state.move_history) == history_length + 1
    assert state.to_fen() == "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3"


def test_capture_is_recorded(executor: MoveExecutor, players: dict[Color, str]) -> None:
    state = GameState.from_fen("4k3/8/8/3p4/4P3/8/8/4K3 w - - 3 1")
    new_state = executor.attempt_move(state, players, WHITE, PieceType.PAWN, sq("d5"))
    move = new_state.move_history[-1]
    assert move.captured_piece == Piece(PieceType.PAWN, Color.BLACK, sq("d5"))
    assert new_state.board.pieces(Color.BLACK) == [
        Piece(PieceType.KING, Color.BLACK, sq("e8"))
    ]
    assert new_state.fifty_move_counter == 0


def test_castling_through_executor(executor: MoveExecutor, players: dict[Color, str]) -> None:
    state = GameState.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    new_state = executor.attempt_move(state, players, WHITE, PieceType.KING, sq("c1"))
    assert new_state.move_history[-1].move_type == MoveType.CASTLING
    assert new_state.board.piece_at(sq("d1")) is not None
    assert new_state.board.piece_at(sq("a1")) is None


def test_promotion_choice(executor: MoveExecutor, players: dict[Color, str]) -> None:
    state = GameState.from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
    new_state = executor.attempt_move(
        state, players, WHITE, PieceType.PAWN, sq("a8"), promote_to=PieceType.ROOK
    )
    promoted = new_state.board.piece_at(sq("a8"))
    assert promoted is not None and promoted.type == PieceType.ROOK
    # rook on a8 checks the king on e8
    assert new_state.is_check


@pytest.mark.parametrize("promote_to", [PieceType.KING, PieceType.PAWN])
def test_invalid_promotion_choice(
    executor: MoveExecutor, players: dict[Color, str], promote_to: PieceType
) -> None:
    state = GameState.from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
    with pytest.raises(IllegalMoveError):
        executor.attempt_move(state, players, WHITE, PieceType.PAWN, sq("a8"), promote_to=promote_to)


def test_promotion_choice_without_promotion(executor: MoveExecutor, players: dict[Color, str]) -> None:
    with pytest.raises(IllegalMoveError):
        executor.attempt_move(
            GameState.new_game(), players, WHITE, PieceType.PAWN, sq("a3"), promote_to=PieceType.QUEEN
        )


def test_checkmate_ends_the_game(executor: MoveExecutor, players: dict[Color, str]) -> None:
    """Fool's mate"""
    state = GameState.new_game()
    for requester, piece_type, origin, destination in [
        (WHITE, PieceType.PAWN, "f2", "f3"),
        (BLACK, PieceType.PAWN, "e7", "e5"),
        (WHITE, PieceType.PAWN, "g2", "g4"),
        (BLACK, PieceType.QUEEN, "d8", "h4"),
    ]:
        state = executor.attempt_move(
            state, players, requester, piece_type, sq(destination), origin=sq(origin)
        )
    assert state.is_check
    assert state.is_checkmate
    assert state.status == Status.CHECKMATE

    with pytest.raises(GameNotInProgressError):
        executor.attempt_move(state, players, WHITE, PieceType.KING, sq("f2"))


# --- REJECTIONS ---
def test_not_your_turn(executor: MoveExecutor, players: dict[Color, str]) -> None:
    state = GameState.new_game()
    with pytest.raises(NotYourTurnError):
        executor.attempt_move(state, players, BLACK, PieceType.PAWN, sq("a6"))
    with pytest.raises(NotYourTurnError):
        executor.attempt_move(state, players, "mallory", PieceType.PAWN, sq("a3"))


def test_no_such_piece(executor: MoveExecutor, players: dict[Color, str]) -> None:
    state = GameState.from_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
    with pytest.raises(NoSuchPieceError):
        executor.attempt_move(state, players, WHITE, PieceType.QUEEN, sq("d4"))


def test_no_such_piece_on_origin(executor: MoveExecutor, players: dict[Color, str]) -> None:
    state = GameState.new_game()
    # empty square, wrong piece type, opponent's piece
    for origin in ("e4", "b1", "e7"):
        with pytest.raises(NoSuchPieceError):
            executor.attempt_move(
                state, players, WHITE, PieceType.PAWN, sq("e3"), origin=sq(origin)
            )


def test_rook_cannot_pass_obstruction(executor: MoveExecutor, players: dict[Color, str]) -> None:
    """Rook on (0,0) targeting (0,5) with (0,3) occupied"""
    state = GameState.from_fen("4k3/8/8/8/n7/8/8/R3K3 w - - 0 1")
    with pytest.raises(IllegalMoveError):
        executor.attempt_move(state, players, WHITE, PieceType.ROOK, Position(0, 5))


def test_rejection_leaves_state_unchanged(executor: MoveExecutor, players: dict[Color, str]) -> None:
    """Calling twice with an illegal destination: the state is the same both times"""
    state = GameState.new_game()
    snapshot = deepcopy(state)
    for _ in range(2):
        with pytest.raises(IllegalMoveError):
            executor.attempt_move(state, players, WHITE, PieceType.ROOK, sq("a5"))
        assert state == snapshot
        assert state.to_fen() == snapshot.to_fen()


def test_rejections_are_distinguishable(executor: MoveExecutor, players: dict[Color, str]) -> None:
    state = GameState.new_game()
    kinds = set()
    for requester, piece_type, destination in [
        (BLACK, PieceType.PAWN, "a6"),
        (WHITE, PieceType.PAWN, "a5"),
    ]:
        with pytest.raises(MoveError) as error:
            executor.attempt_move(state, players, requester, piece_type, sq(destination))
        kinds.add(error.value.kind)
    assert len(kinds) == 2


def test_move_into_check_rejected(executor: MoveExecutor, players: dict[Color, str]) -> None:
    state = GameState.from_fen("3r2k1/8/8/8/8/8/8/4K3 w - - 0 1")
    with pytest.raises(IllegalMoveError):
        executor.attempt_move(state, players, WHITE, PieceType.KING, sq("d1"))


def test_game_not_in_progress(executor: MoveExecutor, players: dict[Color, str]) -> None:
    state = GameState.new_game()
    state.status = Status.STALEMATE
    with pytest.raises(GameNotInProgressError):
        executor.attempt_move(state, players, WHITE, PieceType.PAWN, sq("a3"))


# --- BLOCKING POLICY ---
def test_blocking_policy_forbids_captures(players: dict[Color, str]) -> None:
    executor = MoveExecutor(CapturePolicy.BLOCKING)
    state = GameState.from_fen("4k3/8/8/p7/8/8/8/R3K3 w - - 0 1")
    with pytest.raises(IllegalMoveError):
        executor.attempt_move(state, players, WHITE, PieceType.ROOK, sq("a5"))
    new_state = executor.attempt_move(state, players, WHITE, PieceType.ROOK, sq("a4"))
    assert new_state.active_color == Color.BLACK


def test_blocking_policy_pawn_single_step(players: dict[Color, str]) -> None:
    executor = MoveExecutor(CapturePolicy.BLOCKING)
    state = GameState.new_game()
    with pytest.raises(IllegalMoveError):
        executor.attempt_move(state, players, WHITE, PieceType.PAWN, sq("a4"))
    executor.attempt_move(state, players, WHITE, PieceType.PAWN, sq("a3"))


# --- LEGAL MOVES ---
def test_legal_moves_start_position(executor: MoveExecutor, players: dict[Color, str]) -> None:
    moves = executor.legal_moves(GameState.new_game(), players, WHITE)
    assert sum(len(targets) for targets in moves.values()) == 20
    assert moves[sq("g1")] == {sq("f3"), sq("h3")}
    assert sq("e1") not in moves


def test_legal_moves_not_your_turn(executor: MoveExecutor, players: dict[Color, str]) -> None:
    with pytest.raises(NotYourTurnError):
        executor.legal_moves(GameState.new_game(), players, BLACK)

"""
Authoritative state of one match: the board plus everything a FEN string encodes, the move history and the game status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from chessroom.chess.board import Board, initial_layout
from chessroom.chess.castling import CastlingRights
from chessroom.chess.moves import Move
from chessroom.chess.pieces import Color
from chessroom.chess.position import Position
from chessroom.core.exceptions import InvalidFENError, InvalidPositionError
from chessroom.core.models import GameModel
from chessroom.core.shared_types import Status

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


@dataclass
class GameState:
    """
    FEN, or Forsyth-Edwards Notation, describes everything but the history:

    <board placement> <active color> <castling rights> <en passant square> <half move clock> <full move number>

    ex) The standard starting position has a FEN
    rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1

    * `fifty_move_counter` is the half move clock: half-moves since the last pawn move or capture.
    * `is_check` / `is_checkmate` / `is_stalemate` describe the situation of `active_color`.
    """

    board: Board
    active_color: Color = Color.WHITE
    move_history: list[Move] = field(default_factory=list)
    is_check: bool = False
    is_checkmate: bool = False
    is_stalemate: bool = False
    fifty_move_counter: int = 0
    castling_rights: CastlingRights = field(default_factory=CastlingRights)
    en_passant_target: Optional[Position] = None
    full_move_number: int = 1
    status: Status = Status.IN_PROGRESS

    @classmethod
    def new_game(cls) -> GameState:
        return cls(board=initial_layout())

    @classmethod
    def from_fen(cls, fen: str) -> GameState:
        """Parse the FEN into data. Pieces are considered unmoved unless on a square that says otherwise."""
        parts = fen.strip().split(" ")
        if len(parts) != 6:
            raise InvalidFENError(f"FEN must contain 6 space-separated parts: {fen!r}")
        (
            placement,
            active_color,
            castling_str,
            en_passant_algebraic,
            half_move_clock,
            num_turns,
        ) = parts

        if active_color not in ("w", "b"):
            raise InvalidFENError(f"Active color must be 'w' or 'b', got {active_color!r}")
        if not (half_move_clock.isdigit() and num_turns.isdigit()):
            raise InvalidFENError(f"Move counters must be non-negative integers: {fen!r}")

        try:
            en_passant_target = (
                Position.from_algebraic(en_passant_algebraic)
                if en_passant_algebraic != "-"
                else None
            )
        except InvalidPositionError as e:
            raise InvalidFENError(f"Invalid en passant square: {en_passant_algebraic!r}") from e

        return cls(
            board=Board.from_fen(placement),
            active_color=Color.WHITE if active_color == "w" else Color.BLACK,
            castling_rights=CastlingRights.from_fen(castling_str),
            en_passant_target=en_passant_target,
            fifty_move_counter=int(half_move_clock),
            full_move_number=int(num_turns),
        )

    def to_fen(self) -> str:
        """reverse operation: write a FEN from the given data"""
        active_color = "w" if self.active_color == Color.WHITE else "b"
        en_passant_algebraic = (
            self.en_passant_target.to_algebraic() if self.en_passant_target else "-"
        )
        return " ".join(
            [
                self.board.to_fen(),
                active_color,
                self.castling_rights.to_fen(),
                en_passant_algebraic,
                str(self.fifty_move_counter),
                str(self.full_move_number),
            ]
        )

    def copy(self) -> GameState:
        """Working copy for the executor. Moves and pieces are immutable, so copying the containers suffices."""
        return GameState(
            board=self.board.copy(),
            active_color=self.active_color,
            move_history=list(self.move_history),
            is_check=self.is_check,
            is_checkmate=self.is_checkmate,
            is_stalemate=self.is_stalemate,
            fifty_move_counter=self.fifty_move_counter,
            castling_rights=self.castling_rights,
            en_passant_target=self.en_passant_target,
            full_move_number=self.full_move_number,
            status=self.status,
        )

    # --- TRANSPORT ---
    def to_model(self) -> GameModel:
        """Encode into a format the Service/ DB layer uses"""
        return GameModel(
            fen=self.to_fen(),
            moved_squares=self.board.moved_squares(),
            move_history=[move.to_record() for move in self.move_history],
            is_check=self.is_check,
            is_checkmate=self.is_checkmate,
            is_stalemate=self.is_stalemate,
            status=self.status.value,
        )

    @classmethod
    def from_model(cls, model: GameModel) -> GameState:
        """Define how to construct a GameState from the information the Service layer actually has"""
        if model.status not in [status.value for status in Status]:
            raise InvalidFENError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(status.value for status in Status)}"
            )
        state = cls.from_fen(model.fen)
        state.board.mark_moved(model.moved_squares)
        state.move_history = [Move.from_record(record) for record in model.move_history]
        state.is_check = model.is_check
        state.is_checkmate = model.is_checkmate
        state.is_stalemate = model.is_stalemate
        state.status = Status(model.status)
        return state

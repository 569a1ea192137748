"""
The executor is the entrypoint into the domain layer for the service layer.
It orchestrates one move attempt: whose turn is it, which piece moves, is the destination reachable, and what is the next GameState.

AwaitingMove(active_color) -> MoveProposed(piece, destination) -> Applied | Rejected(reason)
"""

import logging
from typing import Mapping, Optional

from chessroom.chess.game_state import GameState
from chessroom.chess.moves import PROMOTION_OPTIONS
from chessroom.chess.occupancy import CapturePolicy
from chessroom.chess.pieces import Color, Piece, PieceType
from chessroom.chess.position import Position
from chessroom.chess.rules import apply_move, is_promotion, legal_destinations
from chessroom.chess.status import evaluate
from chessroom.core.exceptions import (
    GameNotInProgressError,
    IllegalMoveError,
    NoSuchPieceError,
    NotYourTurnError,
)
from chessroom.core.shared_types import Status

_LOGGER = logging.getLogger(__name__)


class MoveExecutor:
    """Validates and applies move requests. Holds no game data itself, only the capture policy to play by."""

    def __init__(self, policy: CapturePolicy = CapturePolicy.CAPTURE) -> None:
        self.policy = policy

    def attempt_move(
        self,
        state: GameState,
        players: Mapping[Color, str],
        requester: str,
        piece_type: PieceType,
        destination: Position,
        origin: Optional[Position] = None,
        promote_to: Optional[PieceType] = None,
    ) -> GameState:
        """
        Attempt to make a move
        -----

        1. make sure the requester is the player whose turn it is
        2. find the piece that should move
        3. determine the squares it may move to
        4. reject if the destination is not one of them
        5. apply the move (board, castling rights, en passant square, counters, turn, history) on a copy
        6. update check flags / game status

        The given state is never touched: a rejection leaves it exactly as it was,
        and on success the caller receives a new GameState.
        """
        # make sure the game is (still) in progress
        if state.status != Status.IN_PROGRESS:
            raise GameNotInProgressError(f"Game is not in progress. status: {state.status}")

        # make sure it is your turn
        self._assert_your_turn(state, players, requester)

        # find the piece
        piece = self._find_piece(state, piece_type, origin)

        # check if move is legal
        if destination not in legal_destinations(state, piece, self.policy):
            _LOGGER.debug(
                "Rejected %s %s -> %s for %s",
                piece.type.name,
                piece.position,
                destination,
                requester,
            )
            raise IllegalMoveError(
                f"{piece.color.name.lower()} {piece.type.name.lower()} on {piece.position} cannot move to {destination}."
            )
        self._validate_promotion(piece, destination, promote_to)

        new_state = state.copy()
        move = apply_move(new_state, piece, destination, promote_to)
        evaluate(new_state, self.policy)

        _LOGGER.info(
            "%s played %s (%s), status: %s",
            requester,
            move.to_uci(),
            move.move_type.value,
            new_state.status,
        )
        return new_state

    def legal_moves(
        self, state: GameState, players: Mapping[Color, str], requester: str
    ) -> dict[Position, set[Position]]:
        """
        Service will request the set of legal moves (to display to the user, for instance).
        Pieces without any legal destination are left out.
        """
        if state.status != Status.IN_PROGRESS:
            raise GameNotInProgressError(f"Game is not in progress. status: {state.status}")
        self._assert_your_turn(state, players, requester)

        moves: dict[Position, set[Position]] = {}
        for piece in state.board.pieces(state.active_color):
            destinations = legal_destinations(state, piece, self.policy)
            if destinations:
                moves[piece.position] = destinations
        return moves

    # -- PRIVATE HELPERS ---
    def _assert_your_turn(
        self, state: GameState, players: Mapping[Color, str], requester: str
    ) -> None:
        """You must wait for your turn before calculating legal moves / making a move."""
        player_to_move = players.get(state.active_color)
        if requester != player_to_move:
            _LOGGER.debug("%s tried to move while it is %s's turn", requester, player_to_move)
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {player_to_move} to make a move first."
            )

    def _find_piece(
        self, state: GameState, piece_type: PieceType, origin: Optional[Position]
    ) -> Piece:
        """
        Without an origin: the first piece of that type (board-index order, a1 up to h8) of the player to move.
        With an origin: the piece standing there, which must be of that type and belong to the player to move.
        """
        color = state.active_color
        if origin is None:
            position = state.board.locate(piece_type, color)
            if position is None:
                raise NoSuchPieceError(
                    f"No {color.name.lower()} {piece_type.name.lower()} on the board."
                )
            origin = position

        piece = state.board.piece_at(origin)
        if piece is None or piece.type != piece_type or piece.color != color:
            raise NoSuchPieceError(
                f"No {color.name.lower()} {piece_type.name.lower()} on {origin}."
            )
        return piece

    def _validate_promotion(
        self, piece: Piece, destination: Position, promote_to: Optional[PieceType]
    ) -> None:
        """Promotion choice only for a pawn reaching the final row, and never into a pawn or a king."""
        if promote_to is None:
            return
        if not is_promotion(piece, destination):
            raise IllegalMoveError(
                f"Only a pawn reaching the final row can promote (got {promote_to.name.lower()})."
            )
        if promote_to not in PROMOTION_OPTIONS:
            raise IllegalMoveError(f"Cannot promote into a {promote_to.name.lower()}.")

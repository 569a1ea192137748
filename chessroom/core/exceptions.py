"""
Custom exceptions shared by all layers.

Every rejection the engine produces is an ordinary outcome of user input, never a crash.
Each exception therefore carries a stable `kind` so callers can report it as data.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    NOT_YOUR_TURN = "not_your_turn"
    NO_SUCH_PIECE = "no_such_piece"
    ILLEGAL_MOVE = "illegal_move"
    GAME_NOT_IN_PROGRESS = "game_not_in_progress"
    ROOM_NOT_FOUND = "room_not_found"
    ROOM_FULL = "room_full"
    ROOM_NOT_FULL = "room_not_full"
    GAME_ALREADY_STARTED = "game_already_started"
    INVALID_POSITION = "invalid_position"
    INVALID_FEN = "invalid_fen"
    INVALID_REQUEST = "invalid_request"
    REPOSITORY = "repository"
    GAME = "game"


class GameError(Exception):
    """Top-level exception. Catch this one if you do not care about the specific reason."""

    kind: ErrorKind = ErrorKind.GAME

    def to_dict(self) -> dict[str, str]:
        return {"error": self.kind.value, "detail": str(self)}


# --- MOVE REJECTIONS ---
class MoveError(GameError):
    """A move attempt got rejected. Nothing on the board changed."""


class NotYourTurnError(MoveError):
    kind = ErrorKind.NOT_YOUR_TURN


class NoSuchPieceError(MoveError):
    kind = ErrorKind.NO_SUCH_PIECE


class IllegalMoveError(MoveError):
    kind = ErrorKind.ILLEGAL_MOVE


class GameNotInProgressError(MoveError):
    kind = ErrorKind.GAME_NOT_IN_PROGRESS


# --- ROOM LIFECYCLE ---
class RoomError(GameError):
    """Room bookkeeping preconditions"""


class RoomNotFoundError(RoomError):
    kind = ErrorKind.ROOM_NOT_FOUND


class RoomFullError(RoomError):
    kind = ErrorKind.ROOM_FULL


class RoomNotFullError(RoomError):
    kind = ErrorKind.ROOM_NOT_FULL


class GameAlreadyStartedError(RoomError):
    kind = ErrorKind.GAME_ALREADY_STARTED


# --- PARSING / INPUT ---
class InvalidPositionError(GameError):
    kind = ErrorKind.INVALID_POSITION


class InvalidFENError(GameError):
    kind = ErrorKind.INVALID_FEN


class InvalidRequestError(GameError):
    kind = ErrorKind.INVALID_REQUEST


class RepositoryError(GameError):
    """The room store could not read or write a record"""

    kind = ErrorKind.REPOSITORY

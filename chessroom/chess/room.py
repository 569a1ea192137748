"""
Room bookkeeping: who sits at which color, and the game once it has started.

Lifecycle (monotonic): created (White seated) -> joined (Black seated) -> started (GameState initialized).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from chessroom.chess.game_state import GameState
from chessroom.chess.pieces import Color
from chessroom.core.exceptions import (
    GameAlreadyStartedError,
    RoomFullError,
    RoomNotFullError,
)
from chessroom.core.models import RoomModel
from chessroom.core.shared_types import Status

MAX_PLAYERS = 2


def new_room(identity: str) -> RoomModel:
    """A fresh room, before the repository assigned its ID. The creator always plays with the white pieces."""
    return RoomModel(
        players={Color.WHITE.name.lower(): identity},
        player_count=1,
        game_started=False,
        status=Status.WAITING_FOR_PLAYERS.value,
    )


@dataclass(frozen=True)
class Player:
    room_id: UUID
    color: Color
    identity: str


@dataclass
class Room:
    """Two distinct seats. Joining fills the empty one, it never overwrites the other."""

    room_id: UUID
    white: Optional[Player] = None
    black: Optional[Player] = None
    game: Optional[GameState] = None

    @property
    def player_count(self) -> int:
        return sum(seat is not None for seat in (self.white, self.black))

    @property
    def game_started(self) -> bool:
        return self.game is not None

    @property
    def status(self) -> Status:
        if self.game is not None:
            return self.game.status
        if self.player_count == MAX_PLAYERS:
            return Status.READY
        return Status.WAITING_FOR_PLAYERS

    @property
    def players(self) -> dict[Color, str]:
        return {
            seat.color: seat.identity for seat in (self.white, self.black) if seat is not None
        }

    def player(self, color: Color) -> Optional[Player]:
        return self.white if color == Color.WHITE else self.black

    def join(self, identity: str) -> Player:
        """Registering the 2nd player (Black) to an open room"""
        if self.player_count >= MAX_PLAYERS:
            raise RoomFullError(f"Room {self.room_id} already has {MAX_PLAYERS} players.")
        self.black = Player(self.room_id, Color.BLACK, identity)
        return self.black

    def start(self) -> GameState:
        if self.player_count != MAX_PLAYERS:
            raise RoomNotFullError(
                f"Room {self.room_id} needs {MAX_PLAYERS} players to start, has {self.player_count}."
            )
        if self.game_started:
            raise GameAlreadyStartedError(f"Game in room {self.room_id} already started.")
        self.game = GameState.new_game()
        return self.game

    # --- TRANSPORT ---
    def to_model(self) -> RoomModel:
        return RoomModel(
            players={color.name.lower(): identity for color, identity in self.players.items()},
            player_count=self.player_count,
            game_started=self.game_started,
            status=self.status.value,
            game=self.game.to_model() if self.game is not None else None,
        )

    @classmethod
    def from_model(cls, room_id: UUID, model: RoomModel) -> Room:
        seats = {
            color: Player(room_id, color, model.players[color.name.lower()])
            for color in Color
            if color.name.lower() in model.players
        }
        return cls(
            room_id=room_id,
            white=seats.get(Color.WHITE),
            black=seats.get(Color.BLACK),
            game=GameState.from_model(model.game) if model.game is not None else None,
        )

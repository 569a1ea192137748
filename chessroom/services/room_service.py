"""Orchestration of communication from API layer to business logic and persistence layers (and the reverse direction)."""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional
from uuid import UUID

from chessroom.api.models import (
    CreateRoomRequest,
    GetRoomRequest,
    JoinRoomRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    RoomResponse,
    StartGameRequest,
)
from chessroom.chess.executor import MoveExecutor
from chessroom.chess.game_state import GameState
from chessroom.chess.pieces import Color as DomainColor
from chessroom.chess.pieces import PieceType as DomainPieceType
from chessroom.chess.position import Position
from chessroom.chess.room import Player, Room, new_room
from chessroom.core.config import get_settings
from chessroom.core.exceptions import (
    GameNotInProgressError,
    RoomNotFoundError,
    RoomNotFullError,
)
from chessroom.core.shared_types import Color
from chessroom.db.repository import RoomRepository
from chessroom.services.events import (
    GameStarted,
    MoveMade,
    Notifier,
    PlayerJoined,
    RoomEvent,
)

_LOGGER = logging.getLogger(__name__)


class RoomLocks:
    """One lock per room: attempts against the same room run one after the other, different rooms never wait on each other."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[UUID, threading.Lock] = {}

    @contextmanager
    def hold(self, room_id: UUID) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(room_id, threading.Lock())
        with lock:
            yield


# Shared by every service instance in the process (a service may be created per request)
ROOM_LOCKS = RoomLocks()


class RoomService:
    """Orchestration of layers for chess rooms."""

    def __init__(
        self,
        repository: RoomRepository,
        notifier: Optional[Notifier] = None,
        executor: Optional[MoveExecutor] = None,
        locks: Optional[RoomLocks] = None,
    ) -> None:
        self.repo = repository
        self.notifier = notifier
        self.executor = executor or MoveExecutor(get_settings().capture_policy)
        self.locks = locks or ROOM_LOCKS

    # -- API routes logic ---
    def create_room(self, request: CreateRoomRequest) -> RoomResponse:
        """First player requested to create a new room. They get the white pieces."""
        stored_room, room_id = self.repo.create_room(new_room(request.player_name))
        _LOGGER.info("Room %s created by %s", room_id, request.player_name)
        return self._create_room_response(Room.from_model(room_id, stored_room))

    def join_room(self, request: JoinRoomRequest) -> RoomResponse:
        """Second player requested to join a room. They get the black pieces."""
        with self.locks.hold(request.room_id):
            room = self.active_room(request.room_id)
            player = room.join(request.player_name)
            self._persist(room)

        _LOGGER.info("%s joined room %s as %s", player.identity, room.room_id, player.color.name)
        self._publish(
            PlayerJoined(room.room_id, player.identity, player.color.name.lower())
        )
        return self._create_room_response(room)

    def start_game(self, request: StartGameRequest) -> RoomResponse:
        """Both seats taken: set up the pieces."""
        with self.locks.hold(request.room_id):
            room = self.active_room(request.room_id)
            game = room.start()
            self._persist(room)

        _LOGGER.info("Game started in room %s", room.room_id)
        self._publish(
            GameStarted(
                room_id=room.room_id,
                white=room.players[DomainColor.WHITE],
                black=room.players[DomainColor.BLACK],
                fen=game.to_fen(),
            )
        )
        return self._create_room_response(room)

    def get_room(self, request: GetRoomRequest) -> RoomResponse:
        """
        Retrieve current room state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        return self._create_room_response(self.active_room(request.room_id))

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves, per square of a piece that can move."""
        room = self.active_room(request.room_id)
        game = self._started_game(room)
        moves = self.executor.legal_moves(game, room.players, request.player_name)
        return LegalMovesResponse(
            room_id=room.room_id,
            player_name=request.player_name,
            color=Color[game.active_color.name],
            legal_moves={
                origin.to_algebraic(): sorted(
                    (target.to_algebraic() for target in targets),
                )
                for origin, targets in sorted(moves.items(), key=lambda item: item[0].index)
            },
        )

    def attempt_move(self, request: MoveRequest) -> RoomResponse:
        """
        Make a move attempt.

        The whole load -> validate -> apply -> persist sequence holds the room's lock.
        A rejected attempt raises (a MoveError) and leaves the stored room untouched.
        """
        with self.locks.hold(request.room_id):
            room = self.active_room(request.room_id)
            game = self._started_game(room)
            new_game = self.executor.attempt_move(
                game,
                room.players,
                request.player_name,
                piece_type=DomainPieceType[request.piece_type.name],
                destination=Position.from_algebraic(request.to_square),
                origin=(
                    Position.from_algebraic(request.from_square)
                    if request.from_square
                    else None
                ),
                promote_to=(
                    DomainPieceType[request.promote_to.name] if request.promote_to else None
                ),
            )
            room.game = new_game
            self._persist(room)

        last_move = new_game.move_history[-1]
        self._publish(
            MoveMade(
                room_id=room.room_id,
                identity=request.player_name,
                move_uci=last_move.to_uci(),
                fen_after=new_game.to_fen(),
                is_check=new_game.is_check,
                status=new_game.status.value,
            )
        )
        return self._create_room_response(room)

    # -- Lookups used by other collaborators --
    def active_room(self, room_id: UUID) -> Room:
        """Attempt to find the room in the repository and raise error if it fails."""
        room_model = self.repo.get_room(room_id)
        if room_model is None:
            raise RoomNotFoundError(f"Room with {room_id=} not found.")
        return Room.from_model(room_id, room_model)

    def active_player(self, room_id: UUID, color: DomainColor) -> Player:
        player = self.active_room(room_id).player(color)
        if player is None:
            raise RoomNotFullError(f"Nobody plays {color.name.lower()} in room {room_id}.")
        return player

    # -- Internal helpers --
    def _started_game(self, room: Room) -> GameState:
        if room.game is None:
            raise GameNotInProgressError(
                f"Game in room {room.room_id} has not started yet. status: {room.status}"
            )
        return room.game

    def _persist(self, room: Room) -> None:
        self.repo.update_room(room.room_id, room.to_model())

    def _publish(self, event: RoomEvent) -> None:
        """Fire and forget. Whatever happens to the event, the request already succeeded."""
        if self.notifier is None:
            return
        try:
            self.notifier.publish(event)
        except Exception:
            _LOGGER.warning("Could not publish %s", type(event).__name__, exc_info=True)

    def _create_room_response(self, room: Room) -> RoomResponse:
        """Convert the Room into a RoomResponse"""
        game = room.game
        return RoomResponse(
            room_id=room.room_id,
            players={color.name.lower(): identity for color, identity in room.players.items()},
            player_count=room.player_count,
            game_started=room.game_started,
            status=room.status,
            fen_state=game.to_fen() if game else None,
            active_color=Color[game.active_color.name] if game else None,
            move_history=[move.to_uci() for move in game.move_history] if game else [],
            is_check=game.is_check if game else False,
            is_checkmate=game.is_checkmate if game else False,
            is_stalemate=game.is_stalemate if game else False,
        )

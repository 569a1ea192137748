"""Implementation of (Room)Repository using SQLAlchemy"""

from dataclasses import asdict
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from chessroom.core.exceptions import RepositoryError
from chessroom.core.models import GameModel, RoomModel
from chessroom.db.schema import DBRoom


class SQLRoomRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_room(self, room_id: UUID) -> RoomModel | None:
        """Get room by ID, if record exists."""
        room_db = self._fetch_room(room_id)
        if room_db:
            return self._to_model(room_db)
        return None

    def create_room(self, room: RoomModel) -> tuple[RoomModel, UUID]:
        """Store new room and return the stored data + newly created room ID."""

        new_id = uuid4()
        room_db = DBRoom(
            id=new_id,
            players=room.players,
            player_count=room.player_count,
            game_started=room.game_started,
            status=room.status,
            game=asdict(room.game) if room.game is not None else None,
        )
        self.db.add(room_db)
        self._commit(room_db)
        return self._to_model(room_db), new_id

    def update_room(self, room_id: UUID, room: RoomModel) -> RoomModel | None:
        """Replace the stored data of an existing record."""
        room_db = self._fetch_room(room_id)
        if not room_db:
            return None
        room_db.players = room.players
        room_db.player_count = room.player_count
        room_db.game_started = room.game_started
        room_db.status = room.status
        room_db.game = asdict(room.game) if room.game is not None else None
        self._commit(room_db)
        return self._to_model(room_db)

    def _fetch_room(self, room_id: UUID) -> DBRoom | None:
        query = select(DBRoom).where(DBRoom.id == room_id)
        try:
            return self.db.scalar(query)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Could not read room {room_id}.") from e

    def _commit(self, room_db: DBRoom) -> None:
        """Commit, or roll back and report. The session stays usable either way."""
        room_id = room_db.id
        try:
            self.db.commit()
            self.db.refresh(room_db)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Could not store room {room_id}.") from e

    def _to_model(self, room_db: DBRoom) -> RoomModel:
        """Convert SQLAlchemy model to data transfer model."""
        return RoomModel(
            players=dict(room_db.players),
            player_count=room_db.player_count,
            game_started=room_db.game_started,
            status=room_db.status,
            game=GameModel(**room_db.game) if room_db.game is not None else None,
        )

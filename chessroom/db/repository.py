"""Protocol repository (implemented for SQLAlchemy and in memory)"""

from typing import Protocol
from uuid import UUID

from chessroom.core.models import RoomModel


class RoomRepository(Protocol):
    """Persistence layer orchestration"""

    def get_room(self, room_id: UUID) -> RoomModel | None:
        """Get room by ID, if record exists."""
        ...

    def create_room(self, room: RoomModel) -> tuple[RoomModel, UUID]:
        """Store new room and return the stored data + newly created room ID."""
        ...

    def update_room(self, room_id: UUID, room: RoomModel) -> RoomModel | None:
        """Replace the stored data of an existing record."""
        ...

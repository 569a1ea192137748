"""Implementation of (Room)Repository keeping everything in a dictionary. Single process only."""

from copy import deepcopy
from uuid import UUID, uuid4

from chessroom.core.models import RoomModel


class InMemoryRoomRepository:
    """Stores copies, so a caller mutating its model afterwards cannot change the stored record."""

    def __init__(self) -> None:
        self._rooms: dict[UUID, RoomModel] = {}

    def get_room(self, room_id: UUID) -> RoomModel | None:
        room = self._rooms.get(room_id)
        return deepcopy(room) if room is not None else None

    def create_room(self, room: RoomModel) -> tuple[RoomModel, UUID]:
        room_id = uuid4()
        self._rooms[room_id] = deepcopy(room)
        return deepcopy(room), room_id

    def update_room(self, room_id: UUID, room: RoomModel) -> RoomModel | None:
        if room_id not in self._rooms:
            return None
        self._rooms[room_id] = deepcopy(room)
        return deepcopy(room)

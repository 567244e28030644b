from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Iterator, List, Optional

from matchroom.core.errors import RoomNotFound
from matchroom.state.sessions import FilterValue

MAX_OCCUPANTS = 2


class RoomState(str, Enum):
    WAITING = "waiting"
    ACTIVE = "active"
    PARTNER_LEFT = "partner_left"
    CLOSED = "closed"


class ChatKind(str, Enum):
    TEXT = "text"
    VIDEO = "video"


@dataclass
class Room:
    id: str
    filter_value: FilterValue
    kind: ChatKind = ChatKind.TEXT
    occupants: List[str] = field(default_factory=list)
    state: RoomState = RoomState.WAITING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_waiting(self) -> bool:
        return self.state is RoomState.WAITING and len(self.occupants) == 1

    def others(self, connection_id: str) -> List[str]:
        return [occupant for occupant in self.occupants if occupant != connection_id]


def new_room_id() -> str:
    return f"room-{uuid.uuid4().hex}"


class RoomStore:
    """In-memory rooms keyed by id, kept in creation order."""

    def __init__(self) -> None:
        self._rooms: Dict[str, Room] = {}

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, room_id: object) -> bool:
        return room_id in self._rooms

    def create(self, creator_id: str, filter_value: FilterValue, kind: ChatKind = ChatKind.TEXT) -> Room:
        room_id = new_room_id()
        while room_id in self._rooms:
            room_id = new_room_id()
        room = Room(id=room_id, filter_value=filter_value, kind=kind, occupants=[creator_id])
        self._rooms[room_id] = room
        return room

    def get(self, room_id: Optional[str]) -> Optional[Room]:
        if room_id is None:
            return None
        return self._rooms.get(room_id)

    def require(self, room_id: Optional[str]) -> Room:
        room = self.get(room_id)
        if room is None:
            raise RoomNotFound(room_id)
        return room

    def waiting_rooms(self) -> Iterator[Room]:
        """Single-occupant rooms still open for a partner, oldest first."""
        for room in list(self._rooms.values()):
            if room.is_waiting:
                yield room

    def add_occupant(self, room_id: str, connection_id: str) -> Room:
        room = self.require(room_id)
        if connection_id in room.occupants:
            return room
        if len(room.occupants) >= MAX_OCCUPANTS:
            raise ValueError(f"room {room_id} is full")
        room.occupants.append(connection_id)
        room.updated_at = datetime.now(timezone.utc)
        return room

    def remove_occupant(self, room_id: str, connection_id: str) -> Room:
        """Drop an occupant; the room entry is deleted once it is empty."""
        room = self.require(room_id)
        if connection_id in room.occupants:
            room.occupants.remove(connection_id)
            room.updated_at = datetime.now(timezone.utc)
        if not room.occupants:
            room.state = RoomState.CLOSED
            self._rooms.pop(room_id, None)
        return room

from __future__ import annotations

import logging
from typing import List, Tuple

from matchroom.schemas.events import (
    CHAT_STARTED,
    JOINED_ROOM,
    USER_DISCONNECTED,
    VIDEO_CHAT_STARTED,
    WAITING_FOR_STRANGER,
    Outbound,
)
from matchroom.services.matcher import Matcher
from matchroom.state.room_manager import ChatKind, Room, RoomState, RoomStore
from matchroom.state.sessions import SessionRegistry

logger = logging.getLogger(__name__)

_STARTED_EVENT = {
    ChatKind.TEXT: CHAT_STARTED,
    ChatKind.VIDEO: VIDEO_CHAT_STARTED,
}


class RoomLifecycleManager:
    """Moves rooms through waiting -> active -> partner_left -> closed.

    Every method mutates state synchronously and returns the notifications to
    deliver; nothing here touches a socket.
    """

    def __init__(self, sessions: SessionRegistry, rooms: RoomStore, matcher: Matcher) -> None:
        self._sessions = sessions
        self._rooms = rooms
        self._matcher = matcher

    def join(self, connection_id: str, filter_value: object = None,
             kind: ChatKind = ChatKind.TEXT) -> Tuple[Room, List[Outbound]]:
        outbound: List[Outbound] = []
        if connection_id in self._sessions:
            # Joining again starts over: leave the old room first.
            outbound.extend(self.leave(connection_id))

        session = self._sessions.register(connection_id, filter_value)
        room_id = self._matcher.find_compatible_room(session.filter_value)

        if room_id is None:
            room = self._rooms.create(connection_id, session.filter_value, kind)
            session.current_room_id = room.id
            logger.info("[room] created %s filter=%s kind=%s",
                        room.id, room.filter_value.value, kind.value)
            outbound.append(Outbound(connection_id=connection_id, event=JOINED_ROOM, payload=room.id))
            outbound.append(Outbound(connection_id=connection_id, event=WAITING_FOR_STRANGER))
            return room, outbound

        room = self._rooms.add_occupant(room_id, connection_id)
        session.current_room_id = room.id
        outbound.append(Outbound(connection_id=connection_id, event=JOINED_ROOM, payload=room.id))
        outbound.extend(self._start(room, kind))
        return room, outbound

    def _start(self, room: Room, kind: ChatKind) -> List[Outbound]:
        if room.state is not RoomState.WAITING:
            return []
        room.state = RoomState.ACTIVE
        event = _STARTED_EVENT[kind]
        logger.info("[room] %s active, emitting %s", room.id, event)
        return [Outbound(connection_id=occupant, event=event) for occupant in room.occupants]

    def leave(self, connection_id: str) -> List[Outbound]:
        session = self._sessions.lookup(connection_id)
        if session is None or session.current_room_id is None:
            return []

        room = self._rooms.get(session.current_room_id)
        session.current_room_id = None
        if room is None or connection_id not in room.occupants:
            return []

        previous = room.state
        self._rooms.remove_occupant(room.id, connection_id)
        if not room.occupants:
            logger.info("[room] deleted %s, now empty", room.id)
            return []

        if previous is RoomState.ACTIVE:
            room.state = RoomState.PARTNER_LEFT
            logger.info("[room] %s partner left, notifying %d", room.id, len(room.occupants))
            return [Outbound(connection_id=occupant, event=USER_DISCONNECTED)
                    for occupant in room.occupants]
        return []

from __future__ import annotations

import logging
from typing import Any, List

from matchroom.core.errors import RoomNotFound
from matchroom.schemas.events import Outbound
from matchroom.state.room_manager import RoomStore

logger = logging.getLogger(__name__)


class Relay:
    """Forwards an opaque payload to the sender's room partner(s)."""

    def __init__(self, rooms: RoomStore) -> None:
        self._rooms = rooms

    def relay(self, sender_id: str, room_id: str, event: str, payload: Any) -> List[Outbound]:
        try:
            room = self._rooms.require(room_id)
        except RoomNotFound:
            logger.debug("[relay] %s from %s dropped, room %s is gone", event, sender_id, room_id)
            return []
        if sender_id not in room.occupants:
            logger.debug("[relay] %s from %s dropped, not in room %s", event, sender_id, room_id)
            return []
        return [
            Outbound(connection_id=recipient, event=event, payload=payload)
            for recipient in room.others(sender_id)
        ]

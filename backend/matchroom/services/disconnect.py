from __future__ import annotations

import logging
from typing import List

from matchroom.schemas.events import Outbound
from matchroom.services.lifecycle import RoomLifecycleManager
from matchroom.state.sessions import SessionRegistry

logger = logging.getLogger(__name__)


class DisconnectHandler:
    """Tears a connection down: leave its room, then forget the session.

    The UI's stop button goes through here as well.
    """

    def __init__(self, sessions: SessionRegistry, lifecycle: RoomLifecycleManager) -> None:
        self._sessions = sessions
        self._lifecycle = lifecycle

    def handle(self, connection_id: str) -> List[Outbound]:
        if connection_id not in self._sessions:
            return []
        outbound = self._lifecycle.leave(connection_id)
        self._sessions.deregister(connection_id)
        logger.info("[session] %s removed", connection_id)
        return outbound

from __future__ import annotations

import logging
import uuid
from typing import Dict, Iterable

from fastapi import WebSocket

from matchroom.schemas.events import Outbound

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks live WebSocket connections by connection id.

    In-memory and single-process only.
    """

    def __init__(self) -> None:
        self._sockets: Dict[str, WebSocket] = {}

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._sockets

    async def connect(self, websocket: WebSocket) -> str:
        await websocket.accept()
        connection_id = uuid.uuid4().hex
        self._sockets[connection_id] = websocket
        return connection_id

    def disconnect(self, connection_id: str) -> None:
        self._sockets.pop(connection_id, None)

    async def send_json(self, connection_id: str, message: dict) -> None:
        ws = self._sockets.get(connection_id)
        if ws is None:
            return
        try:
            await ws.send_json(message)
        except Exception:
            # If sending fails, drop the socket; its receive loop runs the disconnect
            logger.warning("[ws] send to %s failed, dropping socket", connection_id)
            self.disconnect(connection_id)

    async def deliver(self, outbound: Iterable[Outbound]) -> None:
        for item in outbound:
            await self.send_json(item.connection_id, item.envelope())

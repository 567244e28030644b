from __future__ import annotations

import json
import logging
from typing import Any, List

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from matchroom.events.bus import EventBus
from matchroom.schemas import events
from matchroom.schemas.events import Envelope, JoinTextChat, Outbound, Report, SendMessage, SignalMessage
from matchroom.services.reports import REPORT_TOPIC
from matchroom.state.room_manager import ChatKind
from matchroom.state.sessions import FilterValue
from matchroom.ws.manager import ConnectionManager

logger = logging.getLogger(__name__)

router = APIRouter()


def get_manager(websocket: WebSocket) -> ConnectionManager:
    return websocket.app.state.ws_manager  # type: ignore[attr-defined]


def get_bus(websocket: WebSocket) -> EventBus:
    return websocket.app.state.event_bus  # type: ignore[attr-defined]


def _as_fields(payload: Any, *names: str) -> Any:
    # Positional form, e.g. ["hello", "room-1"] for send-message
    if isinstance(payload, (list, tuple)):
        return dict(zip(names, payload))
    return payload


async def dispatch(websocket: WebSocket, connection_id: str, event: str, payload: Any) -> List[Outbound]:
    state = websocket.app.state  # type: ignore[attr-defined]

    if event == events.JOIN_TEXT_CHAT:
        request = JoinTextChat.model_validate(payload if isinstance(payload, dict) else {})
        _, outbound = state.lifecycle.join(connection_id, request.filter_value, ChatKind.TEXT)
        return outbound

    if event == events.JOIN_VIDEO_CHAT:
        _, outbound = state.lifecycle.join(connection_id, FilterValue.ANY, ChatKind.VIDEO)
        return outbound

    if event == events.SEND_MESSAGE:
        request = SendMessage.model_validate(_as_fields(payload, "message", "roomId"))
        return state.relay.relay(connection_id, request.room_id, events.RECEIVE_MESSAGE, request.message)

    if event in events.SIGNALING_EVENTS:
        request = SignalMessage.model_validate(_as_fields(payload, "data", "roomId"))
        return state.relay.relay(connection_id, request.room_id, event, request.data)

    if event == events.REPORT:
        if isinstance(payload, str):
            payload = {"roomId": payload}
        request = Report.model_validate(payload if isinstance(payload, dict) else {})
        await get_bus(websocket).publish(
            REPORT_TOPIC,
            {"roomId": request.room_id, "reason": request.reason, "reporter": connection_id},
        )
        return []

    logger.debug("[ws] %s sent unknown event %r", connection_id, event)
    return []


@router.websocket("/ws")
async def websocket_chat_endpoint(
    websocket: WebSocket,
    manager: ConnectionManager = Depends(get_manager),
) -> None:
    connection_id = await manager.connect(websocket)
    logger.info("[ws] connected %s", connection_id)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))
            raw = message.get("text")
            if raw is None:
                logger.debug("[ws] %s sent a non-text frame", connection_id)
                continue
            try:
                envelope = Envelope.model_validate(json.loads(raw))
            except (ValueError, ValidationError):
                logger.debug("[ws] %s sent a malformed frame", connection_id)
                continue
            try:
                outbound = await dispatch(websocket, connection_id, envelope.event, envelope.payload)
            except ValidationError as exc:
                logger.warning("[ws] %s sent bad %s payload: %s",
                               connection_id, envelope.event, exc.errors(include_url=False))
                continue
            await manager.deliver(outbound)
    except WebSocketDisconnect:
        logger.info("[ws] disconnected %s", connection_id)
    finally:
        manager.disconnect(connection_id)
        outbound = websocket.app.state.disconnects.handle(connection_id)  # type: ignore[attr-defined]
        await manager.deliver(outbound)

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Inbound
JOIN_TEXT_CHAT = "join-text-chat"
JOIN_VIDEO_CHAT = "join-video-chat"
SEND_MESSAGE = "send-message"
OFFER = "offer"
ANSWER = "answer"
ICE_CANDIDATE = "ice-candidate"
REPORT = "report"

SIGNALING_EVENTS = (OFFER, ANSWER, ICE_CANDIDATE)

# Outbound
JOINED_ROOM = "joined-room"
WAITING_FOR_STRANGER = "waiting-for-stranger"
CHAT_STARTED = "chat-started"
VIDEO_CHAT_STARTED = "video-chat-started"
RECEIVE_MESSAGE = "receive-message"
USER_DISCONNECTED = "user-disconnected"


class Envelope(BaseModel):
    """Wire frame, both directions: ``{"event": ..., "payload": ...}``."""

    event: str
    payload: Any = None


class JoinTextChat(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Kept raw; the session registry decides what counts as a valid value.
    filter_value: Any = Field(
        default=None,
        validation_alias=AliasChoices("filterValue", "filter_value", "gender"),
    )


class SendMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: Any = None
    room_id: str = Field(validation_alias=AliasChoices("roomId", "room_id"))


class SignalMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data: Any = None
    room_id: str = Field(validation_alias=AliasChoices("roomId", "room_id"))


class Report(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    room_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("roomId", "room_id"))
    reason: Optional[str] = None

    @field_validator("room_id", "reason", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Optional[str]:
        # Reports are always accepted; whatever the client sent is kept as text
        if value is None or isinstance(value, str):
            return value
        return str(value)


class Outbound(BaseModel):
    """A single delivery produced by the core, sent by the ws layer."""

    connection_id: str
    event: str
    payload: Any = None

    def envelope(self) -> Dict[str, Any]:
        return Envelope(event=self.event, payload=self.payload).model_dump()

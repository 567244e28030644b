from __future__ import annotations


class MatchroomError(Exception):
    """Base class for errors raised by the matchmaking core."""


class InvalidFilterValue(MatchroomError, ValueError):
    def __init__(self, value: object) -> None:
        super().__init__(f"invalid filter value: {value!r}")
        self.value = value


class RoomNotFound(MatchroomError, KeyError):
    def __init__(self, room_id: object) -> None:
        super().__init__(room_id)
        self.room_id = room_id

    def __str__(self) -> str:
        return f"room not found: {self.room_id!r}"

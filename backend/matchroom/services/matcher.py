from __future__ import annotations

import logging
from typing import Optional

from matchroom.state.room_manager import Room, RoomStore
from matchroom.state.sessions import FilterValue, SessionRegistry

logger = logging.getLogger(__name__)

DEFAULT_FEMALE_MATCH_THRESHOLD = 500


class Matcher:
    """Finds a waiting room a new requester may join.

    Rules are asymmetric on purpose:
    - male joins only a waiting female
    - female joins a waiting male, or a waiting female once the number of
      registered female sessions exceeds ``female_match_threshold``
    - other joins any waiting room
    - any never joins; it always gets a fresh room

    The first compatible room in creation order wins.
    """

    def __init__(
        self,
        rooms: RoomStore,
        sessions: SessionRegistry,
        female_match_threshold: int = DEFAULT_FEMALE_MATCH_THRESHOLD,
    ) -> None:
        self._rooms = rooms
        self._sessions = sessions
        self.female_match_threshold = female_match_threshold

    def is_compatible(self, requester: FilterValue, room: Room) -> bool:
        waiting = room.filter_value
        if requester is FilterValue.MALE:
            return waiting is FilterValue.FEMALE
        if requester is FilterValue.FEMALE:
            if waiting is FilterValue.MALE:
                return True
            return (
                waiting is FilterValue.FEMALE
                and self._sessions.female_count > self.female_match_threshold
            )
        if requester is FilterValue.OTHER:
            return True
        return False

    def find_compatible_room(self, requester: FilterValue) -> Optional[str]:
        if requester is FilterValue.ANY:
            return None
        for room in self._rooms.waiting_rooms():
            logger.debug(
                "[match] checking room=%s waiting=%s requester=%s",
                room.id, room.filter_value.value, requester.value,
            )
            if self.is_compatible(requester, room):
                logger.info("[match] %s requester matched room=%s (%s waiting)",
                            requester.value, room.id, room.filter_value.value)
                return room.id
        return None

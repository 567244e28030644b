from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from matchroom.core.errors import InvalidFilterValue

logger = logging.getLogger(__name__)


class FilterValue(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    ANY = "any"

    @classmethod
    def parse(cls, value: object) -> "FilterValue":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidFilterValue(value)


@dataclass
class Session:
    id: str
    filter_value: FilterValue = FilterValue.ANY
    current_room_id: Optional[str] = None


class SessionRegistry:
    """Per-connection session state plus the process-wide female counter.

    In-memory and single-process only.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}
        self._female_count = 0

    @property
    def female_count(self) -> int:
        return self._female_count

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._sessions

    def register(self, connection_id: str, filter_value: object = None) -> Session:
        """Create a session with no room; bad filter values fall back to ``any``."""
        try:
            value = FilterValue.parse(filter_value)
        except InvalidFilterValue:
            if filter_value is not None:
                logger.debug("[session] %s sent %r, using 'any'", connection_id, filter_value)
            value = FilterValue.ANY

        # A connection holds at most one session.
        if connection_id in self._sessions:
            self.deregister(connection_id)

        session = Session(id=connection_id, filter_value=value)
        self._sessions[connection_id] = session
        if value is FilterValue.FEMALE:
            self._female_count += 1
            logger.info("[session] female count incremented: %d", self._female_count)
        return session

    def lookup(self, connection_id: str) -> Optional[Session]:
        return self._sessions.get(connection_id)

    def deregister(self, connection_id: str) -> None:
        session = self._sessions.pop(connection_id, None)
        if session is None:
            return
        if session.filter_value is FilterValue.FEMALE and self._female_count > 0:
            self._female_count -= 1
            logger.info("[session] female count decremented: %d", self._female_count)

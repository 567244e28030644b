import pytest

from matchroom.services.disconnect import DisconnectHandler
from matchroom.services.lifecycle import RoomLifecycleManager
from matchroom.services.matcher import Matcher
from matchroom.services.relay import Relay
from matchroom.state.room_manager import RoomStore
from matchroom.state.sessions import SessionRegistry


class Core:
    """The matchmaking core wired the way create_app() wires it."""

    def __init__(self, threshold: int = 500) -> None:
        self.sessions = SessionRegistry()
        self.rooms = RoomStore()
        self.matcher = Matcher(self.rooms, self.sessions, threshold)
        self.lifecycle = RoomLifecycleManager(self.sessions, self.rooms, self.matcher)
        self.relay = Relay(self.rooms)
        self.disconnects = DisconnectHandler(self.sessions, self.lifecycle)


def events_for(outbound, connection_id):
    return [item.event for item in outbound if item.connection_id == connection_id]


@pytest.fixture
def core():
    return Core()


@pytest.fixture
def core_low_threshold():
    return Core(threshold=2)

"""ConnectionManager delivery and dead-socket cleanup."""

from matchroom.schemas.events import Outbound, USER_DISCONNECTED
from matchroom.ws.manager import ConnectionManager


class FakeWebSocket:
    def __init__(self, broken=False):
        self.accepted = False
        self.sent = []
        self.broken = broken

    async def accept(self):
        self.accepted = True

    async def send_json(self, message):
        if self.broken:
            raise RuntimeError("socket closed")
        self.sent.append(message)


class TestConnectionManager:
    async def test_connect_assigns_unique_ids(self):
        manager = ConnectionManager()
        first, second = FakeWebSocket(), FakeWebSocket()

        first_id = await manager.connect(first)
        second_id = await manager.connect(second)

        assert first.accepted and second.accepted
        assert first_id != second_id
        assert first_id in manager and second_id in manager

    async def test_deliver_sends_envelopes_to_targets(self):
        manager = ConnectionManager()
        ws = FakeWebSocket()
        connection_id = await manager.connect(ws)

        await manager.deliver([
            Outbound(connection_id=connection_id, event=USER_DISCONNECTED),
            Outbound(connection_id="gone", event=USER_DISCONNECTED),
        ])

        assert ws.sent == [{"event": "user-disconnected", "payload": None}]

    async def test_failed_send_drops_socket(self):
        manager = ConnectionManager()
        connection_id = await manager.connect(FakeWebSocket(broken=True))

        await manager.send_json(connection_id, {"event": "x", "payload": None})

        assert connection_id not in manager

"""EventBus pub/sub and report forwarding."""

import logging

from matchroom.events.bus import EventBus
from matchroom.services.reports import REPORT_TOPIC, LoggingReportHandler, bind_report_handler


class RecordingReportHandler:
    def __init__(self):
        self.reports = []

    async def on_report(self, room_id, reason):
        self.reports.append((room_id, reason))


class TestEventBus:
    async def test_publish_reaches_subscribers_in_order(self):
        bus = EventBus()
        calls = []

        async def first(payload):
            calls.append(("first", payload["n"]))

        async def second(payload):
            calls.append(("second", payload["n"]))

        bus.subscribe("topic", first)
        bus.subscribe("topic", second)
        await bus.publish("topic", {"n": 1})

        assert calls == [("first", 1), ("second", 1)]

    async def test_publish_without_subscribers_is_noop(self):
        await EventBus().publish("nobody-listens", {})

    async def test_failing_handler_does_not_block_others(self):
        bus = EventBus()
        seen = []

        async def broken(payload):
            raise RuntimeError("boom")

        async def healthy(payload):
            seen.append(payload)

        bus.subscribe("topic", broken)
        bus.subscribe("topic", healthy)
        await bus.publish("topic", {"ok": True})

        assert seen == [{"ok": True}]

    async def test_unsubscribe(self):
        bus = EventBus()
        seen = []

        async def handler(payload):
            seen.append(payload)

        bus.subscribe("topic", handler)
        bus.unsubscribe("topic", handler)
        bus.unsubscribe("topic", handler)
        await bus.publish("topic", {})

        assert seen == []


class TestReports:
    async def test_report_forwarded_to_handler(self):
        bus = EventBus()
        handler = RecordingReportHandler()
        bind_report_handler(bus, handler)

        await bus.publish(REPORT_TOPIC, {"roomId": "room-1", "reason": "spam"})

        assert handler.reports == [("room-1", "spam")]

    async def test_logging_handler_logs(self, caplog):
        with caplog.at_level(logging.WARNING, logger="matchroom.services.reports"):
            await LoggingReportHandler().on_report("room-9", "abuse")

        assert "room-9" in caplog.text
        assert "abuse" in caplog.text

from __future__ import annotations

import logging
from typing import Optional, Protocol

from matchroom.events.bus import EventBus

logger = logging.getLogger(__name__)

REPORT_TOPIC = "report:submitted"


class ReportHandler(Protocol):
    async def on_report(self, room_id: Optional[str], reason: Optional[str]) -> None: ...


class LoggingReportHandler:
    """Default collaborator: records the report and does nothing else."""

    async def on_report(self, room_id: Optional[str], reason: Optional[str]) -> None:
        logger.warning("[report] received for room=%s reason=%s", room_id, reason)


def bind_report_handler(bus: EventBus, handler: ReportHandler) -> None:
    async def _on_report(payload: dict) -> None:
        await handler.on_report(payload.get("roomId"), payload.get("reason"))

    bus.subscribe(REPORT_TOPIC, _on_report)

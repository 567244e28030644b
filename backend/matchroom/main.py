from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from matchroom.core.config import Settings, get_settings
from matchroom.events.bus import EventBus
from matchroom.services.disconnect import DisconnectHandler
from matchroom.services.lifecycle import RoomLifecycleManager
from matchroom.services.matcher import Matcher
from matchroom.services.relay import Relay
from matchroom.services.reports import LoggingReportHandler, ReportHandler, bind_report_handler
from matchroom.state.room_manager import RoomStore
from matchroom.state.sessions import SessionRegistry
from matchroom.ws.manager import ConnectionManager
from matchroom.ws.routes import router as ws_router


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    report_handler: Optional[ReportHandler] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name, version="0.1.0")
    app.state.settings = settings

    sessions = SessionRegistry()
    rooms = RoomStore()
    matcher = Matcher(rooms, sessions, settings.female_match_threshold)
    lifecycle = RoomLifecycleManager(sessions, rooms, matcher)

    app.state.sessions = sessions
    app.state.rooms = rooms
    app.state.lifecycle = lifecycle
    app.state.relay = Relay(rooms)
    app.state.disconnects = DisconnectHandler(sessions, lifecycle)
    app.state.ws_manager = ConnectionManager()
    app.state.event_bus = EventBus()
    bind_report_handler(app.state.event_bus, report_handler or LoggingReportHandler())

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(ws_router)
    return app


app = create_app()

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Awaitable, Callable, Dict, List

logger = logging.getLogger(__name__)

Handler = Callable[[dict], Awaitable[None]]


class EventBus:
    """Minimal in-process async pub/sub keyed by topic string."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Handler]] = defaultdict(list)

    def subscribe(self, topic: str, handler: Handler) -> None:
        self._subscribers[topic].append(handler)

    def unsubscribe(self, topic: str, handler: Handler) -> None:
        handlers = self._subscribers.get(topic)
        if not handlers:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            return
        if not handlers:
            self._subscribers.pop(topic, None)

    async def publish(self, topic: str, payload: dict) -> None:
        for handler in list(self._subscribers.get(topic, ())):
            try:
                await handler(payload)
            except Exception:
                # One failing subscriber must not stop the others
                logger.exception("[bus] handler for %s failed", topic)

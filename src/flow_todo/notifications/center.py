# src/flow_todo/notifications/center.py

from __future__ import annotations

"""
In-process local notification center.

Plays the part of the OS notification center for a terminal app:
- keeps pending requests keyed by identifier,
- arms one event-loop timer per request for its calendar trigger,
- delivers the request to an injected sink when the timer fires.

Must be used from the event loop thread (the app's UI thread of control).
"""

import asyncio
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime

from ..core.ports import NotificationRequest, NotificationSink

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Pending:
    request: NotificationRequest
    handle: asyncio.TimerHandle | None


class LocalNotificationCenter:
    def __init__(
        self,
        sink: NotificationSink | None = None,
        *,
        allow: bool = True,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._sink = sink
        self._allow = allow
        self._clock = clock
        self._authorized = False
        self._pending: dict[str, _Pending] = {}

    @property
    def authorized(self) -> bool:
        return self._authorized

    async def request_authorization(self) -> bool:
        # The "user's answer" comes from configuration.
        self._authorized = bool(self._allow)
        return self._authorized

    def add(self, request: NotificationRequest) -> None:
        if not request.identifier:
            raise ValueError("notification identifier is required")

        loop = asyncio.get_running_loop()

        old = self._pending.pop(request.identifier, None)
        if old is not None and old.handle is not None:
            old.handle.cancel()

        fire_at = request.trigger.fire_date()
        delay = (fire_at - self._clock()).total_seconds()

        handle: asyncio.TimerHandle | None = None
        if delay >= 0:
            handle = loop.call_later(delay, self._fire, request.identifier)
        else:
            # Non-repeating calendar match that already passed: stays pending, never fires.
            logger.debug("Trigger date already passed id=%s fire_at=%s", request.identifier, fire_at)

        self._pending[request.identifier] = _Pending(request=request, handle=handle)
        logger.debug("Notification pending id=%s fire_at=%s", request.identifier, fire_at)

    def remove_pending(self, identifiers: Iterable[str]) -> None:
        for identifier in identifiers:
            entry = self._pending.pop(identifier, None)
            if entry is None:
                continue
            if entry.handle is not None:
                entry.handle.cancel()
            logger.debug("Notification removed id=%s", identifier)

    def pending_requests(self) -> list[NotificationRequest]:
        return [p.request for p in self._pending.values()]

    def close(self) -> None:
        """Disarm every timer (pending requests are not persisted)."""
        self.remove_pending(list(self._pending))

    def _fire(self, identifier: str) -> None:
        entry = self._pending.pop(identifier, None)
        if entry is None:
            return

        if not self._authorized:
            logger.debug("Notification dropped (not authorized) id=%s", identifier)
            return

        if self._sink is None:
            logger.debug("Notification dropped (no sink) id=%s", identifier)
            return

        logger.info("Delivering notification id=%s", identifier)
        try:
            self._sink(entry.request)
        except Exception:
            logger.exception("Notification sink failed id=%s", identifier)

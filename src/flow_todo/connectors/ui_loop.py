# src/flow_todo/connectors/ui_loop.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from ..core.state import AppState

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _run_ui_loop(state: AppState, stop_event: asyncio.Event, started: threading.Event) -> None:
    """
    Lifecycle of the UI thread of control:
      permission request -> load saved tasks -> wait for stop -> tear down timers

    `started` is set once the saved list is loaded, so callers never see it half-built.
    """
    await state.reminders.request_permission()
    state.task_store.load()
    started.set()

    try:
        await stop_event.wait()
    finally:
        state.task_store.close()
        state.notification_center.close()
        logger.info("UI loop stopped.")


@dataclass
class UiLoopRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def call(self, fn: Callable[..., T], *args: Any, timeout: float | None = 10.0) -> T:
        """Run fn(*args) on the loop thread and return its result (exceptions propagate)."""

        async def _invoke() -> T:
            return fn(*args)

        fut = asyncio.run_coroutine_threadsafe(_invoke(), self.loop)
        return fut.result(timeout=timeout)

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except Exception:
            logger.debug("Failed to signal UI loop stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_ui_loop_in_background(state: AppState) -> UiLoopRunner | None:
    """
    Start the event loop that owns all task state in a background thread.

    Why a thread:
    - console REPL is blocking (input()).
    - timers (deferred removal, reminders) need a loop that keeps running meanwhile.
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event

        try:
            loop.run_until_complete(_run_ui_loop(state, stop_event, ready))
        except Exception:
            logger.exception("UI loop crashed.")
        finally:
            with contextlib.suppress(Exception):
                loop.stop()
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="flow-ui-loop", daemon=True)
    t.start()

    if not ready.wait(timeout=5.0):
        logger.error("UI loop thread did not start in time.")
        return None

    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("UI loop thread did not initialize properly.")
        return None

    logger.info("UI loop thread started.")
    return UiLoopRunner(thread=t, loop=loop, stop_event=stop_event)

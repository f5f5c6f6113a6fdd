# src/flow_todo/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, starts the UI loop thread, then:
- runs the console REPL in the main thread (default), or
- waits for SIGINT/SIGTERM while reminders keep firing (console disabled).
"""

from __future__ import annotations

import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import print_notification, print_screen, run_console_loop
from ..connectors.ui_loop import start_ui_loop_in_background
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    setup_logging(log_dir=settings.data_dir, console_level=settings.log_level)

    logger.info("Starting %s...", settings.app_name)

    renderer = print_screen if settings.console_enabled else None
    state = create_initial_state(settings=settings, sink=print_notification, renderer=renderer)

    runner = start_ui_loop_in_background(state)
    if runner is None:
        raise SystemExit(1)

    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    try:
        if settings.console_enabled:
            run_console_loop(state, runner)
        else:
            try:
                signal.signal(signal.SIGINT, _handle_signal)
                signal.signal(signal.SIGTERM, _handle_signal)
            except Exception:
                # Some platforms may not support SIGTERM, etc.
                pass
            logger.info("Console disabled. Reminders only. Press Ctrl+C to stop.")
            stop_main.wait()
    finally:
        runner.stop()
        runner.join(timeout=10.0)
        logger.info("Bye.")


if __name__ == "__main__":
    main()

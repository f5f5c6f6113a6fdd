# src/flow_todo/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import submit_text
from ..core.ports import NotificationRequest
from ..core.state import AppState
from .ui_loop import UiLoopRunner

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def print_notification(request: NotificationRequest) -> None:
    """Notification sink: show a delivered reminder in the terminal."""
    _print_ts(f"[{request.title}] {request.body}")


def print_screen(text: str) -> None:
    print(f"\n{text}\n", flush=True)


def handle_input(state: AppState, line: str) -> str:
    """Runs on the UI loop thread: slash commands, otherwise a new to-do."""
    reply = command_registry.handle(state, line)
    if reply is not None:
        return reply
    return submit_text(state, line)


def run_console_loop(state: AppState, runner: UiLoopRunner) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type a to-do to add it. Use /help for commands. Use /exit to quit.")
    print_screen(runner.call(state.view.render))

    while True:
        try:
            user_input = input("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = runner.call(handle_input, state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            _print_ts(reply)

    logger.info("Console connector finished.")

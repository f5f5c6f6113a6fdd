# src/flow_todo/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..core.timefmt import format_clock_time, parse_time_of_day

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Any other line adds it as a new to-do at the draft time.")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_row(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def submit_text(state: AppState, text: str) -> str:
    """Plain input line: use it as the draft title and add it."""
    view = state.view
    view.set_new_title(text)
    task = view.add_new_item()
    return f"Added: {task.title} ({format_clock_time(task.reminder_time)})"


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return state.view.render()


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.task_store
    center = state.notification_center
    return (
        "Status:\n"
        f"  Tasks: {len(store.tasks)} stored, {len(store.visible_tasks())} shown\n"
        f"  Pending removals: {len(store.pending_removals())}\n"
        f"  Pending reminders: {len(center.pending_requests())}\n"
        f"  Notifications: {'allowed' if center.authorized else 'not allowed'}\n"
        f"  Store: {state.kv_store.path}"
    )


def cmd_title(state: AppState, args: list[str]) -> str:
    """
    /title <text>  -> set the draft title
    /title         -> clear it
    """
    state.view.set_new_title(" ".join(args))
    return f"Draft title: {state.view.new_title or '(empty)'}"


def cmd_at(state: AppState, args: list[str]) -> str:
    """/at <time>  -> set the draft reminder time (e.g. /at 9:00 AM)"""
    if not args:
        return f"Draft time: {format_clock_time(state.view.new_reminder_time)}. Usage: /at 9:00 AM"
    try:
        value = parse_time_of_day(" ".join(args), state.view.new_reminder_time)
    except ValueError:
        return "Could not read that time. Examples: 9:00 AM, 9am, 21:30."
    state.view.set_new_reminder_time(value)
    return f"Draft time: {format_clock_time(value)}"


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add                    -> add the current draft
    /add <title>            -> add with the draft time
    /add <title> @ <time>   -> add with this time
    """
    view = state.view
    if args:
        text = " ".join(args)
        # "@" only separates a time when what follows it reads as one (bob@example.com stays a title)
        title, sep, when = text.rpartition("@")
        reminder_time = None
        if sep:
            try:
                reminder_time = parse_time_of_day(when, view.new_reminder_time)
            except ValueError:
                reminder_time = None

        if reminder_time is None:
            view.set_new_title(text)
        else:
            view.set_new_reminder_time(reminder_time)
            view.set_new_title(title.strip())

    task = view.add_new_item()
    return f"Added: {task.title} ({format_clock_time(task.reminder_time)})"


def cmd_done(state: AppState, args: list[str]) -> str:
    if len(args) != 1 or _parse_row(args[0]) is None:
        return "Usage: /done <row>"
    try:
        task = state.view.mark_completed(int(args[0]))
    except IndexError as e:
        return str(e)
    return f"Completed: {task.title}"


def cmd_time(state: AppState, args: list[str]) -> str:
    """/time <row> <time>  -> edit a task's reminder time (the reminder itself is not moved)"""
    if len(args) < 2 or _parse_row(args[0]) is None:
        return "Usage: /time <row> <time>"
    row = int(args[0])
    try:
        task = state.view.task_at(row)
        value = parse_time_of_day(" ".join(args[1:]), task.reminder_time)
    except IndexError as e:
        return str(e)
    except ValueError:
        return "Could not read that time. Examples: 9:00 AM, 9am, 21:30."
    state.view.edit_reminder_time(row, value)
    return f"Reminder for {task.title}: {format_clock_time(value)}"


def cmd_del(state: AppState, args: list[str]) -> str:
    rows = [_parse_row(a) for a in args]
    if not rows or any(r is None for r in rows):
        return "Usage: /del <row> [<row> ...]"
    try:
        removed = state.view.delete_rows(r for r in rows if r is not None)
    except IndexError as e:
        return str(e)
    logger.debug("Deleted rows=%s", rows)
    return "Deleted: " + ", ".join(t.title or "(untitled)" for t in removed)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the list.", aliases=["ls"])
registry.register("status", cmd_status, help_text="Show store and reminder status.")
registry.register("title", cmd_title, help_text="Set the draft title: /title <text>.")
registry.register("at", cmd_at, help_text="Set the draft reminder time: /at 9:00 AM.")
registry.register("add", cmd_add, help_text="Add a to-do: /add [<title> [@ <time>]].", aliases=["+"])
registry.register("done", cmd_done, help_text="Mark a row completed: /done <row>.", aliases=["x"])
registry.register(
    "time",
    cmd_time,
    help_text="Edit a row's reminder time (the reminder keeps its time): /time <row> <time>.",
)
registry.register("del", cmd_del, help_text="Delete rows: /del <row> [<row> ...].", aliases=["rm"])

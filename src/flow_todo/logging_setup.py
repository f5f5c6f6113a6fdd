# src/flow_todo/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "flow.log"

# Minimum console level per logger subtree. Longest matching prefix wins.
# The file handler still gets everything.
CONSOLE_FLOORS: dict[str, int] = {
    "flow_todo": logging.NOTSET,
    # one line per kv get/set on every flush
    "flow_todo.storage": logging.WARNING,
    # pending/removed per schedule; deliveries are INFO and still shown
    "flow_todo.notifications.center": logging.INFO,
    "py.warnings": logging.ERROR,
}
THIRD_PARTY_FLOOR = logging.ERROR


def _console_floor(name: str) -> int:
    best: str | None = None
    for prefix in CONSOLE_FLOORS:
        if name == prefix or name.startswith(prefix + "."):
            if best is None or len(prefix) > len(best):
                best = prefix
    return THIRD_PARTY_FLOOR if best is None else CONSOLE_FLOORS[best]


class _ConsoleNoiseFilter(logging.Filter):
    """Keep the list readable while the REPL prompt shares stderr/stdout with logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= _console_floor(record.name)


def resolve_level(value: str | int, default: int = logging.INFO) -> int:
    """'debug' / 'WARNING' / 10 -> logging level; unknown names give `default`."""
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(
    *,
    log_dir: str | Path = ".local/flow",
    console_level: str | int = logging.INFO,
    file_level: str | int = logging.DEBUG,
) -> Path:
    """
    Console (stderr) gets filtered records at `console_level`; `<log_dir>/flow.log`
    gets the full stream at `file_level`. Replaces any handlers already on the root.

    Call once at startup. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(resolve_level(console_level))
    console.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(resolve_level(file_level, default=logging.DEBUG))
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    logging.getLogger(__name__).debug("Logging ready file=%s console_level=%s", log_file, console_level)
    return log_file

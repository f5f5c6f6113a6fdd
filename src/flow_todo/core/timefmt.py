# src/flow_todo/core/timefmt.py

"""Time-of-day parsing and 12-hour clock formatting (local, naive datetimes)."""

from __future__ import annotations

import re
from datetime import datetime

_TIME_RE = re.compile(
    r"^\s*(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?\s*(?P<ampm>[ap]\.?m\.?)?\s*$",
    re.IGNORECASE,
)


def format_clock_time(value: datetime) -> str:
    """Format as `h:mm AM/PM` (no leading zero on the hour)."""
    hour12 = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour12}:{value.minute:02d} {suffix}"


def parse_time_of_day(text: str, base: datetime) -> datetime:
    """
    Parse a time of day and apply it to `base`, keeping the date of `base`.

    Accepted: "9:00 AM", "9:00am", "9am", "12:30 p.m.", "21:30", "9".
    Raises ValueError for anything else.
    """
    m = _TIME_RE.match(text or "")
    if not m:
        raise ValueError(f"Not a time of day: {text!r}")

    hour = int(m.group("hour"))
    minute = int(m.group("minute") or 0)
    ampm = (m.group("ampm") or "").replace(".", "").lower()

    if minute > 59:
        raise ValueError(f"Minute out of range: {text!r}")

    if ampm:
        if not 1 <= hour <= 12:
            raise ValueError(f"Hour out of range for 12-hour clock: {text!r}")
        hour = hour % 12 + (12 if ampm == "pm" else 0)
    elif hour > 23:
        raise ValueError(f"Hour out of range: {text!r}")

    return base.replace(hour=hour, minute=minute, second=0, microsecond=0)

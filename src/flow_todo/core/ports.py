# src/flow_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task store and the reminder scheduler.

The core depends on Protocols instead of concrete implementations.
This keeps storage and the notification backend swappable and makes testing easier.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(slots=True, frozen=True)
class CalendarTrigger:
    """Non-repeating match on (year, month, day, hour, minute)."""

    year: int
    month: int
    day: int
    hour: int
    minute: int

    @classmethod
    def from_datetime(cls, value: datetime) -> CalendarTrigger:
        return cls(
            year=value.year,
            month=value.month,
            day=value.day,
            hour=value.hour,
            minute=value.minute,
        )

    def fire_date(self) -> datetime:
        return datetime(self.year, self.month, self.day, self.hour, self.minute)


@dataclass(slots=True, frozen=True)
class NotificationRequest:
    identifier: str
    title: str
    body: str
    trigger: CalendarTrigger


NotificationSink = Callable[[NotificationRequest], None]
# Receives a request at the moment it is delivered.


class NotificationCenter(Protocol):
    """
    Backend that holds pending local notifications keyed by identifier.

    Backends are not required to replace on add(); the reminder scheduler
    removes a task's pending identifier before adding a new request for it.
    """

    async def request_authorization(self) -> bool: ...
    def add(self, request: NotificationRequest) -> None: ...
    def remove_pending(self, identifiers: Iterable[str]) -> None: ...
    def pending_requests(self) -> list[NotificationRequest]: ...


class KeyValueStore(Protocol):
    def get(self, key: str) -> bytes | None: ...
    def set(self, key: str, value: bytes) -> None: ...
    def remove(self, key: str) -> None: ...

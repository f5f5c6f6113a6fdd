# tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any


def new_task_id() -> str:
    return str(uuid.uuid4()).upper()


@dataclass(slots=True)
class Task:
    """
    A single to-do entry.

    Notes:
    - id doubles as the reminder notification identifier.
    - due_date is the creation time; nothing reads it after that.
    - only the hour/minute of reminder_time are edited by the UI, but the
      date part is still used by the notification trigger.
    """

    id: str
    title: str
    due_date: datetime
    reminder_time: datetime
    is_completed: bool = False

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "dueDate": self.due_date.isoformat(),
            "reminderTime": self.reminder_time.isoformat(),
            "isCompleted": self.is_completed,
        }

    @classmethod
    def from_record(cls, raw: Any) -> Task:
        """
        Strict decode of a persisted record.

        Raises ValueError / KeyError / TypeError on any missing or mistyped field,
        so one bad record invalidates the whole stored list.
        """
        if not isinstance(raw, dict):
            raise TypeError(f"task record must be an object, got {type(raw).__name__}")

        task_id = raw["id"]
        title = raw["title"]
        completed = raw["isCompleted"]
        if not isinstance(task_id, str) or not task_id:
            raise ValueError("task id must be a non-empty string")
        if not isinstance(title, str):
            raise TypeError("task title must be a string")
        if not isinstance(completed, bool):
            raise TypeError("isCompleted must be a boolean")

        return cls(
            id=task_id,
            title=title,
            due_date=datetime.fromisoformat(raw["dueDate"]),
            reminder_time=datetime.fromisoformat(raw["reminderTime"]),
            is_completed=completed,
        )

# src/flow_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import Settings
    from ..notifications.center import LocalNotificationCenter
    from ..notifications.reminders import ReminderScheduler
    from ..storage.kv_store import SQLiteKeyValueStore
    from ..tasks.task_store import TaskStore
    from ..ui.list_view import TodoListView


@dataclass
class AppState:
    # Settings are kept on the state for easy access from connectors and commands.
    settings: Settings

    kv_store: SQLiteKeyValueStore
    notification_center: LocalNotificationCenter
    reminders: ReminderScheduler
    task_store: TaskStore
    view: TodoListView

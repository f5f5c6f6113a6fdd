# src/flow_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires storage, reminders, the task store and the view into AppState.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..core.ports import NotificationSink
from ..core.state import AppState
from ..notifications.center import LocalNotificationCenter
from ..notifications.reminders import ReminderScheduler
from ..storage.kv_store import SQLiteKeyValueStore
from ..tasks.task_persistence import TaskPersistence
from ..tasks.task_store import TaskStore
from ..ui.list_view import Renderer, TodoListView

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings: Settings | None = None,
    sink: NotificationSink | None = None,
    renderer: Renderer | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    kv_store = SQLiteKeyValueStore(settings.store_path)
    center = LocalNotificationCenter(sink, allow=settings.notifications_allowed)
    reminders = ReminderScheduler(center, app_name=settings.app_name)
    task_store = TaskStore(
        TaskPersistence(kv_store),
        reminders,
        purge_completed_on_load=settings.purge_completed_on_load,
    )
    view = TodoListView(task_store, title=settings.app_name, renderer=renderer)
    logger.debug("State wired store=%s notifications_allowed=%s", settings.store_path, settings.notifications_allowed)

    return AppState(
        settings=settings,
        kv_store=kv_store,
        notification_center=center,
        reminders=reminders,
        task_store=task_store,
        view=view,
    )

# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from flow_todo.core.state import AppState
from flow_todo.notifications.reminders import ReminderScheduler
from flow_todo.storage.kv_store import SQLiteKeyValueStore
from flow_todo.tasks.task_persistence import TaskPersistence
from flow_todo.tasks.task_store import TaskStore
from flow_todo.ui.list_view import TodoListView

from .fakes import FakeNotificationCenter

# Short enough to keep the suite fast, long enough to observe the half-way point.
TEST_COMPLETION_DELAY = 0.2


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Flow.",
        log_level="INFO",
        console_enabled=False,
        notifications_allowed=True,
        data_dir=tmp_path,
        store_path=tmp_path / "flow.sqlite3",
        purge_completed_on_load=False,
    )


@pytest.fixture()
def kv(settings: SimpleNamespace) -> SQLiteKeyValueStore:
    return SQLiteKeyValueStore(settings.store_path)


@pytest.fixture()
def persistence(kv: SQLiteKeyValueStore) -> TaskPersistence:
    return TaskPersistence(kv)


@pytest.fixture()
def center() -> FakeNotificationCenter:
    return FakeNotificationCenter()


@pytest.fixture()
def reminders(center: FakeNotificationCenter) -> ReminderScheduler:
    return ReminderScheduler(center, app_name="Flow.")


@pytest.fixture()
def store(persistence: TaskPersistence, reminders: ReminderScheduler) -> TaskStore:
    """
    NOTE: We keep the real SQLite key-value store here because the
    flush-after-mutation contract is part of what we want to test.
    """
    return TaskStore(persistence, reminders, completion_delay=TEST_COMPLETION_DELAY)


@pytest.fixture()
def view(store: TaskStore) -> TodoListView:
    return TodoListView(store, title="Flow.")


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    kv: SQLiteKeyValueStore,
    center: FakeNotificationCenter,
    reminders: ReminderScheduler,
    store: TaskStore,
    view: TodoListView,
) -> AppState:
    return AppState(
        settings=settings,
        kv_store=kv,
        notification_center=center,
        reminders=reminders,
        task_store=store,
        view=view,
    )

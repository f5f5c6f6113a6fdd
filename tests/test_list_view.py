# tests/test_list_view.py

from __future__ import annotations

from datetime import datetime

import pytest

from flow_todo.tasks.task_store import TaskStore
from flow_todo.ui.list_view import TodoListView

NOW = datetime(2031, 5, 4, 8, 12, 33)


def _view(store: TaskStore) -> TodoListView:
    return TodoListView(store, title="Flow.", clock=lambda: NOW)


def test_draft_defaults_to_now_without_seconds(store) -> None:
    view = _view(store)
    assert view.new_title == ""
    assert view.new_reminder_time == datetime(2031, 5, 4, 8, 12)


def test_add_new_item_uses_draft_then_clears_it(store) -> None:
    view = _view(store)
    view.set_new_title("Buy milk")
    view.set_new_reminder_time(datetime(2031, 5, 4, 9, 0))

    task = view.add_new_item()

    assert (task.title, task.reminder_time) == ("Buy milk", datetime(2031, 5, 4, 9, 0))
    assert view.new_title == ""
    assert view.new_reminder_time == datetime(2031, 5, 4, 8, 12)


def test_render_lists_rows_and_input_row(store) -> None:
    view = _view(store)
    store.add("Buy milk", datetime(2031, 5, 4, 9, 0))

    screen = view.render()

    assert screen.splitlines()[0] == "Flow."
    assert "1. Buy milk  [ ]  reminder 9:00 AM" in screen
    assert "+ New To-Do Item | Time: 8:12 AM" in screen


def test_render_empty_list(store) -> None:
    assert "(nothing to do)" in _view(store).render()


def test_renderer_runs_on_every_store_change(store) -> None:
    screens: list[str] = []
    view = _view(store)
    view.set_renderer(screens.append)

    store.add("a", NOW)
    store.delete([0])

    assert len(screens) == 2
    assert "1. a" in screens[0]
    assert "(nothing to do)" in screens[1]

    view.detach()
    store.add("b", NOW)
    assert len(screens) == 2


def test_edit_reminder_time_writes_through_to_store(store) -> None:
    view = _view(store)
    task = store.add("a", datetime(2031, 5, 4, 9, 0))

    view.edit_reminder_time(1, datetime(2031, 5, 4, 17, 45))

    assert store.get(task.id).reminder_time == datetime(2031, 5, 4, 17, 45)


def test_task_at_rejects_rows_off_screen(store) -> None:
    view = _view(store)
    store.add("a", NOW)
    with pytest.raises(IndexError):
        view.task_at(0)
    with pytest.raises(IndexError):
        view.task_at(2)


@pytest.mark.asyncio
async def test_completed_rows_disappear_and_rows_renumber(store) -> None:
    view = _view(store)
    store.add("a", NOW)
    store.add("b", NOW)

    done = view.mark_completed(1)

    assert done.title == "a"
    assert [t.title for t in view.rows()] == ["b"]
    assert "1. b" in view.render()
    store.close()


@pytest.mark.asyncio
async def test_delete_rows_maps_visible_rows_to_store_positions(store) -> None:
    view = _view(store)
    store.add("a", NOW)
    store.add("b", NOW)
    store.add("c", NOW)
    view.mark_completed(1)

    removed = view.delete_rows([1])

    assert [t.title for t in removed] == ["b"]
    assert [t.title for t in store.tasks] == ["a", "c"]
    store.close()

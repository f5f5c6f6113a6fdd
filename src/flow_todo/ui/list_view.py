# src/flow_todo/ui/list_view.py

"""
Single-screen list view: the input row plus the incomplete tasks.

The view owns only draft input state. Task data is always read from the
injected TaskStore; the view re-renders whenever the store reports a change.
Rows are addressed by their 1-based position among visible tasks.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime

from ..core.timefmt import format_clock_time
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore

Renderer = Callable[[str], None]


class TodoListView:
    def __init__(
        self,
        store: TaskStore,
        *,
        title: str = "Flow.",
        renderer: Renderer | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._title = title
        self._renderer = renderer
        self._clock = clock

        self.new_title = ""
        self.new_reminder_time = self._now_minute()

        self._unsubscribe = store.subscribe(self._on_store_changed)

    def _now_minute(self) -> datetime:
        return self._clock().replace(second=0, microsecond=0)

    def set_renderer(self, renderer: Renderer | None) -> None:
        self._renderer = renderer

    def detach(self) -> None:
        self._unsubscribe()

    # ---- input row ----

    def set_new_title(self, text: str) -> None:
        self.new_title = text

    def set_new_reminder_time(self, value: datetime) -> None:
        self.new_reminder_time = value

    def add_new_item(self) -> Task:
        task = self._store.add(self.new_title, self.new_reminder_time)
        self.new_title = ""
        self.new_reminder_time = self._now_minute()
        return task

    # ---- rows ----

    def rows(self) -> list[Task]:
        return self._store.visible_tasks()

    def task_at(self, row: int) -> Task:
        """Raises IndexError for a row that is not on screen."""
        rows = self.rows()
        if not 1 <= row <= len(rows):
            raise IndexError(f"No row {row} (showing {len(rows)}).")
        return rows[row - 1]

    def mark_completed(self, row: int) -> Task:
        task = self.task_at(row)
        self._store.complete(task.id)
        return task

    def edit_reminder_time(self, row: int, value: datetime) -> Task:
        task = self.task_at(row)
        self._store.update_reminder_time(task.id, value)
        return task

    def delete_rows(self, rows: Iterable[int]) -> list[Task]:
        """Swipe-to-delete: map visible rows to positions in the full list."""
        targets = [self.task_at(r) for r in sorted(set(rows))]
        ids = {t.id for t in targets}
        indices = [i for i, t in enumerate(self._store.tasks) if t.id in ids]
        self._store.delete(indices)
        return targets

    # ---- rendering ----

    def render(self) -> str:
        lines = [self._title, ""]
        rows = self.rows()
        if not rows:
            lines.append("  (nothing to do)")
        for n, task in enumerate(rows, start=1):
            lines.append(f"  {n}. {task.title}  [ ]  reminder {format_clock_time(task.reminder_time)}")
        lines.append("")
        draft = self.new_title or "New To-Do Item"
        lines.append(f"  + {draft} | Time: {format_clock_time(self.new_reminder_time)}")
        return "\n".join(lines)

    def _on_store_changed(self, snapshot: tuple[Task, ...]) -> None:
        if self._renderer is None:
            return
        self._renderer(self.render())

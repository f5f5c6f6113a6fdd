# tasks/task_store.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from ..notifications.reminders import ReminderScheduler
from .task_models import Task, new_task_id
from .task_persistence import TaskPersistence

logger = logging.getLogger(__name__)

COMPLETION_DELAY_SECONDS = 2.0

TaskListener = Callable[[tuple[Task, ...]], None]


class TaskStore:
    """
    In-memory ordered task list (append order = display order).

    Every add, complete, delete and post-completion removal flushes the whole
    list to persistence. Reminder-time edits are applied in place only: no flush and
    no re-scheduling of the reminder.

    Threading:
    - all methods must run on the event loop thread; complete() arms a
      loop.call_later() timer for the deferred removal
    """

    def __init__(
        self,
        persistence: TaskPersistence,
        reminders: ReminderScheduler,
        *,
        completion_delay: float = COMPLETION_DELAY_SECONDS,
        purge_completed_on_load: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._persistence = persistence
        self._reminders = reminders
        self._completion_delay = float(completion_delay)
        self._purge_completed_on_load = purge_completed_on_load
        self._clock = clock

        self._tasks: list[Task] = []
        self._removals: dict[str, asyncio.TimerHandle] = {}
        self._listeners: list[TaskListener] = []

    # ---- queries ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def visible_tasks(self) -> list[Task]:
        return [t for t in self._tasks if not t.is_completed]

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def pending_removals(self) -> list[str]:
        return list(self._removals)

    # ---- change notification ----

    def subscribe(self, listener: TaskListener) -> Callable[[], None]:
        """Register a listener for new snapshots. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _changed(self) -> None:
        snapshot = self.tasks
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Task listener failed.")

    # ---- mutators ----

    def load(self) -> None:
        loaded = self._persistence.load()
        if loaded is None:
            logger.info("No saved tasks; starting empty.")
            return

        if self._purge_completed_on_load:
            kept = [t for t in loaded if not t.is_completed]
            if len(kept) != len(loaded):
                logger.info("Purged %d completed task(s) on load.", len(loaded) - len(kept))
                loaded = kept
                self._persistence.save(loaded)

        self._tasks = list(loaded)
        logger.info("Loaded %d task(s).", len(self._tasks))
        self._changed()

    def add(self, title: str, reminder_time: datetime) -> Task:
        task = Task(
            id=new_task_id(),
            title=title,
            due_date=self._clock(),
            reminder_time=reminder_time,
        )
        self._tasks.append(task)
        logger.debug("Task added id=%s reminder=%s", task.id, reminder_time)

        self._reminders.schedule(task)
        self._persistence.save(self._tasks)
        self._changed()
        return task

    def update_reminder_time(self, task_id: str, new_time: datetime) -> None:
        task = self.get(task_id)
        if task is None:
            return
        task.reminder_time = new_time
        logger.debug("Reminder time edited id=%s reminder=%s (not rescheduled)", task_id, new_time)
        self._changed()

    def complete(self, task_id: str) -> None:
        task = self.get(task_id)
        if task is None:
            return

        if task_id in self._removals:
            task.is_completed = True
            logger.debug("Task %s already pending removal", task_id)
        else:
            # raises RuntimeError off the loop thread, before anything is touched
            loop = asyncio.get_running_loop()
            task.is_completed = True
            self._removals[task_id] = loop.call_later(
                self._completion_delay, self._remove_completed, task_id
            )
            logger.info("Task %s -> completed (removal in %.1fs)", task_id, self._completion_delay)
        self._persistence.save(self._tasks)
        self._changed()

    def _remove_completed(self, task_id: str) -> None:
        self._removals.pop(task_id, None)
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        if len(self._tasks) == before:
            return
        logger.info("Task %s -> removed", task_id)
        self._persistence.save(self._tasks)
        self._changed()

    def delete(self, indices: Iterable[int]) -> None:
        """Remove tasks at the given positions of the full list."""
        wanted = sorted({i for i in indices if 0 <= i < len(self._tasks)}, reverse=True)
        if not wanted:
            return

        for i in wanted:
            task = self._tasks.pop(i)
            handle = self._removals.pop(task.id, None)
            if handle is not None:
                handle.cancel()
            logger.info("Task %s -> deleted", task.id)

        self._persistence.save(self._tasks)
        self._changed()

    def close(self) -> None:
        """Cancel pending deferred removals (those tasks stay saved as completed)."""
        for handle in self._removals.values():
            handle.cancel()
        if self._removals:
            logger.info("Cancelled %d pending removal(s).", len(self._removals))
        self._removals.clear()

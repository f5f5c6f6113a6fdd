# src/flow_todo/notifications/reminders.py

from __future__ import annotations

import logging

from ..core.ports import CalendarTrigger, NotificationCenter, NotificationRequest
from ..core.timefmt import format_clock_time
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


def build_reminder_body(task: Task) -> str:
    return f"Reminder: {task.title} at {format_clock_time(task.reminder_time)}"


def build_reminder_request(task: Task, *, app_name: str) -> NotificationRequest:
    """
    One request per task: identifier = task id, trigger = the reminder's
    (year, month, day, hour, minute), i.e. a specific minute, not "next 9:00".
    """
    return NotificationRequest(
        identifier=task.id,
        title=app_name,
        body=build_reminder_body(task),
        trigger=CalendarTrigger.from_datetime(task.reminder_time),
    )


class ReminderScheduler:
    """Registers one local notification per task. Never raises to the caller."""

    def __init__(self, center: NotificationCenter, *, app_name: str = "Flow.") -> None:
        self._center = center
        self._app_name = app_name

    async def request_permission(self) -> bool:
        """Ask once at launch. Nothing else waits on or checks the answer."""
        try:
            granted = await self._center.request_authorization()
        except Exception:
            logger.exception("Notification permission request failed.")
            return False

        if granted:
            logger.info("Notification permission granted.")
        else:
            logger.info("Notification permission not granted; reminders will be dropped.")
        return granted

    def schedule(self, task: Task) -> None:
        try:
            request = build_reminder_request(task, app_name=self._app_name)
            self._center.remove_pending([task.id])
            self._center.add(request)
            logger.debug("Reminder scheduled task_id=%s at=%s", task.id, task.reminder_time)
        except Exception:
            logger.exception("Error scheduling notification task_id=%s", task.id)

    def cancel(self, task_id: str) -> None:
        """Withdraw the pending reminder for `task_id` (no-op if none is pending)."""
        try:
            self._center.remove_pending([task_id])
            logger.debug("Reminder cancelled task_id=%s", task_id)
        except Exception:
            logger.exception("Error cancelling notification task_id=%s", task_id)

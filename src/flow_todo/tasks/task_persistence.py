# tasks/task_persistence.py

from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from ..core.ports import KeyValueStore
from .task_models import Task

logger = logging.getLogger(__name__)

STORAGE_KEY = "todo_items"


class TaskPersistence:
    """
    Whole-list replace-on-write persistence of the task list.

    The list is stored as one JSON array under a fixed key. There is no schema
    version: anything that does not decode cleanly is treated as "nothing saved".
    """

    def __init__(self, kv: KeyValueStore, *, key: str = STORAGE_KEY) -> None:
        self._kv = kv
        self._key = key

    def save(self, tasks: Sequence[Task]) -> None:
        try:
            blob = json.dumps([t.to_record() for t in tasks], ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError):
            logger.warning("Failed to encode %d task(s); nothing written.", len(tasks), exc_info=True)
            return

        try:
            self._kv.set(self._key, blob)
        except Exception:
            logger.exception("Failed to write task list key=%s", self._key)
            return
        logger.debug("Saved %d task(s) key=%s", len(tasks), self._key)

    def load(self) -> list[Task] | None:
        """Return the saved list, or None if the key is missing or undecodable."""
        try:
            blob = self._kv.get(self._key)
        except Exception:
            logger.exception("Failed to read task list key=%s", self._key)
            return None

        if blob is None:
            return None

        try:
            raw = json.loads(blob.decode("utf-8"))
            if not isinstance(raw, list):
                raise TypeError("stored task list is not an array")
            tasks = [Task.from_record(item) for item in raw]
        except (UnicodeDecodeError, ValueError, KeyError, TypeError):
            logger.warning("Stored task list is undecodable key=%s; ignoring it.", self._key, exc_info=True)
            return None

        return tasks

# src/todolist/tasks/task_store.py

from __future__ import annotations

import dataclasses
import json
import logging
from typing import Any

from ..core.errors import PersistenceError, ValidationError
from ..core.ports import BlobStore
from .task_factory import validate_text
from .task_models import Priority, Task

logger = logging.getLogger(__name__)

DEFAULT_KEY = "tasks"

_UPDATABLE_FIELDS = frozenset({"text", "priority", "completed"})


class TaskStore:
    """
    In-memory ordered task list persisted to a blob store.

    Notes:
    - insertion order is kept; there is no sort
    - Task records are frozen; updates swap in a new record at the same index,
      so every list handed out is a safe snapshot
    - every mutator writes the whole sequence under a single key
    - "not found" is returned as None, never raised
    """

    def __init__(self, blob_store: BlobStore, *, key: str = DEFAULT_KEY) -> None:
        self._blob_store = blob_store
        self._key = key
        self._tasks: list[Task] = []

    @property
    def key(self) -> str:
        return self._key

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- low-level helpers ----

    def _index_of(self, task_id: str) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return -1

    @staticmethod
    def _serialize(tasks: list[Task]) -> str:
        return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)

    @staticmethod
    def _parse(raw: str) -> list[Task]:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Stored tasks are not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise PersistenceError(f"Stored tasks must be a JSON array, got {type(data).__name__}")

        tasks: list[Task] = []
        for i, item in enumerate(data):
            try:
                tasks.append(Task.from_dict(item))
            except (ValueError, TypeError) as e:
                raise PersistenceError(f"Stored task #{i} is invalid: {e}") from e
        return tasks

    # ---- public API ----

    def count_tasks(self) -> int:
        return len(self._tasks)

    def get_tasks(self) -> list[Task]:
        return list(self._tasks)

    def get_task(self, task_id: str) -> Task | None:
        i = self._index_of(task_id)
        return self._tasks[i] if i != -1 else None

    def add_task(self, task: Task) -> Task:
        # No duplicate-id check: ids come from task_factory.
        self._tasks.append(task)
        logger.debug("Task added id=%s priority=%s", task.id, task.priority.value)
        self.save()
        return task

    def update_task(self, task_id: str, **changes: Any) -> Task | None:
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        if "text" in changes:
            changes["text"] = validate_text(changes["text"])
        if "priority" in changes:
            try:
                changes["priority"] = Priority.from_raw(changes["priority"])
            except ValueError as e:
                raise ValidationError(str(e)) from None
        if "completed" in changes and not isinstance(changes["completed"], bool):
            raise ValidationError(f"completed must be a bool, got {changes['completed']!r}")

        i = self._index_of(task_id)
        if i == -1:
            logger.debug("update_task: id=%s not found", task_id)
            return None

        updated = dataclasses.replace(self._tasks[i], **changes)
        self._tasks[i] = updated
        logger.debug("Task updated id=%s fields=%s", task_id, sorted(changes))
        self.save()
        return updated

    def delete_task(self, task_id: str) -> Task | None:
        i = self._index_of(task_id)
        if i == -1:
            logger.debug("delete_task: id=%s not found", task_id)
            return None

        removed = self._tasks.pop(i)
        logger.debug("Task deleted id=%s", task_id)
        self.save()
        return removed

    def toggle_complete(self, task_id: str) -> Task | None:
        i = self._index_of(task_id)
        if i == -1:
            logger.debug("toggle_complete: id=%s not found", task_id)
            return None

        task = self._tasks[i]
        updated = dataclasses.replace(task, completed=not task.completed)
        self._tasks[i] = updated
        logger.debug("Task toggled id=%s completed=%s", task_id, updated.completed)
        self.save()
        return updated

    def load(self) -> bool:
        """
        Replace the in-memory list with the stored one.

        Returns False (and keeps the current list) when nothing is stored yet.
        Raises PersistenceError on unreadable/malformed data; the current list
        is left untouched in that case.
        """
        try:
            raw = self._blob_store.get(self._key)
        except OSError as e:
            raise PersistenceError(f"Cannot read stored tasks: {e}") from e
        if raw is None:
            logger.info("No stored tasks under key=%s; keeping %d in memory", self._key, len(self._tasks))
            return False

        tasks = self._parse(raw)
        self._tasks = tasks
        logger.info("Loaded %d task(s) from key=%s", len(tasks), self._key)
        return True

    def save(self) -> None:
        try:
            self._blob_store.set(self._key, self._serialize(self._tasks))
        except OSError as e:
            raise PersistenceError(f"Cannot write stored tasks: {e}") from e

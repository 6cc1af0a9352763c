# src/todolist/tasks/task_api.py

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from ..core.errors import PersistenceError
from ..core.events import TASKS_UPDATED
from ..core.state import AppState
from .task_factory import create_task, validate_text
from .task_filters import FilterKind
from .task_models import Priority, Task

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _mutate_and_publish(state: AppState, mutate: Callable[[], T | None]) -> T | None:
    """
    Run a store mutation and publish TASKS_UPDATED when it changed something.

    If the store mutated memory but could not write it out, the view is still
    refreshed and the PersistenceError is re-raised for the caller to report.
    """
    try:
        result = mutate()
    except PersistenceError as e:
        state.storage_error = str(e)
        state.unsaved_changes = True
        logger.error("Changes are not being saved: %s", e)
        state.bus.publish(TASKS_UPDATED)
        raise

    if result is not None:
        state.storage_error = None
        state.unsaved_changes = False
        state.bus.publish(TASKS_UPDATED)
    return result


def add_task(state: AppState, text: str, priority: Priority | str | None = None) -> Task:
    """
    Create a task and append it to the store.
    Raises ValidationError for empty text / unknown priority.
    """
    if priority is None:
        priority = str(getattr(state.settings, "default_priority", Priority.MEDIUM))
    task = create_task(text, priority)
    stored = _mutate_and_publish(state, lambda: state.task_store.add_task(task))
    if stored is None:
        raise RuntimeError("TaskStore.add_task returned no task")
    return stored


def edit_task(state: AppState, task_id: str, text: str) -> Task | None:
    clean = validate_text(text)
    return _mutate_and_publish(state, lambda: state.task_store.update_task(task_id, text=clean))


def toggle_task(state: AppState, task_id: str) -> Task | None:
    return _mutate_and_publish(state, lambda: state.task_store.toggle_complete(task_id))


def remove_task(state: AppState, task_id: str) -> Task | None:
    return _mutate_and_publish(state, lambda: state.task_store.delete_task(task_id))


def reload_tasks(state: AppState) -> bool:
    """Re-read the store from disk. Raises PersistenceError (memory kept intact)."""
    try:
        loaded = state.task_store.load()
    except PersistenceError as e:
        state.storage_error = str(e)
        raise
    state.storage_error = None
    if loaded:
        state.bus.publish(TASKS_UPDATED)
    return loaded


def match_tasks(state: AppState, id_or_prefix: str) -> list[Task]:
    """Tasks an id refers to: the exact id if present, otherwise every prefix match."""
    key = id_or_prefix.strip()
    if not key:
        return []

    task = state.task_store.get_task(key)
    if task is not None:
        return [task]
    return [t for t in state.task_store.get_tasks() if t.id.startswith(key)]


def find_task(state: AppState, id_or_prefix: str) -> Task | None:
    """Exact id, or a prefix that matches exactly one task."""
    matches = match_tasks(state, id_or_prefix)
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        logger.debug("Ambiguous id prefix %r (%d matches)", id_or_prefix, len(matches))
    return None


def set_filter(state: AppState, name: str) -> None:
    state.current_filter = name.strip() or FilterKind.ALL.value


def set_search(state: AppState, query: str) -> None:
    state.search_query = query.strip()


def visible_tasks(state: AppState) -> list[Task]:
    """Current view: category filter first, then text search on the result."""
    tasks = state.task_store.get_tasks()
    tasks = state.filters.filter(state.current_filter, tasks)
    if state.search_query:
        tasks = state.filters.filter(FilterKind.SEARCH.value, tasks, state.search_query)
    return tasks

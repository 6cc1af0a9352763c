# src/todolist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- builds the blob store, task store, notification bus and filter selector,
- wires them into AppState (no module-level singletons),
- performs the initial load of persisted tasks.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.errors import PersistenceError
from ..core.events import NotificationBus
from ..core.ports import BlobStore
from ..core.state import AppState
from ..tasks.blob_store import FileBlobStore
from ..tasks.task_filters import FilterSelector
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, blob_store: BlobStore | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the blob store) injectable makes the app easier to test
    and avoids hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if blob_store is None:
        blob_store = FileBlobStore(settings.data_dir)

    filters = FilterSelector(strict=bool(getattr(settings, "strict_filters", False)))

    current_filter = str(getattr(settings, "default_filter", "all"))
    if filters.strict and not filters.has_strategy(current_filter):
        logger.warning("Default filter %r is not registered; using 'all'", current_filter)
        current_filter = "all"

    state = AppState(
        settings=settings,
        task_store=TaskStore(blob_store, key=getattr(settings, "storage_key", "tasks")),
        bus=NotificationBus(),
        filters=filters,
        current_filter=current_filter,
    )
    return state


def load_tasks(state: AppState) -> bool:
    """
    Initial load. A broken blob does not stop the app: the error is logged and
    remembered on the state so the console can warn the user.
    """
    try:
        loaded = state.task_store.load()
    except PersistenceError as e:
        state.storage_error = str(e)
        logger.error("Failed to load stored tasks: %s", e)
        return False
    state.storage_error = None
    return loaded

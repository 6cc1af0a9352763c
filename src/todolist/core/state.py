# src/todolist/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_filters import FilterSelector
from ..tasks.task_store import TaskStore
from .events import NotificationBus


@dataclass
class AppState:
    """
    Everything the presentation layer needs, passed by reference.

    Built once by cli.bootstrap; tests build their own with fresh instances.
    """

    # Store Settings on the state for easy access in other modules later.
    settings: object

    task_store: TaskStore
    bus: NotificationBus
    filters: FilterSelector

    # View state (what the console currently shows)
    current_filter: str = "all"
    search_query: str = ""

    # Last persistence failure message; None when the last save/load succeeded.
    storage_error: str | None = None
    # True when a mutation is in memory but its save failed.
    unsaved_changes: bool = False

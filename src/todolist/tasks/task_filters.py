# src/todolist/tasks/task_filters.py

"""
Named strategies that narrow a task list.

A strategy is fn(tasks, query) -> tasks. Built-ins cover priorities, completion
and text search; more can be registered at runtime with add_strategy().
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from enum import StrEnum

from ..core.errors import UnknownStrategyError
from .task_models import Priority, Task

logger = logging.getLogger(__name__)

Strategy = Callable[[Sequence[Task], str | None], list[Task]]


class FilterKind(StrEnum):
    ALL = "all"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"
    COMPLETED = "completed"
    SEARCH = "search"


# Filter names used by the original browser UI.
LEGACY_ALIASES: dict[str, FilterKind] = {
    "todas": FilterKind.ALL,
    "baja": FilterKind.LOW,
    "media": FilterKind.MEDIUM,
    "alta": FilterKind.HIGH,
    "urgente": FilterKind.URGENT,
    "completadas": FilterKind.COMPLETED,
}


def _all(tasks: Sequence[Task], query: str | None = None) -> list[Task]:
    return list(tasks)


def _by_priority(priority: Priority) -> Strategy:
    def strategy(tasks: Sequence[Task], query: str | None = None) -> list[Task]:
        return [t for t in tasks if t.priority == priority]

    strategy.__name__ = f"priority_{priority.value}"
    return strategy


def _completed(tasks: Sequence[Task], query: str | None = None) -> list[Task]:
    return [t for t in tasks if t.completed]


def _search(tasks: Sequence[Task], query: str | None = None) -> list[Task]:
    if not query:
        return list(tasks)
    needle = query.casefold()
    return [t for t in tasks if needle in t.text.casefold()]


def _builtin_strategies() -> dict[str, Strategy]:
    builtins: dict[FilterKind, Strategy] = {
        FilterKind.ALL: _all,
        FilterKind.LOW: _by_priority(Priority.LOW),
        FilterKind.MEDIUM: _by_priority(Priority.MEDIUM),
        FilterKind.HIGH: _by_priority(Priority.HIGH),
        FilterKind.URGENT: _by_priority(Priority.URGENT),
        FilterKind.COMPLETED: _completed,
        FilterKind.SEARCH: _search,
    }
    out: dict[str, Strategy] = {kind.value: fn for kind, fn in builtins.items()}
    for alias, kind in LEGACY_ALIASES.items():
        out[alias] = builtins[kind]
    return out


class FilterSelector:
    """
    Registry of named filter strategies.

    Unknown names:
    - lenient (default): log a warning and return the input unchanged
    - strict: raise UnknownStrategyError
    """

    def __init__(self, *, strict: bool = False) -> None:
        self._strategies: dict[str, Strategy] = _builtin_strategies()
        self.strict = strict

    def names(self) -> list[str]:
        return list(self._strategies)

    def has_strategy(self, name: str) -> bool:
        return name in self._strategies

    def add_strategy(self, name: str, fn: Strategy) -> None:
        """Register or overwrite a named strategy."""
        if not name or not name.strip():
            raise ValueError("strategy name is required")
        if not callable(fn):
            raise ValueError("strategy must be callable")
        if name in self._strategies:
            logger.info("Overwriting filter strategy %s", name)
        self._strategies[name] = fn

    def filter(self, name: str, tasks: Sequence[Task], query: str | None = None) -> list[Task]:
        strategy = self._strategies.get(name)
        if strategy is None:
            if self.strict:
                raise UnknownStrategyError(name)
            logger.warning("Unknown filter %r; returning tasks unfiltered", name)
            return list(tasks)
        return list(strategy(tasks, query))

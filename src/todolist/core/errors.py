# src/todolist/core/errors.py

"""
Error taxonomy.

Lookups that find nothing are not errors: store methods return None for them.
"""

from __future__ import annotations


class TodoError(Exception):
    """Base class for todolist errors."""


class ValidationError(TodoError, ValueError):
    """Bad user input: empty task text, unknown priority, illegal update field."""


class PersistenceError(TodoError, RuntimeError):
    """The blob store is unavailable or holds data that cannot be parsed."""


class UnknownStrategyError(TodoError, LookupError):
    """A filter name that is not registered (raised only in strict mode)."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown filter: {name!r}")
        self.name = name

# src/todolist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage swappable and makes testing easier.
"""

from typing import Protocol


class BlobStore(Protocol):
    """
    Key-value store for serialized text blobs.

    get() returns None when the key was never written.
    Implementations raise PersistenceError when the backend is unavailable.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


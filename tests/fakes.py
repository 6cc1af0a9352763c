# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from todolist.core.errors import PersistenceError


class FakeBlobStore:
    """
    In-memory BlobStore for unit tests.

    - Captures writes for assertions
    - Can be switched into failing mode for reads and/or writes
    """

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})
        self.writes: list[tuple[str, str]] = []
        self.fail_get = False
        self.fail_set = False

    def get(self, key: str) -> str | None:
        if self.fail_get:
            raise PersistenceError("blob store unavailable")
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_set:
            raise PersistenceError("blob store is read-only")
        self.writes.append((key, value))
        self.data[key] = value


@dataclass(slots=True)
class Recorder:
    """Subscriber that remembers every payload it was called with."""

    calls: list[Any] = field(default_factory=list)

    def __call__(self, payload: Any) -> None:
        self.calls.append(payload)

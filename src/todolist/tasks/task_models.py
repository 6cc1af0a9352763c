# src/todolist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

# Values written by the original browser app.
_LEGACY_PRIORITIES = {
    "baja": "low",
    "media": "medium",
    "alta": "high",
    "urgente": "urgent",
}


class Priority(StrEnum):
    """
    Task urgency tag.

    Notes:
    - stored as the plain string value ("low", "medium", ...)
    - legacy Spanish values are accepted on input and normalized
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @classmethod
    def from_raw(cls, raw: Priority | str) -> Priority:
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            raise ValueError(f"Invalid priority: {raw!r}")
        key = raw.strip().lower()
        key = _LEGACY_PRIORITIES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Invalid priority: {raw!r}") from None


def _parse_timestamp(raw: Any) -> datetime:
    if not isinstance(raw, str) or not raw:
        raise ValueError(f"Invalid createdAt: {raw!r}")
    dt = datetime.fromisoformat(raw)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    text: str
    priority: Priority
    completed: bool
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping (camelCase keys, same layout as the browser app)."""
        return {
            "id": self.id,
            "text": self.text,
            "priority": self.priority.value,
            "completed": self.completed,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: Any) -> Task:
        """Strict parser: raises ValueError on anything that is not a valid task."""
        if not isinstance(payload, dict):
            raise ValueError(f"Task must be an object, got {type(payload).__name__}")

        task_id = payload.get("id")
        if not isinstance(task_id, str) or not task_id:
            raise ValueError(f"Invalid task id: {task_id!r}")

        text = payload.get("text")
        if not isinstance(text, str) or not text.strip():
            raise ValueError(f"Invalid text for task {task_id}")

        completed = payload.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"Invalid completed flag for task {task_id}")

        return cls(
            id=task_id,
            text=text,
            priority=Priority.from_raw(payload.get("priority", "")),
            completed=completed,
            created_at=_parse_timestamp(payload.get("createdAt")),
        )

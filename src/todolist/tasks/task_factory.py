# src/todolist/tasks/task_factory.py

from __future__ import annotations

import random
import string
import time
from datetime import UTC, datetime

from ..core.errors import ValidationError
from .task_models import Priority, Task

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(n: int) -> str:
    if n <= 0:
        return "0"
    out: list[str] = []
    while n:
        n, rem = divmod(n, 36)
        out.append(_BASE36[rem])
    return "".join(reversed(out))


def generate_task_id() -> str:
    """
    Millisecond clock + random suffix, both base36.

    Unique within one process with very high probability. Not cryptographic.
    """
    return _to_base36(time.time_ns() // 1_000_000) + _to_base36(random.getrandbits(52))


def validate_text(text: object) -> str:
    """Return the trimmed text or raise ValidationError."""
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Task text is required.")
    return text.strip()


def create_task(text: str, priority: Priority | str = Priority.MEDIUM) -> Task:
    clean = validate_text(text)
    try:
        prio = Priority.from_raw(priority)
    except ValueError as e:
        raise ValidationError(str(e)) from None

    return Task(
        id=generate_task_id(),
        text=clean,
        priority=prio,
        completed=False,
        created_at=datetime.now(UTC),
    )

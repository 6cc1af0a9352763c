# src/todolist/cli/render.py

from __future__ import annotations

from collections.abc import Sequence

from ..tasks.task_models import Priority, Task

ID_WIDTH = 8

PRIORITY_LABELS = {
    Priority.LOW: "low",
    Priority.MEDIUM: "med",
    Priority.HIGH: "HIGH",
    Priority.URGENT: "URG!",
}


def format_task(task: Task) -> str:
    mark = "x" if task.completed else " "
    label = PRIORITY_LABELS.get(task.priority, task.priority.value)
    created = task.created_at.astimezone().strftime("%Y-%m-%d %H:%M")
    return f"[{mark}] {task.id[:ID_WIDTH]:<{ID_WIDTH}} {label:<4} {task.text}  ({created})"


def format_task_list(tasks: Sequence[Task], *, title: str = "Tasks") -> str:
    if not tasks:
        return f"{title}: (none)"
    lines = [f"{title} ({len(tasks)}):"]
    lines.extend(f"  {format_task(t)}" for t in tasks)
    return "\n".join(lines)

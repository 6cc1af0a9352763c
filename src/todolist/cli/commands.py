# src/todolist/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.errors import PersistenceError, ValidationError
from ..core.state import AppState
from ..tasks import task_api
from ..tasks.task_models import Priority, Task
from .render import ID_WIDTH, format_task_list

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

NOT_SAVED = "Warning: changes are not being saved ({err})."


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  (plain text without a slash adds a task with the default priority)")
        return "\n".join(lines)


registry = CommandRegistry()


def _short(task_id: str) -> str:
    return task_id[:ID_WIDTH]


def _lookup(state: AppState, raw: str) -> Task | str:
    """The task raw refers to, or a reply explaining why there isn't exactly one."""
    matches = task_api.match_tasks(state, raw)
    if len(matches) == 1:
        return matches[0]
    if matches:
        return f"Id {raw!r} is ambiguous ({len(matches)} tasks match); type more of it."
    return f"No task matches id {raw!r}."


def add_and_describe(state: AppState, text: str, priority: Priority | None = None) -> str:
    """Add a task and build the reply shared by /add and plain-text input."""
    try:
        task = task_api.add_task(state, text, priority)
    except ValidationError as e:
        return f"Not added: {e}"
    except PersistenceError as e:
        return "Task added. " + NOT_SAVED.format(err=e)
    return f"Added {_short(task.id)} ({task.priority.value}): {task.text}"


def view_title(state: AppState) -> str:
    title = f"Tasks [filter: {state.current_filter}"
    if state.search_query:
        title += f", search: {state.search_query!r}"
    return title + "]"


def render_view(state: AppState) -> str:
    return format_task_list(task_api.visible_tasks(state), title=view_title(state))


def _parse_priority(raw: str) -> Priority | None:
    try:
        return Priority.from_raw(raw)
    except ValueError:
        return None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <text...>              -> default priority
    /add <priority> <text...>   -> explicit priority (low/medium/high/urgent)
    """
    if not args:
        return "Usage: /add [low|medium|high|urgent] <text>"

    priority = _parse_priority(args[0]) if len(args) > 1 else None
    words = args[1:] if priority is not None else args
    return add_and_describe(state, " ".join(words), priority)


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_view(state)


def cmd_done(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /done <id>"
    task = _lookup(state, args[0])
    if isinstance(task, str):
        return task

    try:
        updated = task_api.toggle_task(state, task.id)
    except PersistenceError as e:
        return NOT_SAVED.format(err=e)
    if updated is None:
        return f"No task matches id {args[0]!r}."
    verb = "Completed" if updated.completed else "Reopened"
    return f"{verb} {_short(updated.id)}: {updated.text}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /edit <id> <new text>"
    task = _lookup(state, args[0])
    if isinstance(task, str):
        return task

    try:
        updated = task_api.edit_task(state, task.id, " ".join(args[1:]))
    except ValidationError as e:
        return f"Not changed: {e}"
    except PersistenceError as e:
        return NOT_SAVED.format(err=e)
    if updated is None:
        return f"No task matches id {args[0]!r}."
    return f"Updated {_short(updated.id)}: {updated.text}"


def cmd_rm(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) != 1:
        return "Usage: /rm <id>"
    task = _lookup(state, args[0])
    if isinstance(task, str):
        return task

    if emit:
        emit(f"Deleting {_short(task.id)}: {task.text}")

    try:
        removed = task_api.remove_task(state, task.id)
    except PersistenceError as e:
        return NOT_SAVED.format(err=e)
    if removed is None:
        return f"No task matches id {args[0]!r}."
    return f"Deleted {_short(removed.id)}."


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter          -> show current filter and available names
    /filter <name>   -> switch the view (all/low/medium/high/urgent/completed, ...)
    """
    if not args:
        names = ", ".join(state.filters.names())
        return f"Current filter: {state.current_filter}\nAvailable: {names}"

    name = args[0].lower()
    if not state.filters.has_strategy(name):
        if state.filters.strict:
            return f"Unknown filter: {name}. Use /filter to list available names."
        task_api.set_filter(state, name)
        return f"Unknown filter {name!r}; showing all tasks.\n" + render_view(state)

    task_api.set_filter(state, name)
    return render_view(state)


def cmd_search(state: AppState, args: list[str]) -> str:
    """
    /search <text>  -> narrow the view to tasks containing text (case-insensitive)
    /search         -> clear the search
    """
    task_api.set_search(state, " ".join(args))
    return render_view(state)


def cmd_status(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.get_tasks()
    done = sum(1 for t in tasks if t.completed)
    storage = "OK" if state.storage_error is None else f"NOT SAVING ({state.storage_error})"
    return (
        "Status:\n"
        f"  Tasks: {len(tasks)} total, {done} completed, {len(tasks) - done} pending\n"
        f"  Filter: {state.current_filter}\n"
        f"  Search: {state.search_query or '(none)'}\n"
        f"  Storage key: {state.task_store.key}\n"
        f"  Storage: {storage}"
    )


def cmd_reload(state: AppState, args: list[str]) -> str:
    try:
        loaded = task_api.reload_tasks(state)
    except PersistenceError as e:
        return f"Reload failed, keeping tasks in memory: {e}"
    if not loaded:
        return "Nothing stored yet; keeping tasks in memory."
    return f"Reloaded {state.task_store.count_tasks()} task(s)."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add [low|medium|high|urgent] <text>.", aliases=["a"]
)
registry.register("list", cmd_list, help_text="Show the current view.", aliases=["ls"])
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>.", aliases=["toggle"])
registry.register("edit", cmd_edit, help_text="Change task text: /edit <id> <text>.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["del", "delete"])
registry.register("filter", cmd_filter, help_text="Filter the view: /filter <name>.", aliases=["f"])
registry.register("search", cmd_search, help_text="Search task text: /search [text].", aliases=["s"])
registry.register("status", cmd_status, help_text="Show counts, view and storage state.")
registry.register("reload", cmd_reload, help_text="Reload tasks from storage.")

# tests/test_commands.py

from __future__ import annotations

from datetime import UTC, datetime

from todolist.cli.commands import CommandRegistry, registry
from todolist.core.state import AppState
from todolist.tasks.task_models import Priority, Task

from .fakes import FakeBlobStore


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bb"])

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=lambda _: None) == "h3"
    assert reg.handle(state, "/BB") == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 2


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_with_and_without_priority(state: AppState) -> None:
    reply = registry.handle(state, "/add urgent Fix the build")
    assert reply is not None and "urgent" in reply

    reply = registry.handle(state, "/add Water plants")
    assert reply is not None and "medium" in reply

    # A lone priority word is the text, not the priority.
    registry.handle(state, "/add high")

    texts = [(t.text, t.priority.value) for t in state.task_store.get_tasks()]
    assert texts == [("Fix the build", "urgent"), ("Water plants", "medium"), ("high", "medium")]


def test_add_usage(state: AppState) -> None:
    assert "Usage" in (registry.handle(state, "/add") or "")


def test_done_edit_rm_by_prefix(state: AppState) -> None:
    registry.handle(state, "/add Fix bug")
    task = state.task_store.get_tasks()[0]
    prefix = task.id[:8]

    assert "Completed" in (registry.handle(state, f"/done {prefix}") or "")
    assert "Reopened" in (registry.handle(state, f"/done {prefix}") or "")
    assert "Updated" in (registry.handle(state, f"/edit {prefix} Fix all bugs") or "")
    assert state.task_store.get_task(task.id).text == "Fix all bugs"

    notes: list[str] = []
    assert "Deleted" in (registry.handle(state, f"/rm {prefix}", emit=notes.append) or "")
    assert notes and "Fix all bugs" in notes[0]
    assert state.task_store.get_tasks() == []


def test_missing_ids_are_messages(state: AppState) -> None:
    assert "No task" in (registry.handle(state, "/done nope") or "")
    assert "No task" in (registry.handle(state, "/edit nope text") or "")
    assert "No task" in (registry.handle(state, "/rm nope") or "")
    assert "Usage" in (registry.handle(state, "/done") or "")


def test_edit_empty_text(state: AppState) -> None:
    registry.handle(state, "/add x")
    task = state.task_store.get_tasks()[0]
    assert "Usage" in (registry.handle(state, f"/edit {task.id}") or "")


def test_filter_and_search_render_view(state: AppState) -> None:
    registry.handle(state, "/add urgent Fix login bug")
    registry.handle(state, "/add low Buy milk")

    view = registry.handle(state, "/filter urgent") or ""
    assert "Fix login bug" in view and "Buy milk" not in view

    view = registry.handle(state, "/search milk") or ""
    assert "(none)" in view

    view = registry.handle(state, "/filter all") or ""
    assert "Buy milk" in view and "Fix login bug" not in view

    registry.handle(state, "/search")
    view = registry.handle(state, "/list") or ""
    assert "Buy milk" in view and "Fix login bug" in view


def test_filter_unknown_lenient_and_strict(state: AppState) -> None:
    reply = registry.handle(state, "/filter urgnet") or ""
    assert "showing all tasks" in reply
    assert state.current_filter == "urgnet"

    state.current_filter = "all"
    state.filters.strict = True
    reply = registry.handle(state, "/filter urgnet") or ""
    assert "Unknown filter" in reply
    assert state.current_filter == "all"


def test_filter_lists_names(state: AppState) -> None:
    reply = registry.handle(state, "/filter") or ""
    assert "Current filter: all" in reply
    assert "completed" in reply and "urgente" in reply


def test_status_and_save_warning(state: AppState, blob: FakeBlobStore) -> None:
    blob.fail_set = True
    reply = registry.handle(state, "/add x") or ""
    assert "not being saved" in reply

    status = registry.handle(state, "/status") or ""
    assert "1 total" in status
    assert "NOT SAVING" in status


def test_reload(state: AppState, blob: FakeBlobStore) -> None:
    assert "Nothing stored" in (registry.handle(state, "/reload") or "")
    registry.handle(state, "/add x")
    assert "Reloaded 1" in (registry.handle(state, "/reload") or "")
    blob.data["tasks"] = "[1, 2"
    assert "Reload failed" in (registry.handle(state, "/reload") or "")
    assert state.task_store.count_tasks() == 1


def test_help_lists_commands(state: AppState) -> None:
    reply = registry.handle(state, "/help") or ""
    for name in ("/add", "/done", "/edit", "/rm", "/filter", "/search", "/status"):
        assert name in reply


def test_ambiguous_id_is_reported(state: AppState) -> None:
    created = datetime.now(UTC)
    for task_id in ("abc1", "abc2"):
        state.task_store.add_task(Task(task_id, "x", Priority.LOW, False, created))

    for line in ("/done abc", "/edit abc new text", "/rm abc"):
        reply = registry.handle(state, line) or ""
        assert "ambiguous" in reply
        assert "2 tasks match" in reply
    assert [t.text for t in state.task_store.get_tasks()] == ["x", "x"]
    assert "Completed abc1" in (registry.handle(state, "/done abc1") or "")

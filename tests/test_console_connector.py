# tests/test_console_connector.py

from __future__ import annotations

import pytest

from todolist.cli import commands
from todolist.connectors.console_connector import run_console_loop
from todolist.core.events import TASKS_UPDATED
from todolist.core.state import AppState


def _scripted(*lines: str):
    it = iter(lines)

    def read_line(_prompt: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read_line


def test_console_adds_plain_text_and_renders(
    state: AppState, capsys: pytest.CaptureFixture[str]
) -> None:
    run_console_loop(state, read_line=_scripted("Buy milk", "/add urgent Fix bug", "", "/exit"))

    out = capsys.readouterr().out
    assert [t.text for t in state.task_store.get_tasks()] == ["Buy milk", "Fix bug"]
    assert "Added" in out
    assert "Tasks [filter: all] (2):" in out
    # View subscription is released when the loop ends.
    assert state.bus.subscriber_count(TASKS_UPDATED) == 0


def test_console_reports_errors_without_crashing(
    state: AppState, capsys: pytest.CaptureFixture[str]
) -> None:
    def broken(state, args):
        raise RuntimeError("boom")

    from todolist.cli.commands import registry

    registry.register("broken", broken, "test only")
    try:
        run_console_loop(state, read_line=_scripted("/broken", "   ", "/done nope"))
    finally:
        registry._handlers.pop("broken", None)
        registry._help.pop("broken", None)

    out = capsys.readouterr().out
    assert "Internal error" in out
    assert "No task matches" in out


def test_console_warns_about_storage_error(
    state: AppState, capsys: pytest.CaptureFixture[str]
) -> None:
    state.storage_error = "disk full"
    run_console_loop(state, read_line=_scripted())
    assert "not being saved (disk full)" in capsys.readouterr().out


def test_plain_text_reply_matches_add_command(
    state: AppState, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(commands, "ID_WIDTH", 4)
    run_console_loop(state, read_line=_scripted("Buy milk", "/add Fix bug"))

    out = capsys.readouterr().out
    milk, bug = state.task_store.get_tasks()
    assert f"Added {milk.id[:4]} (medium): Buy milk\n" in out
    assert f"Added {bug.id[:4]} (medium): Fix bug\n" in out

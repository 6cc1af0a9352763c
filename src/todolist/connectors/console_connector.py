# src/todolist/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import NOT_SAVED, add_and_describe, render_view
from ..cli.commands import registry as command_registry
from ..core.events import TASKS_UPDATED
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _handle_plain_text(state: AppState, text: str) -> str:
    """Plain input (no slash) adds a task with the default priority."""
    return add_and_describe(state, text)


def run_console_loop(state: AppState, read_line: Callable[[str], str] = input) -> None:
    logger.info("Console connector started (tasks=%d).", state.task_store.count_tasks())
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "todolist"))
    _print_ts(f"[{app_name}] Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    if state.storage_error:
        _print_ts(NOT_SAVED.format(err=state.storage_error))

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    def render(_payload: object = None) -> None:
        print(render_view(state), flush=True)

    # The view re-renders on every store change; released when the loop ends.
    with state.bus.subscribe(TASKS_UPDATED, render):
        render()

        while True:
            try:
                user_input = read_line(">>> ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            try:
                response = command_registry.handle(state, user_input, emit=emit)
                if response is None:
                    response = _handle_plain_text(state, user_input)
            except Exception:
                logger.exception("Command handler crashed.")
                response = "Internal error while handling a command."

            _print_ts(response)

    logger.info("Console connector finished.")

# tests/test_logging_setup.py

from __future__ import annotations

import logging

import pytest

from todolist.logging_setup import _ConsoleNoiseFilter


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    ("name", "level", "shown"),
    [
        ("todolist", logging.DEBUG, True),
        ("todolist.tasks.task_store", logging.INFO, True),
        ("todolistish", logging.INFO, False),
        ("urllib3", logging.WARNING, False),
        ("urllib3", logging.ERROR, True),
        ("py.warnings", logging.WARNING, False),
        ("py.warnings", logging.ERROR, True),
    ],
)
def test_console_noise_filter(name: str, level: int, shown: bool) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, level)) is shown

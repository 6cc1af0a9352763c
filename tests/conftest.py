# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todolist.core.events import NotificationBus
from todolist.core.state import AppState
from todolist.tasks.task_filters import FilterSelector
from todolist.tasks.task_store import TaskStore

from .fakes import FakeBlobStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todolist-test",
        log_level="DEBUG",
        console_enabled=True,
        data_dir=tmp_path / "data",
        storage_key="tasks",
        default_priority="medium",
        default_filter="all",
        strict_filters=False,
    )


@pytest.fixture()
def blob() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture()
def store(blob: FakeBlobStore) -> TaskStore:
    return TaskStore(blob)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """AppState wired with an in-memory blob store and fresh bus/filters."""
    return AppState(
        settings=settings,
        task_store=store,
        bus=NotificationBus(),
        filters=FilterSelector(),
    )

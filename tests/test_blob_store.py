# tests/test_blob_store.py

from __future__ import annotations

from pathlib import Path

import pytest

from todolist.core.errors import PersistenceError
from todolist.tasks.blob_store import FileBlobStore
from todolist.tasks.task_factory import create_task
from todolist.tasks.task_models import Priority
from todolist.tasks.task_store import TaskStore


def test_get_missing_returns_none(tmp_path: Path) -> None:
    assert FileBlobStore(tmp_path / "data").get("tasks") is None


def test_set_then_get(tmp_path: Path) -> None:
    blobs = FileBlobStore(tmp_path)
    blobs.set("tasks", "[]")

    assert blobs.get("tasks") == "[]"
    assert (tmp_path / "tasks.json").read_text("utf-8") == "[]"
    assert not (tmp_path / "tasks.tmp").exists()


@pytest.mark.parametrize("key", ["", "../escape", "a/b", ".hidden", "my tasks"])
def test_rejects_unsafe_keys(tmp_path: Path, key: str) -> None:
    with pytest.raises(PersistenceError):
        FileBlobStore(tmp_path).path_for(key)


def test_unreadable_blob_raises(tmp_path: Path) -> None:
    blobs = FileBlobStore(tmp_path)
    (tmp_path / "tasks.json").mkdir()
    with pytest.raises(PersistenceError):
        blobs.get("tasks")


def test_task_store_on_disk_round_trip(tmp_path: Path) -> None:
    store = TaskStore(FileBlobStore(tmp_path))
    store.add_task(create_task("Café con leche", Priority.MEDIUM))

    fresh = TaskStore(FileBlobStore(tmp_path))
    assert fresh.load() is True
    assert fresh.get_tasks() == store.get_tasks()

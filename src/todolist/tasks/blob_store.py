# src/todolist/tasks/blob_store.py

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from ..core.errors import PersistenceError

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def is_valid_key(key: str) -> bool:
    """Keys become file names: letters, digits, "_", "-", "." and no leading dot."""
    return bool(key) and _KEY_RE.match(key) is not None and not key.startswith(".")


class FileBlobStore:
    """
    File-backed key-value blob store.

    Each key is stored as <root>/<key>.json. Writes go to a temp file first and
    are moved into place with os.replace, so a crash never leaves half a blob.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(f"Cannot create data dir {self._root}: {e}") from e
        logger.info("FileBlobStore ready root=%s", self._root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: str) -> Path:
        if not is_valid_key(key):
            raise PersistenceError(f"Invalid storage key: {key!r}")
        return self._root / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Cannot read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp = path.with_suffix(".tmp")
        try:
            tmp.write_text(value, "utf-8")
            os.replace(tmp, path)
        except OSError as e:
            raise PersistenceError(f"Cannot write {path}: {e}") from e
        logger.debug("Blob written key=%s bytes=%d", key, len(value))

from __future__ import annotations

import logging
from pathlib import Path

from .documents import Document, parse_document
from .interfaces import DocumentStore
from .json_store import atomic_write_json, read_text, remove_file
from .locks import GLOBAL_PATH_LOCKS
from .paths import data_dir, key_filename, key_from_filename, store_dir
from .result import Result
from .settings import Settings

logger = logging.getLogger(__name__)


class DiskDocumentStore(DocumentStore):
    """
    Stores each key as its own JSON file under a root directory:

    - data/documents/<percent-encoded key>.json

    Writes are atomic (temp file + replace) and serialized per path.
    """

    def __init__(self, root: Path | None = None):
        self._root = root if root is not None else store_dir(data_dir())

    @classmethod
    def from_settings(cls, settings: Settings) -> "DiskDocumentStore":
        if settings.data_dir:
            return cls(store_dir(Path(settings.data_dir)))
        return cls()

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: str) -> Path:
        return self._root / key_filename(key)

    def keys(self) -> list[str]:
        if not self._root.exists():
            return []
        return sorted(key_from_filename(p.name) for p in self._root.glob("*.json"))

    def get(self, key: str) -> Result[Document]:
        path = self.path_for(key)
        try:
            with GLOBAL_PATH_LOCKS.lock_for_path(path):
                raw = read_text(path)
        except OSError as e:
            logger.warning("DISK STORE GET: failed to read %s: %r", path, e)
            return Result.fail("store", f"Failed to read {key}: {e}")
        return parse_document(key, raw)

    def set(self, key: str, doc: Document) -> Result[Document]:
        path = self.path_for(key)
        try:
            with GLOBAL_PATH_LOCKS.lock_for_path(path):
                atomic_write_json(path, doc)
        except OSError as e:
            logger.warning("DISK STORE SET: failed to write %s: %r", path, e)
            return Result.fail("store", f"Failed to write {key}: {e}")
        return Result.ok(doc)

    def delete(self, key: str) -> Result[int]:
        path = self.path_for(key)
        try:
            with GLOBAL_PATH_LOCKS.lock_for_path(path):
                removed = remove_file(path)
        except OSError as e:
            logger.warning("DISK STORE DELETE: failed to remove %s: %r", path, e)
            return Result.fail("store", f"Failed to delete {key}: {e}")
        return Result.ok(removed)

from __future__ import annotations

import threading
from pathlib import Path


class KeyLockRegistry:
    """
    One stable lock per storage key, so writers to different keys never contend.

    Locks only serialize single get/set/delete calls in this process; they do not
    make a registry read-modify-write atomic.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def lock_for_path(self, path: Path) -> threading.Lock:
        return self.lock_for(str(path.resolve()))


GLOBAL_PATH_LOCKS = KeyLockRegistry()

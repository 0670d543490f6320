from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def read_text(path: Path) -> str | None:
    """
    Read a stored document's text from disk.

    Returns None for missing files. Other OS errors propagate to the caller.
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None


def atomic_write_json(path: Path, payload: Any, *, indent: int = 2, sort_keys: bool = True) -> None:
    """
    Atomically write JSON to disk by writing to a temp file then replacing.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=indent, sort_keys=sort_keys)
        f.write("\n")
    tmp_path.replace(path)


def remove_file(path: Path) -> int:
    """Delete ``path``; returns 1 if a file was removed, 0 if it did not exist."""
    try:
        path.unlink()
    except FileNotFoundError:
        return 0
    return 1

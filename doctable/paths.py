from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import quote, unquote

DATA_DIR_ENV = "DOCTABLE_DATA_DIR"


def project_root() -> Path:
    # doctable/paths.py -> doctable -> project root
    return Path(__file__).resolve().parents[1]


def data_dir() -> Path:
    override = os.getenv(DATA_DIR_ENV, "").strip()
    if override:
        return ensure_dir(Path(override))
    return ensure_dir(project_root() / "data")


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def store_dir(data_dir: Path, namespace: str = "documents") -> Path:
    return ensure_dir(data_dir / namespace)


def key_filename(key: str) -> str:
    # Keys are arbitrary strings; percent-encode so "/" and friends stay inside one directory.
    return f"{quote(key, safe='')}.json"


def key_from_filename(name: str) -> str:
    return unquote(name.removesuffix(".json"))

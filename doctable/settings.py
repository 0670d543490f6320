from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    # Redis endpoint
    redis_address: str
    redis_port: int
    redis_database: int | None

    # Auth (only applied when non-empty)
    redis_username: str
    redis_password: str

    # Socket connect/read timeout, milliseconds
    redis_timeout_ms: int

    # Disk store location override ("" -> project data/ directory)
    data_dir: str


def get_settings(env_file: str | None = "local.env") -> Settings:
    if env_file:
        load_dotenv(env_file)

    redis_address = os.getenv("REDIS_ADDRESS", "").strip() or "localhost"
    redis_port = _env_int("REDIS_PORT", 6379) or 6379
    redis_database = _env_int("REDIS_DATABASE", None)

    redis_username = os.getenv("REDIS_USERNAME", "")
    redis_password = os.getenv("REDIS_PASSWORD", "")

    redis_timeout_ms = _env_int("REDIS_TIMEOUT_MS", 5000) or 5000

    data_dir = os.getenv("DOCTABLE_DATA_DIR", "").strip()

    return Settings(
        redis_address=redis_address,
        redis_port=redis_port,
        redis_database=redis_database,
        redis_username=redis_username,
        redis_password=redis_password,
        redis_timeout_ms=redis_timeout_ms,
        data_dir=data_dir,
    )

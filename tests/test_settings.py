from __future__ import annotations

import pytest

from doctable.settings import get_settings

_VARS = (
    "REDIS_ADDRESS",
    "REDIS_PORT",
    "REDIS_DATABASE",
    "REDIS_USERNAME",
    "REDIS_PASSWORD",
    "REDIS_TIMEOUT_MS",
    "DOCTABLE_DATA_DIR",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    # setenv first so teardown also removes anything load_dotenv() adds
    for name in _VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


def test_defaults(clean_env):
    s = get_settings(env_file=None)
    assert s.redis_address == "localhost"
    assert s.redis_port == 6379
    assert s.redis_database is None
    assert s.redis_username == ""
    assert s.redis_password == ""
    assert s.redis_timeout_ms == 5000
    assert s.data_dir == ""


def test_environment_overrides(clean_env):
    clean_env.setenv("REDIS_ADDRESS", "cache.internal")
    clean_env.setenv("REDIS_PORT", "6380")
    clean_env.setenv("REDIS_DATABASE", "2")
    clean_env.setenv("REDIS_PASSWORD", "pw")
    clean_env.setenv("REDIS_TIMEOUT_MS", "abc")

    s = get_settings(env_file=None)
    assert s.redis_address == "cache.internal"
    assert s.redis_port == 6380
    assert s.redis_database == 2
    assert s.redis_password == "pw"
    assert s.redis_timeout_ms == 5000


def test_env_file_is_loaded(clean_env, tmp_path):
    env_file = tmp_path / "local.env"
    env_file.write_text("REDIS_ADDRESS=from-file\nREDIS_PORT=7000\n", encoding="utf-8")

    s = get_settings(env_file=str(env_file))
    assert s.redis_address == "from-file"
    assert s.redis_port == 7000

# tests/unit/test_paths.py
import sys

import pytest

import config.paths as paths_mod
import sdk.config
from sdk.config import AppConfig


@pytest.fixture(autouse=True)
def _reset_singleton(monkeypatch):
    monkeypatch.setattr(paths_mod, "_paths_singleton", None)
    yield


def test_sdk_config_data_root_is_preferred(monkeypatch, tmp_path):
    data = tmp_path / "sdk_data"
    monkeypatch.setattr(sdk.config, "SDK_CONFIG", AppConfig(data_root=data))

    p = paths_mod.get_paths(force_refresh=True)

    assert p.data_root == data
    # ensure_all() is called inside get_paths()
    assert p.sessions_root.is_dir()
    assert p.session_dir("sprint") == data / "sessions" / "sprint"
    assert p.session_events_path("sprint") == data / "sessions" / "sprint" / "events.jsonl"
    assert p.session_meta_path("sprint") == data / "sessions" / "sprint" / "session_meta.json"


def test_env_fallback_without_sdk(monkeypatch, tmp_path):
    """
    Simulate the SDK being unavailable: importing sdk.config fails and the
    STOPWATCH_DATA_ROOT env var decides.
    """
    data = tmp_path / "env_data"
    monkeypatch.setenv("STOPWATCH_DATA_ROOT", str(data))
    monkeypatch.setitem(sys.modules, "sdk.config", None)

    p = paths_mod.get_paths(force_refresh=True)

    assert p.data_root == data
    assert p.sessions_root.is_dir()


def test_singleton_is_cached(monkeypatch, tmp_path):
    monkeypatch.setattr(sdk.config, "SDK_CONFIG", AppConfig(data_root=tmp_path))
    first = paths_mod.get_paths()
    assert paths_mod.get_paths() is first
    assert paths_mod.get_paths(force_refresh=True) is not first


def test_invalid_data_root_raises_on_ensure(monkeypatch, tmp_path):
    """
    A data root pointing at a *file* must fail during get_paths(force_refresh=True).
    """
    bad = tmp_path / "not_a_dir.txt"
    bad.write_text("hi", encoding="utf-8")
    monkeypatch.setattr(sdk.config, "SDK_CONFIG", AppConfig(data_root=bad))

    with pytest.raises(OSError):
        paths_mod.get_paths(force_refresh=True)


def test_verify_writeable_positive(tmp_path):
    p = paths_mod.Paths(tmp_path / "data")
    p.verify_writeable()
    assert not (p.data_root / ".write_test").exists()

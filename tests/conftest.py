from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the saas package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from saas.core import config as core_config  # noqa: E402
from saas.core.config import Settings  # noqa: E402
from saas.repositories.json_storage import MemoryStore  # noqa: E402
from saas.services.app_state import AppState  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point every env-driven setting at a temporary location and reset cached settings."""
    monkeypatch.setenv("DATA_FILE", str(tmp_path / "storage.json"))
    monkeypatch.delenv("APP_VARIANT", raising=False)
    monkeypatch.delenv("STORAGE_BACKEND", raising=False)
    monkeypatch.delenv("SIMULATED_LATENCY_MS", raising=False)
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


@pytest.fixture()
def make_settings(tmp_path):
    def _make(variant: str = "minimal", **overrides) -> Settings:
        values = {
            "app_env": "dev",
            "app_variant": variant,
            "storage_backend": "memory",
            "data_file": tmp_path / "storage.json",
            "database_url": "",
            "simulated_latency_ms": 0,
            "log_level": "INFO",
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def make_state(make_settings, store):
    def _make(variant: str = "minimal", **overrides) -> AppState:
        return AppState(settings=make_settings(variant, **overrides), store=store)

    return _make

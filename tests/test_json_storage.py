"""
Store adapter contract: values round-trip as JSON text and failures never leave the adapter.
"""
from __future__ import annotations

import logging

from saas.repositories import get_store
from saas.repositories.json_storage import JsonFileStore, MemoryStore


def test_missing_key_returns_default(tmp_path):
    store = JsonFileStore(tmp_path / "storage.json")
    assert store.load("saas_users", {}) == {}
    assert store.load("saas_currentUser") is None


def test_saved_value_is_kept_as_json_text(tmp_path):
    path = tmp_path / "storage.json"
    store = JsonFileStore(path)
    store.save("saas_users", {"alice": {"password": "x", "items": [{"id": 1, "text": "café"}]}})
    store.save("saas_currentUser", "alice")

    reopened = JsonFileStore(path)
    assert reopened.load("saas_users", {})["alice"]["items"][0]["text"] == "café"
    assert reopened.load("saas_currentUser") == "alice"
    assert reopened.keys() == ["saas_currentUser", "saas_users"]


def test_corrupt_value_falls_back_to_default_and_logs(caplog):
    store = MemoryStore({"saas_users": "{not json"})
    with caplog.at_level(logging.ERROR):
        assert store.load("saas_users", {"fallback": True}) == {"fallback": True}
    assert "saas_users" in caplog.text


def test_corrupt_file_falls_back_and_next_save_recovers(tmp_path, caplog):
    path = tmp_path / "storage.json"
    path.write_text("garbage", encoding="utf-8")
    store = JsonFileStore(path)
    with caplog.at_level(logging.ERROR):
        assert store.load("saas_users", {}) == {}
    store.save("saas_currentUser", "bob")
    assert store.load("saas_currentUser") == "bob"


def test_unserializable_value_is_logged_not_raised(caplog):
    store = MemoryStore()
    with caplog.at_level(logging.ERROR):
        store.save("saas_users", {"alice": object()})
    assert store.load("saas_users") is None
    assert "Error saving item" in caplog.text


def test_write_failure_is_logged_not_raised(tmp_path, caplog):
    blocked = tmp_path / "as_dir"
    blocked.mkdir()
    store = JsonFileStore(blocked)
    with caplog.at_level(logging.ERROR):
        store.save("saas_currentUser", "alice")
        assert store.load("saas_currentUser", "default") == "default"
    assert "saas_currentUser" in caplog.text


def test_remove_drops_key(tmp_path):
    store = JsonFileStore(tmp_path / "storage.json")
    store.save("a", 1)
    store.save("b", 2)
    store.remove("a")
    store.remove("missing")
    assert store.keys() == ["b"]


def test_get_store_follows_backend_setting(make_settings, tmp_path):
    assert isinstance(get_store(make_settings(storage_backend="memory")), MemoryStore)
    json_store = get_store(make_settings(storage_backend="json"))
    assert isinstance(json_store, JsonFileStore)
    assert json_store.path == tmp_path / "storage.json"

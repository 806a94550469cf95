"""
Persistence adapters.

These modules encapsulate how named values are stored and retrieved (a JSON file
today, a SQL table when configured). Services depend on the KeyValueStore
contract rather than touching files or sessions directly.
"""

from __future__ import annotations

from saas.core.config import Settings, get_settings
from saas.repositories.json_storage import JsonFileStore, KeyValueStore, MemoryStore


def get_store(settings: Settings | None = None) -> KeyValueStore:
    """Build the store selected by STORAGE_BACKEND."""
    settings = settings or get_settings()
    backend = settings.storage_backend
    if backend == "sql":
        from saas.repositories.sql_repository import SQLKeyValueStore

        return SQLKeyValueStore()
    if backend == "memory":
        return MemoryStore()
    return JsonFileStore(settings.data_file)


__all__ = ["KeyValueStore", "JsonFileStore", "MemoryStore", "get_store"]

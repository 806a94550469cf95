"""
Key-value persistence adapter.

Values are serialized to JSON text and kept under a string key, the same way a
browser storage area holds them. Reads and writes never raise: failures are
logged and the caller gets the default value (read) or nothing (write).
"""

from __future__ import annotations

from pathlib import Path
import json
import logging
from typing import Any, Optional

from saas.domain.errors import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Serialize/deserialize at the boundary; subclasses only move text around."""

    def _read_raw(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def _write_raw(self, key: str, text: str) -> None:
        raise NotImplementedError

    def _delete_raw(self, key: str) -> None:
        raise NotImplementedError

    def _list_keys(self) -> list[str]:
        raise NotImplementedError

    def load(self, key: str, default: Any = None) -> Any:
        try:
            text = self._read_raw(key)
            if text is None:
                return default
            return json.loads(text)
        except (StorageError, ValueError) as exc:
            logger.error("Error getting item from storage for key %r: %s", key, exc)
            return default

    def save(self, key: str, value: Any) -> None:
        try:
            text = json.dumps(value, ensure_ascii=False)
            self._write_raw(key, text)
        except (StorageError, TypeError, ValueError) as exc:
            logger.error("Error saving item to storage for key %r: %s", key, exc)

    def remove(self, key: str) -> None:
        try:
            self._delete_raw(key)
        except StorageError as exc:
            logger.error("Error removing item from storage for key %r: %s", key, exc)

    def keys(self) -> list[str]:
        try:
            return self._list_keys()
        except StorageError as exc:
            logger.error("Error listing storage keys: %s", exc)
            return []


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def _read_raw(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write_raw(self, key: str, text: str) -> None:
        self._data[key] = text

    def _delete_raw(self, key: str) -> None:
        self._data.pop(key, None)

    def _list_keys(self) -> list[str]:
        return sorted(self._data)


class JsonFileStore(KeyValueStore):
    """One JSON document on disk mapping key -> serialized value text."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read_document(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, ValueError) as exc:
            raise StorageError(f"cannot read {self.path}: {exc}") from exc
        if not isinstance(document, dict):
            raise StorageError(f"{self.path} does not hold a key-value document")
        return document

    def _write_document(self, document: dict[str, str]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as exc:
            raise StorageError(f"cannot write {self.path}: {exc}") from exc

    def _read_raw(self, key: str) -> Optional[str]:
        value = self._read_document().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise StorageError(f"value for {key!r} is not text")
        return value

    def _write_raw(self, key: str, text: str) -> None:
        try:
            document = self._read_document()
        except StorageError as exc:
            # Unreadable document: start over.
            logger.warning("Replacing unreadable storage file %s: %s", self.path, exc)
            document = {}
        document[key] = text
        self._write_document(document)

    def _delete_raw(self, key: str) -> None:
        document = self._read_document()
        if key in document:
            del document[key]
            self._write_document(document)

    def _list_keys(self) -> list[str]:
        return sorted(self._read_document())

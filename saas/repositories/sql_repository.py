"""Key-value store backed by a SQLAlchemy table."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from saas.db.models import StoredValue
from saas.db.session import get_session
from saas.domain.errors import StorageError
from saas.repositories.json_storage import KeyValueStore


class SQLKeyValueStore(KeyValueStore):
    """Same contract as the JSON file store; rows are upserted per key."""

    def _read_raw(self, key: str) -> Optional[str]:
        try:
            with get_session() as session:
                row = session.get(StoredValue, key)
                return row.value if row else None
        except (SQLAlchemyError, RuntimeError) as exc:
            raise StorageError(str(exc)) from exc

    def _write_raw(self, key: str, text: str) -> None:
        now = datetime.now(timezone.utc)
        try:
            with get_session() as session:
                row = session.get(StoredValue, key)
                if not row:
                    session.add(StoredValue(key=key, value=text, updated_at=now))
                else:
                    row.value = text
                    row.updated_at = now
                session.commit()
        except (SQLAlchemyError, RuntimeError) as exc:
            raise StorageError(str(exc)) from exc

    def _delete_raw(self, key: str) -> None:
        try:
            with get_session() as session:
                session.execute(delete(StoredValue).where(StoredValue.key == key))
                session.commit()
        except (SQLAlchemyError, RuntimeError) as exc:
            raise StorageError(str(exc)) from exc

    def _list_keys(self) -> list[str]:
        try:
            with get_session() as session:
                return list(session.execute(select(StoredValue.key).order_by(StoredValue.key)).scalars())
        except (SQLAlchemyError, RuntimeError) as exc:
            raise StorageError(str(exc)) from exc

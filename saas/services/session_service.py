"""Session helpers: which username is active, persisted under its own key."""
from __future__ import annotations

import logging
from typing import Optional

from saas.domain.accounts import Directory
from saas.repositories.json_storage import KeyValueStore

logger = logging.getLogger(__name__)


class SessionManager:
    def __init__(self, store: KeyValueStore, key: str) -> None:
        self.store = store
        self.key = key
        self.username: Optional[str] = None

    def start_session(self, username: str) -> None:
        self.username = username
        self.store.save(self.key, username)

    def end_session(self) -> None:
        self.username = None
        self.store.save(self.key, None)

    def restore_session(self, directory: Directory) -> Optional[str]:
        """
        Load the persisted username. A value naming no account is treated as
        absent and left in storage untouched.
        """
        stored = self.store.load(self.key, None)
        if isinstance(stored, str) and stored in directory:
            self.username = stored
            return stored
        if stored is not None:
            logger.warning("Discarding persisted session for unknown account %r", stored)
        self.username = None
        return None

    def current_user(self, directory: Directory) -> Optional[str]:
        """Active username, re-checked against the directory on every read."""
        if self.username and self.username in directory:
            return self.username
        return None

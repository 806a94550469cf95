"""Account directory: the in-memory mapping plus its persistence hook."""
from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

from saas.domain import accounts
from saas.domain.accounts import Account, Directory
from saas.repositories.json_storage import KeyValueStore

logger = logging.getLogger(__name__)

ChangeListener = Callable[[Directory], None]


class AccountDirectory:
    """Owns every Account; any replacement is written back to the store in full."""

    def __init__(self, store: KeyValueStore, key: str) -> None:
        self.store = store
        self.key = key
        self._directory: Directory = accounts.EMPTY_DIRECTORY
        self._listeners: list[ChangeListener] = [self._persist]

    # -------------------------------------- state --------------------------------------
    @property
    def snapshot(self) -> Directory:
        return self._directory

    def __contains__(self, username: object) -> bool:
        return username in self._directory

    def __iter__(self) -> Iterator[str]:
        return iter(self._directory)

    def __len__(self) -> int:
        return len(self._directory)

    def get(self, username: Optional[str]) -> Optional[Account]:
        if not username:
            return None
        return self._directory.get(username)

    def load(self) -> Directory:
        """Read the persisted directory without writing it back."""
        self._directory = accounts.directory_from_dict(self.store.load(self.key, {}))
        return self._directory

    def on_change(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def replace(self, directory: Directory) -> None:
        self._directory = directory
        for listener in self._listeners:
            listener(directory)

    def put(self, account: Account) -> None:
        self.replace(accounts.with_account(self._directory, account))

    def _persist(self, directory: Directory) -> None:
        self.store.save(self.key, accounts.directory_to_dict(directory))

    # -------------------------------------- use cases --------------------------------------
    def register(self, username: str, password: str, confirm_password: str) -> Account:
        directory, account = accounts.register(self._directory, username, password, confirm_password)
        self.replace(directory)
        logger.info("Registered account %s", account.username)
        return account

    def authenticate(self, username: str, password: str) -> Account:
        return accounts.authenticate(self._directory, username, password)

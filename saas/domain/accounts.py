"""
Account records and the pure functions that update a directory of them.

A directory is an immutable mapping username -> Account. Every update returns a
new mapping; callers decide when to persist it.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType
import logging
from typing import Any, Callable, Mapping, Optional

from saas.core.security import hash_password, verify_password
from saas.domain.errors import DuplicateUsernameError, InvalidCredentialsError, ValidationError
from saas.domain.items import Item

logger = logging.getLogger(__name__)

Directory = Mapping[str, "Account"]

EMPTY_DIRECTORY: Directory = MappingProxyType({})


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Account:
    username: str
    password: str
    items: tuple[Item, ...] = field(default_factory=tuple)
    last_updated: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "password": self.password,
            "items": [item.to_dict() for item in self.items],
        }
        if self.last_updated:
            data["lastUpdated"] = self.last_updated
        return data

    @classmethod
    def from_dict(cls, username: str, data: Mapping[str, Any]) -> "Account":
        last_updated = data.get("lastUpdated")
        return cls(
            username=username,
            password=str(data.get("password") or ""),
            items=_items_from_list(username, data.get("items")),
            last_updated=last_updated if isinstance(last_updated, str) else None,
        )

    def with_items(self, items: tuple[Item, ...], *, stamp: bool = False) -> "Account":
        return replace(self, items=items, last_updated=utc_timestamp() if stamp else self.last_updated)


def _items_from_list(username: str, raw: Any) -> tuple[Item, ...]:
    """Convert persisted items, skipping entries that are not {id, text} records or repeat an id."""
    if raw is None:
        return ()
    if not isinstance(raw, list):
        logger.warning("Ignoring items of type %s for account %r", type(raw).__name__, username)
        return ()
    items: list[Item] = []
    seen: set[int] = set()
    for entry in raw:
        if not isinstance(entry, Mapping):
            logger.warning("Skipping malformed item %r for account %r", entry, username)
            continue
        try:
            item = Item.from_dict(entry)
        except (KeyError, TypeError, ValueError, OverflowError):
            logger.warning("Skipping malformed item %r for account %r", entry, username)
            continue
        if item.id in seen:
            logger.warning("Skipping duplicate item id %s for account %r", item.id, username)
            continue
        seen.add(item.id)
        items.append(item)
    return tuple(items)


def normalize_username(value: str | None) -> str:
    return (value or "").strip()


def directory_from_dict(raw: Any) -> Directory:
    """Build a directory from its persisted shape, dropping entries that are not records."""
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.warning("Ignoring persisted directory of type %s", type(raw).__name__)
        return EMPTY_DIRECTORY
    accounts: dict[str, Account] = {}
    for username, data in raw.items():
        if not isinstance(username, str) or not isinstance(data, Mapping):
            logger.warning("Skipping malformed account record %r", username)
            continue
        accounts[username] = Account.from_dict(username, data)
    return MappingProxyType(accounts)


def directory_to_dict(directory: Directory) -> dict[str, Any]:
    return {username: account.to_dict() for username, account in directory.items()}


def with_account(directory: Directory, account: Account) -> Directory:
    updated = dict(directory)
    updated[account.username] = account
    return MappingProxyType(updated)


def register(
    directory: Directory,
    username: str,
    password: str,
    confirm_password: str,
    *,
    hasher: Callable[[str], str] = hash_password,
) -> tuple[Directory, Account]:
    """Return the directory with a new empty account added."""
    username = normalize_username(username)
    if not username or not password or not confirm_password:
        raise ValidationError("Please fill in all fields.")
    if password != confirm_password:
        raise ValidationError("Passwords do not match.")
    if username in directory:
        raise DuplicateUsernameError("Username already exists. Please choose a different one.")
    account = Account(username=username, password=hasher(password))
    return with_account(directory, account), account


def authenticate(directory: Directory, username: str, password: str) -> Account:
    username = normalize_username(username)
    if not username or not password:
        raise ValidationError("Please enter username and password.")
    account = directory.get(username)
    if account is None or not verify_password(password, account.password):
        raise InvalidCredentialsError("Invalid username or password.")
    return account

"""Item list use cases for one account; each mutation replaces the account in the directory."""
from __future__ import annotations

from typing import Callable, Optional

from saas.domain import items as item_ops
from saas.domain.items import Item
from saas.services.directory_service import AccountDirectory


class ItemListManager:
    def __init__(
        self,
        directory: AccountDirectory,
        *,
        stamp_last_updated: bool = False,
        clock: Callable[[], int] = item_ops.now_ms,
    ) -> None:
        self.directory = directory
        self.stamp_last_updated = stamp_last_updated
        self.clock = clock

    def items(self, username: Optional[str]) -> tuple[Item, ...]:
        account = self.directory.get(username)
        return account.items if account else ()

    def find(self, username: Optional[str], item_id: int) -> Optional[Item]:
        return item_ops.find_item(self.items(username), item_id)

    def add_item(self, username: Optional[str], text: str) -> Optional[Item]:
        account = self.directory.get(username)
        if account is None:
            return None
        new_items, item = item_ops.append_item(account.items, text, self.clock)
        if item is None:
            return None
        self.directory.put(account.with_items(new_items, stamp=self.stamp_last_updated))
        return item

    def edit_item(self, username: Optional[str], item_id: int, new_text: str) -> Optional[Item]:
        account = self.directory.get(username)
        if account is None:
            return None
        new_items, item = item_ops.replace_item_text(account.items, item_id, new_text)
        if item is None:
            return None
        self.directory.put(account.with_items(new_items, stamp=self.stamp_last_updated))
        return item

    def delete_item(self, username: Optional[str], item_id: int) -> None:
        account = self.directory.get(username)
        if account is None:
            return
        new_items = item_ops.remove_item(account.items, item_id)
        if len(new_items) == len(account.items):
            return
        self.directory.put(account.with_items(new_items, stamp=self.stamp_last_updated))

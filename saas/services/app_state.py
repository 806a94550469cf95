"""
Application state owned by the view layer.

Bundles the directory, the session, the item list manager, the dashboard
editor and (themed variant) the dark-mode preference. One instance per process,
the same way one browser tab holds one copy of its storage.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Optional

from saas.core.busy import BusyGuard
from saas.core.config import Settings, get_settings
from saas.domain import editor
from saas.domain.accounts import Account, Directory
from saas.domain.editor import EditorState
from saas.domain.items import Item
from saas.repositories import get_store
from saas.repositories.json_storage import KeyValueStore
from saas.services.directory_service import AccountDirectory
from saas.services.item_service import ItemListManager
from saas.services.session_service import SessionManager

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    settings: Settings = field(default_factory=get_settings)
    store: Optional[KeyValueStore] = None

    def __post_init__(self):
        if self.store is None:
            self.store = get_store(self.settings)
        self.directory = AccountDirectory(self.store, self.settings.users_key)
        self.session = SessionManager(self.store, self.settings.session_key)
        self.item_list = ItemListManager(self.directory, stamp_last_updated=self.settings.themed)
        self.editor: EditorState = editor.IDLE
        self.dark_mode = False
        self.guard = BusyGuard(self.settings.simulated_latency_ms if self.settings.themed else 0)
        self.directory.on_change(self._on_directory_change)
        self.reload()

    # -------------------------------------- lifecycle --------------------------------------
    def reload(self) -> Optional[str]:
        """Re-read everything from the store, as a page reload would."""
        directory = self.directory.load()
        self.editor = editor.IDLE
        if self.settings.themed:
            self.dark_mode = bool(self.store.load(self.settings.theme_key, False))
        return self.session.restore_session(directory)

    def _on_directory_change(self, directory: Directory) -> None:
        user = self.session.current_user(directory)
        if self.editor.editing is None:
            return
        if user is None or self.item_list.find(user, self.editor.editing.id) is None:
            self.editor = editor.IDLE

    @property
    def current_user(self) -> Optional[str]:
        return self.session.current_user(self.directory.snapshot)

    @property
    def current_account(self) -> Optional[Account]:
        return self.directory.get(self.current_user)

    @property
    def items(self) -> tuple[Item, ...]:
        return self.item_list.items(self.current_user)

    # -------------------------------------- auth --------------------------------------
    def register(self, username: str, password: str, confirm_password: str) -> Account:
        return self.directory.register(username, password, confirm_password)

    def login(self, username: str, password: str) -> Account:
        account = self.directory.authenticate(username, password)
        self.session.start_session(account.username)
        self.editor = editor.IDLE
        logger.info("Account %s logged in", account.username)
        return account

    def logout(self) -> None:
        user = self.current_user
        self.session.end_session()
        self.editor = editor.IDLE
        if user:
            logger.info("Account %s logged out", user)

    # -------------------------------------- items --------------------------------------
    def add_item(self, text: str) -> Optional[Item]:
        return self.item_list.add_item(self.current_user, text)

    def delete_item(self, item_id: int) -> None:
        self.item_list.delete_item(self.current_user, item_id)

    def start_edit(self, item_id: int) -> Optional[Item]:
        item = self.item_list.find(self.current_user, item_id)
        if item is not None:
            self.editor = editor.start_edit(self.editor, item)
        return item

    def save_edit(self, new_text: str) -> Optional[Item]:
        target = self.editor.editing
        if target is None:
            return None
        updated = self.item_list.edit_item(self.current_user, target.id, new_text)
        if updated is not None:
            self.editor = editor.finish_edit(self.editor)
        return updated

    def cancel_edit(self) -> None:
        self.editor = editor.finish_edit(self.editor)

    # -------------------------------------- theme --------------------------------------
    def toggle_theme(self) -> bool:
        self.dark_mode = not self.dark_mode
        self.store.save(self.settings.theme_key, self.dark_mode)
        return self.dark_mode

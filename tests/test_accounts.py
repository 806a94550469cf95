from __future__ import annotations

import logging

import pytest

from saas.domain import accounts
from saas.domain.accounts import Account
from saas.domain.errors import DuplicateUsernameError, InvalidCredentialsError, ValidationError
from saas.domain.items import Item
from saas.repositories.json_storage import MemoryStore
from saas.services.app_state import AppState


def test_register_adds_empty_account_with_hashed_password():
    directory, account = accounts.register(accounts.EMPTY_DIRECTORY, "alice", "p1", "p1")
    assert account.username == "alice"
    assert account.items == ()
    assert account.password != "p1"
    assert directory["alice"] == account
    assert "alice" not in accounts.EMPTY_DIRECTORY


@pytest.mark.parametrize(
    "username,password,confirm",
    [("", "p", "p"), ("   ", "p", "p"), ("bob", "", ""), ("bob", "p", "")],
)
def test_register_requires_every_field(username, password, confirm):
    with pytest.raises(ValidationError):
        accounts.register(accounts.EMPTY_DIRECTORY, username, password, confirm)


def test_register_rejects_mismatched_confirmation():
    with pytest.raises(ValidationError) as exc:
        accounts.register(accounts.EMPTY_DIRECTORY, "bob", "x", "y")
    assert exc.value.message == "Passwords do not match."


def test_register_duplicate_leaves_directory_unchanged():
    directory, _ = accounts.register(accounts.EMPTY_DIRECTORY, "alice", "p1", "p1")
    with pytest.raises(DuplicateUsernameError):
        accounts.register(directory, "alice", "other", "other")
    assert list(directory) == ["alice"]


def test_authenticate_with_registered_password():
    directory, _ = accounts.register(accounts.EMPTY_DIRECTORY, " alice ", "p1", "p1")
    assert accounts.authenticate(directory, "alice", "p1").username == "alice"


@pytest.mark.parametrize("username,password", [("alice", "wrong"), ("nobody", "p1"), ("alice", "p1 ")])
def test_authenticate_rejects_bad_credentials(username, password):
    directory, _ = accounts.register(accounts.EMPTY_DIRECTORY, "alice", "p1", "p1")
    with pytest.raises(InvalidCredentialsError):
        accounts.authenticate(directory, username, password)


def test_authenticate_requires_both_fields():
    with pytest.raises(ValidationError):
        accounts.authenticate(accounts.EMPTY_DIRECTORY, "alice", "")


def test_persisted_shape_round_trips_and_skips_malformed_records():
    account = Account("alice", "hash", (Item(1, "buy milk"),), last_updated="2024-01-01T00:00:00+00:00")
    raw = accounts.directory_to_dict({"alice": account})
    assert raw == {
        "alice": {
            "password": "hash",
            "items": [{"id": 1, "text": "buy milk"}],
            "lastUpdated": "2024-01-01T00:00:00+00:00",
        }
    }
    raw["broken"] = "not a record"
    restored = accounts.directory_from_dict(raw)
    assert list(restored) == ["alice"]
    assert restored["alice"] == account


def test_non_mapping_directory_loads_empty():
    assert accounts.directory_from_dict(["alice"]) == {}
    assert accounts.directory_from_dict(None) == {}


@pytest.mark.parametrize(
    "raw_items",
    [
        [{"id": "abc", "text": "x"}],
        [{"id": [1], "text": "x"}],
        [{"text": "no id"}],
        ["not a record"],
        5,
        "items",
    ],
)
def test_malformed_items_are_dropped_not_raised(raw_items, caplog):
    with caplog.at_level(logging.WARNING):
        restored = accounts.directory_from_dict({"alice": {"password": "h", "items": raw_items}})
    assert restored["alice"].items == ()
    assert "alice" in caplog.text


def test_good_items_survive_next_to_malformed_ones():
    raw = {
        "alice": {
            "password": "h",
            "items": [{"id": 1, "text": "keep"}, {"id": "abc"}, {"id": 1, "text": "dup"}, {"id": "2", "text": "two"}],
            "lastUpdated": 17,
        }
    }
    account = accounts.directory_from_dict(raw)["alice"]
    assert account.items == (Item(1, "keep"), Item(2, "two"))
    assert account.last_updated is None


def test_app_state_starts_with_malformed_persisted_items(make_settings):
    store = MemoryStore({"saas_users": '{"alice": {"password": "x", "items": [{"id": [1], "text": "t"}]}}'})
    state = AppState(settings=make_settings(), store=store)
    assert "alice" in state.directory
    assert state.directory.get("alice").items == ()

"""Item records and pure list updates; every function returns a new tuple."""
from __future__ import annotations

from dataclasses import dataclass, replace
import time
from typing import Any, Callable, Mapping, Optional


@dataclass(frozen=True)
class Item:
    id: int
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Item":
        return cls(id=int(data["id"]), text=str(data.get("text") or ""))


def now_ms() -> int:
    return int(time.time() * 1000)


def next_item_id(items: tuple[Item, ...], clock: Callable[[], int] = now_ms) -> int:
    """Creation timestamp in ms, bumped past the newest id so ids never collide."""
    candidate = clock()
    newest = max((item.id for item in items), default=0)
    return candidate if candidate > newest else newest + 1


def append_item(
    items: tuple[Item, ...], text: str, clock: Callable[[], int] = now_ms
) -> tuple[tuple[Item, ...], Optional[Item]]:
    cleaned = (text or "").strip()
    if not cleaned:
        return items, None
    item = Item(id=next_item_id(items, clock), text=cleaned)
    return items + (item,), item


def replace_item_text(
    items: tuple[Item, ...], item_id: int, new_text: str
) -> tuple[tuple[Item, ...], Optional[Item]]:
    cleaned = (new_text or "").strip()
    if not cleaned:
        return items, None
    updated: Optional[Item] = None
    result = []
    for item in items:
        if item.id == item_id and updated is None:
            updated = replace(item, text=cleaned)
            result.append(updated)
        else:
            result.append(item)
    if updated is None:
        return items, None
    return tuple(result), updated


def remove_item(items: tuple[Item, ...], item_id: int) -> tuple[Item, ...]:
    return tuple(item for item in items if item.id != item_id)


def find_item(items: tuple[Item, ...], item_id: int) -> Optional[Item]:
    for item in items:
        if item.id == item_id:
            return item
    return None

"""Dashboard item form state machine: Idle or Editing(item)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from saas.domain.items import Item


@dataclass(frozen=True)
class EditorState:
    editing: Optional[Item] = None

    @property
    def idle(self) -> bool:
        return self.editing is None


IDLE = EditorState()


def start_edit(state: EditorState, item: Item) -> EditorState:
    # Starting on another item replaces the target; one item at a time.
    if state.editing == item:
        return state
    return EditorState(editing=item)


def finish_edit(state: EditorState) -> EditorState:
    """Both save and cancel land back in Idle; the caller commits on save."""
    if state.idle:
        return state
    return IDLE

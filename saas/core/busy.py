"""Single-flight guard for mutations that run behind simulated latency."""
from __future__ import annotations

import asyncio
from typing import Callable, TypeVar

from fastapi import HTTPException

T = TypeVar("T")


class BusyError(Exception):
    """Raised when a mutation is submitted while another one is still pending."""


class BusyGuard:
    """
    Mutual-exclusion flag, not a queue: a second submission while one is
    pending is rejected instead of waiting its turn.
    """

    def __init__(self, latency_ms: int = 0) -> None:
        self.latency_ms = max(0, int(latency_ms))
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    async def run(self, action: Callable[[], T]) -> T:
        if self._busy:
            raise BusyError("Another operation is still in progress.")
        self._busy = True
        try:
            if self.latency_ms:
                await asyncio.sleep(self.latency_ms / 1000)
            return action()
        finally:
            self._busy = False


async def run_guarded(guard: BusyGuard, action: Callable[[], T]) -> T:
    """Web-facing wrapper: a held flag surfaces as HTTP 409."""
    try:
        return await guard.run(action)
    except BusyError as exc:
        raise HTTPException(409, str(exc)) from exc

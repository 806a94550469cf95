from __future__ import annotations

import asyncio

import pytest
from fastapi import HTTPException

from saas.core.busy import BusyError, BusyGuard, run_guarded


def test_runs_action_and_releases_flag():
    guard = BusyGuard(latency_ms=1)
    assert asyncio.run(guard.run(lambda: 41 + 1)) == 42
    assert guard.busy is False


def test_second_submission_rejected_while_pending():
    guard = BusyGuard(latency_ms=50)

    async def scenario():
        first = asyncio.create_task(guard.run(lambda: "first"))
        await asyncio.sleep(0)
        assert guard.busy is True
        with pytest.raises(BusyError):
            await guard.run(lambda: "second")
        return await first

    assert asyncio.run(scenario()) == "first"
    assert guard.busy is False


def test_flag_released_when_action_raises():
    guard = BusyGuard()

    def boom():
        raise ValueError("nope")

    with pytest.raises(ValueError):
        asyncio.run(guard.run(boom))
    assert guard.busy is False


def test_run_guarded_maps_busy_to_conflict():
    guard = BusyGuard(latency_ms=50)

    async def scenario():
        first = asyncio.create_task(guard.run(lambda: None))
        await asyncio.sleep(0)
        with pytest.raises(HTTPException) as exc:
            await run_guarded(guard, lambda: None)
        await first
        return exc.value.status_code

    assert asyncio.run(scenario()) == 409

from __future__ import annotations

import asyncio

import pytest

from support_chat.api.v1.routers.ws import _stop


@pytest.mark.asyncio
async def test_stop_cancels_and_collects_the_heartbeat():
    task = asyncio.create_task(asyncio.sleep(60))
    await asyncio.sleep(0)

    await _stop(task)

    assert task.done()
    assert task.cancelled()


@pytest.mark.asyncio
async def test_stop_tolerates_a_finished_task():
    task = asyncio.create_task(asyncio.sleep(0))
    await task

    await _stop(task)

    assert task.done()
    assert not task.cancelled()

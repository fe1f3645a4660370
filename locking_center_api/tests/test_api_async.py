import asyncio

import pytest

from locking_center_api.protocol import Action
from locking_center_api.tcp.aio import LockingCenter

from .common import FakeLockServer, lock_server  # noqa: F401

_retry_period = 0.1


@pytest.mark.asyncio
async def test_cancel_01():
    """
    Cancelling the task interrupts the request that is waiting for acknowledgment.
    """
    server = FakeLockServer(reply_delay=3)
    server.start()
    try:
        LC = LockingCenter(server.address, retry_period=_retry_period)
        task = asyncio.create_task(LC.lock("abc"))
        await asyncio.sleep(0.3)
        assert not task.done()

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
    finally:
        server.stop()

    assert server.actions == [Action.LOCK]


@pytest.mark.asyncio
async def test_cancel_02(lock_server):  # noqa: F811
    """
    Cancelling the task interrupts the pause between attempts.
    """
    lock_server.set_replies([], default_reply="-")
    LC = LockingCenter(lock_server.address, retry_period=10)

    task = asyncio.create_task(LC.unlock("abc"))
    await asyncio.sleep(0.3)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert lock_server.actions == [Action.UNLOCK]


@pytest.mark.asyncio
async def test_locked_01(lock_server):  # noqa: F811
    """
    ``locked``: nested locks in the same task are released in reverse order.
    """
    LC = LockingCenter(lock_server.address, retry_period=_retry_period)

    async with LC.locked("outer", "node-1"):
        async with LC.locked("inner", "node-1"):
            pass

    assert [(_.action, _.key) for _ in lock_server.requests] == [
        (Action.LOCK, "outer"),
        (Action.LOCK, "inner"),
        (Action.UNLOCK, "inner"),
        (Action.UNLOCK, "outer"),
    ]


@pytest.mark.asyncio
async def test_retry_period_01(lock_server):  # noqa: F811
    """
    ``retry_period`` may be changed independently for each instance.
    """
    LC1 = LockingCenter(lock_server.address, retry_period=_retry_period)
    LC2 = LockingCenter(lock_server.address, retry_period=_retry_period)
    LC2.retry_period = 0

    lock_server.set_replies(["-", "-", "+"])
    loop = asyncio.get_running_loop()
    t0 = loop.time()
    await LC2.reset_by_key("abc")
    assert loop.time() - t0 < _retry_period

    lock_server.set_replies(["-", "-", "+"])
    t0 = loop.time()
    await LC1.reset_by_key("abc")
    assert loop.time() - t0 >= _retry_period * 2

    assert lock_server.actions == [Action.RESET_BY_KEY] * 6

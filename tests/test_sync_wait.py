import threading

import pytest

from corolib.sync_wait import SyncWaitEvent, sync_wait
from corolib.task import Task


class _ForeignResumer:
    """Awaitable whose suspended coroutine is resumed from a background thread."""

    def __init__(self):
        self.thread = None

    def __await__(self):
        yield self._hand_off

    def _hand_off(self, handle):
        self.thread = threading.Thread(target=handle)
        self.thread.start()


def _blocked_waiter(event):
    waiter = threading.Thread(target=event.wait, daemon=True)
    waiter.start()
    return waiter


async def _value(value):
    return value


@pytest.mark.parametrize("value", ["answer", [1, 2], None])
def test_sync_wait_returns_coroutine_value(value):
    assert sync_wait(_value(value)) == value


def test_sync_wait_accepts_task():
    task = Task(_value([1, 2]))
    assert sync_wait(task) == [1, 2]
    assert task.is_ready() is True


def test_sync_wait_on_finished_task_returns_its_result():
    task = Task(_value("kept"))
    task.resume()
    assert sync_wait(task) == "kept"


@pytest.mark.parametrize("suspend_first", [False, True])
def test_sync_wait_propagates_exception(suspend_first):
    resumer = _ForeignResumer()

    async def failing():
        if suspend_first:
            await resumer
        raise RuntimeError("I always throw.")

    with pytest.raises(RuntimeError, match="I always throw."):
        sync_wait(failing())
    if suspend_first:
        resumer.thread.join()


def test_sync_wait_blocks_until_resumed_on_other_thread():
    resumer = _ForeignResumer()

    async def body():
        await resumer
        return threading.get_ident()

    ident = sync_wait(body())
    resumer.thread.join()
    assert ident == resumer.thread.ident
    assert ident != threading.get_ident()


def test_sync_wait_rejects_non_awaitable():
    with pytest.raises(TypeError):
        sync_wait(42)


def test_event_initially_set_does_not_block():
    waiter = _blocked_waiter(SyncWaitEvent(initially_set=True))
    waiter.join(timeout=2)
    assert waiter.is_alive() is False


@pytest.mark.parametrize("reset_first", [False, True])
def test_event_blocks_until_set(reset_first):
    event = SyncWaitEvent()
    if reset_first:
        event.set()
        event.reset()
    waiter = _blocked_waiter(event)
    waiter.join(timeout=0.05)
    assert waiter.is_alive() is True
    event.set()
    waiter.join(timeout=2)
    assert waiter.is_alive() is False
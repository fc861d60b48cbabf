import threading

import pytest

from corolib.latch import Latch
from corolib.sync_wait import sync_wait
from corolib.task import Task
from corolib.thread_pool import ThreadPool, ThreadPoolOptions


@pytest.mark.parametrize("count", [0, -3])
def test_non_positive_count_is_ready_immediately(count):
    latch = Latch(count)
    assert latch.is_ready()

    async def work():
        await latch
        return "done"

    assert sync_wait(work()) == "done"


@pytest.mark.parametrize(
    "steps, remaining, ready",
    [
        ([1], 2, False),
        ([1, 1], 1, False),
        ([1, 1, 1], 0, True),
        ([2], 1, False),
        ([2, 1], 0, True),
    ],
)
def test_count_down_reduces_remaining(steps, remaining, ready):
    latch = Latch(3)
    assert latch.remaining() == 3
    for n in steps:
        latch.count_down(n)
    assert latch.remaining() == remaining
    assert latch.is_ready() is ready


def test_waiter_resumes_only_at_zero():
    latch = Latch(2)
    resumed = []

    async def work():
        await latch
        resumed.append(True)

    waiter = Task(work())
    waiter.resume()
    latch.count_down()
    assert resumed == []
    latch.count_down()
    assert resumed == [True]
    assert waiter.is_ready()
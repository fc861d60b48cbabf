import threading

import pytest

from corolib.latch import Latch
from corolib.mutex import Mutex, ScopedLock
from corolib.sync_wait import sync_wait
from corolib.task import Task
from corolib.thread_pool import ThreadPool, ThreadPoolOptions


def test_try_lock_and_unlock():
    m = Mutex()
    assert m.try_lock() is True
    assert m.try_lock() is False
    m.unlock()
    assert m.try_lock() is True


def test_unlock_when_unlocked_raises():
    with pytest.raises(RuntimeError):
        Mutex().unlock()


@pytest.mark.parametrize("unlock_calls", [1, 2])
def test_scoped_lock_unlock_releases_once(unlock_calls):
    m = Mutex()
    scoped = sync_wait(m.lock())
    assert isinstance(scoped, ScopedLock)
    assert m.try_lock() is False
    for _ in range(unlock_calls):
        scoped.unlock()
    assert m.try_lock() is True
    assert m.try_lock() is False


def test_scoped_lock_context_manager_releases():
    m = Mutex()

    async def critical():
        with await m.lock():
            return m.try_lock()

    assert sync_wait(critical()) is False
    assert m.try_lock() is True


def test_waiters_acquire_in_arrival_order():
    m = Mutex()
    assert m.try_lock()
    order = []

    async def waiter(i):
        with await m.lock():
            order.append(i)

    waiters = [Task(waiter(i)) for i in range(3)]
    assert all(w.resume() for w in waiters)
    assert order == []
    m.unlock()
    assert order == [0, 1, 2]
    assert all(w.is_ready() for w in waiters)
    assert m.try_lock() is True


def test_many_tasks_on_thread_pool_exclusive():
    num_tasks = 100
    output = []
    inside = []
    violations = []
    guard = threading.Lock()
    finished = Latch(num_tasks)
    m = Mutex()

    with ThreadPool(ThreadPoolOptions(thread_count=4)) as tp:

        async def critical_section(i):
            try:
                await tp.schedule()
                with await m.lock():
                    with guard:
                        violations.extend([i] if inside else [])
                        inside.append(i)
                    output.append(i)
                    with guard:
                        inside.remove(i)
            finally:
                finished.count_down()

        sections = [Task(critical_section(i)) for i in range(1, num_tasks + 1)]
        for section in sections:
            section.resume()

        async def all_finished():
            await finished

        sync_wait(all_finished())

    assert violations == []
    assert sorted(output) == list(range(1, num_tasks + 1))
    assert m.try_lock() is True
"""An awaitable mutual-exclusion lock for tasks."""

from __future__ import annotations

import collections
import threading
from typing import Any, Callable, Deque, Optional

Handle = Callable[[], Any]


class ScopedLock:
    """Holds an acquired :class:`Mutex` and releases it once.

    Use it as a context manager, ``with await mutex.lock(): ...``, or call
    :meth:`unlock` directly. Further calls to :meth:`unlock` do nothing.
    """

    def __init__(self, mutex: "Mutex") -> None:
        self._mutex: Optional[Mutex] = mutex

    def unlock(self) -> None:
        """Release the held mutex; later calls have no effect."""
        mutex, self._mutex = self._mutex, None
        if mutex is not None:
            mutex.unlock()

    def __enter__(self) -> "ScopedLock":
        return self

    def __exit__(self, *args: Any) -> None:
        self.unlock()


class LockOperation:
    """Awaitable that acquires a :class:`Mutex` and produces a :class:`ScopedLock`."""

    def __init__(self, mutex: "Mutex") -> None:
        self._mutex = mutex

    def __await__(self):
        if not self._mutex.try_lock():
            yield self._suspend
        return ScopedLock(self._mutex)

    def _suspend(self, handle: Handle) -> bool:
        mutex = self._mutex
        with mutex._state_lock:
            if not mutex._locked:
                mutex._locked = True
                return False
            mutex._waiters.append(handle)
            return True


class Mutex:
    """A lock that suspends awaiting tasks instead of blocking their thread.

    When the lock is released with waiters present, ownership passes directly
    to the earliest waiter, which is resumed on the releasing thread.
    """

    def __init__(self) -> None:
        self._state_lock = threading.Lock()
        self._locked = False
        self._waiters: Deque[Handle] = collections.deque()

    def lock(self) -> LockOperation:
        """Return an awaitable that acquires the lock."""
        return LockOperation(self)

    def try_lock(self) -> bool:
        """Acquire the lock without waiting; return True on success."""
        with self._state_lock:
            if self._locked:
                return False
            self._locked = True
            return True

    def unlock(self) -> None:
        """Release the lock, handing it to the next waiter if there is one.

        Raises RuntimeError if the mutex is not locked.
        """
        with self._state_lock:
            if not self._locked:
                raise RuntimeError("unlock of an unlocked mutex")
            if not self._waiters:
                self._locked = False
                return
            handle = self._waiters.popleft()
        handle()
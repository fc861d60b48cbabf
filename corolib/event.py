"""An awaitable one-shot event that resumes every waiting task when set."""

from __future__ import annotations

import enum
import threading
from typing import Any, Callable, List, Optional

Handle = Callable[[], Any]


class ResumeOrderPolicy(enum.Enum):
    """Order in which waiters are resumed when an event is set."""

    LIFO = 0
    """The most recent waiter is resumed first."""
    FIFO = 1
    """The earliest waiter is resumed first."""


class Event:
    """Tasks awaiting the event suspend until :meth:`set` is called."""

    def __init__(self, initially_set: bool = False) -> None:
        self._lock = threading.Lock()
        self._set = initially_set
        self._waiters: List[Handle] = []

    def is_set(self) -> bool:
        """Return True if the event is in the set state."""
        return self._set

    def set(self, executor: Optional[Any] = None, policy: ResumeOrderPolicy = ResumeOrderPolicy.LIFO) -> None:
        """Set the event and resume all waiters.

        Waiters are resumed inline, or handed to ``executor.resume`` when an
        executor such as a thread pool is given. Setting an already set event
        does nothing.
        """
        with self._lock:
            if self._set:
                return
            self._set = True
            waiters, self._waiters = self._waiters, []
        if policy is ResumeOrderPolicy.LIFO:
            waiters.reverse()
        for handle in waiters:
            if executor is None:
                handle()
            else:
                executor.resume(handle)

    def reset(self) -> None:
        """Return a set event to the unset state; an unset event is unchanged."""
        with self._lock:
            self._set = False

    def __await__(self):
        if not self._set:
            yield self._suspend

    def _suspend(self, handle: Handle) -> bool:
        with self._lock:
            if self._set:
                return False
            self._waiters.append(handle)
            return True
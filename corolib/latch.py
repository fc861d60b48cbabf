"""A countdown that resumes its waiters once enough work has completed."""

from __future__ import annotations

import threading
from typing import Any, Optional

from corolib.event import Event


class Latch:
    """Thread-safe counter; awaiting tasks resume when it reaches zero.

    A latch created with a count of zero or less is ready immediately.
    """

    def __init__(self, count: int) -> None:
        self._lock = threading.Lock()
        self._count = count
        self._event = Event(count <= 0)

    def is_ready(self) -> bool:
        """Return True once the latch has been counted down to zero."""
        return self._event.is_set()

    def remaining(self) -> int:
        """Return how many completions the latch is still waiting for."""
        return self._count

    def count_down(self, n: int = 1, executor: Optional[Any] = None) -> None:
        """Record ``n`` completions; at zero, resume the waiters.

        With ``executor`` the waiters are resumed through it instead of inline.
        """
        with self._lock:
            previous = self._count
            self._count -= n
        if previous <= n:
            self._event.set(executor)

    def __await__(self):
        return self._event.__await__()
"""Blocking the calling thread until an awaitable completes."""

from __future__ import annotations

import inspect
import threading
from typing import Any

from corolib.task import Task


class SyncWaitEvent:
    """A thread event that one waiter blocks on until it is set."""

    def __init__(self, initially_set: bool = False) -> None:
        self._condition = threading.Condition()
        self._set = initially_set

    def set(self) -> None:
        """Mark the event as set and wake every waiter."""
        with self._condition:
            self._set = True
            self._condition.notify_all()

    def reset(self) -> None:
        """Return the event to the unset state."""
        with self._condition:
            self._set = False

    def wait(self) -> None:
        """Block until the event is set."""
        with self._condition:
            self._condition.wait_for(lambda: self._set)


async def _await(awaitable: Any) -> Any:
    return await awaitable


def sync_wait(awaitable: Any) -> Any:
    """Run ``awaitable`` to completion on this thread and return its result.

    The awaitable starts on the calling thread; if it is resumed elsewhere the
    caller blocks until it finishes. Exceptions raised by it are re-raised.
    """
    if not inspect.isawaitable(awaitable):
        raise TypeError(f"object of type {type(awaitable).__name__} is not awaitable")
    event = SyncWaitEvent()
    task = Task(_await(awaitable))
    task._set_continuation(event.set)
    task.resume()
    event.wait()
    return task.result()
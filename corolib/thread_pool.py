"""A pool of worker threads that resumes suspended tasks in FIFO order."""

from __future__ import annotations

import collections
import os
import threading
from dataclasses import dataclass
from typing import Any, Callable, Deque, Iterable, List, Optional

from corolib.task import Task

Handle = Callable[[], Any]


def _default_thread_count() -> int:
    return os.cpu_count() or 1


@dataclass
class ThreadPoolOptions:
    """Configuration for a :class:`ThreadPool`."""

    thread_count: int = 0
    """Number of worker threads; zero or less means one per available CPU."""
    on_thread_start_functor: Optional[Callable[[int], Any]] = None
    """Called on each worker thread with its index when it starts."""
    on_thread_stop_functor: Optional[Callable[[int], Any]] = None
    """Called on each worker thread with its index when it stops."""


class ScheduleOperation:
    """Awaitable that moves the awaiting task onto a thread pool worker."""

    def __init__(self, pool: "ThreadPool") -> None:
        self._pool = pool

    def __await__(self):
        yield self._suspend

    def _suspend(self, handle: Handle) -> bool:
        self._pool._enqueue([handle])
        return True


class ThreadPool:
    """Runs scheduled tasks on a fixed set of worker threads, first in, first out.

    After :meth:`shutdown` no new tasks may be scheduled, but every task
    scheduled before it still runs to its next suspension point.
    """

    def __init__(self, options: Optional[ThreadPoolOptions] = None) -> None:
        self._options = options if options is not None else ThreadPoolOptions()
        count = self._options.thread_count
        if count <= 0:
            count = _default_thread_count()
        self._cv = threading.Condition()
        self._queue: Deque[Handle] = collections.deque()
        self._size = 0
        self._shutdown_requested = False
        self._threads: List[threading.Thread] = [
            threading.Thread(target=self._executor, args=(idx,), daemon=True, name=f"thread-pool-{idx}")
            for idx in range(count)
        ]
        for thread in self._threads:
            thread.start()

    def thread_count(self) -> int:
        """Return the number of worker threads."""
        return len(self._threads)

    def schedule(self) -> ScheduleOperation:
        """Return an awaitable that continues the awaiting task on a worker.

        Raises RuntimeError if the pool has been shut down.
        """
        if self._shutdown_requested:
            raise RuntimeError("coro::thread_pool is shutting down, unable to schedule new tasks.")
        return ScheduleOperation(self)

    def schedule_call(self, func: Callable[..., Any], *args: Any) -> Task:
        """Return a task that calls ``func(*args)`` on a worker and yields its result."""

        async def run() -> Any:
            await self.schedule()
            return func(*args)

        return Task(run())

    def resume(self, handle: Optional[Handle]) -> None:
        """Queue a suspended task's resume handle; ``None`` is ignored."""
        if handle is None:
            return
        self._enqueue([handle])

    def resume_all(self, handles: Iterable[Optional[Handle]]) -> None:
        """Queue every non-``None`` resume handle in ``handles``."""
        self._enqueue([handle for handle in handles if handle is not None])

    def yield_now(self) -> ScheduleOperation:
        """Return an awaitable that sends the awaiting task to the back of the queue."""
        return self.schedule()

    def shutdown(self) -> None:
        """Stop accepting tasks, finish the queued ones and join the workers."""
        with self._cv:
            self._shutdown_requested = True
            self._cv.notify_all()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current:
                thread.join()

    def size(self) -> int:
        """Return the number of queued plus currently executing tasks."""
        return self._size

    def empty(self) -> bool:
        """Return True if nothing is queued or executing."""
        return self.size() == 0

    def queue_size(self) -> int:
        """Return the number of tasks waiting to be executed."""
        return len(self._queue)

    def queue_empty(self) -> bool:
        """Return True if no task is waiting to be executed."""
        return self.queue_size() == 0

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, *args: Any) -> None:
        self.shutdown()

    def _enqueue(self, handles: List[Handle]) -> None:
        if not handles:
            return
        with self._cv:
            self._size += len(handles)
            self._queue.extend(handles)
            self._cv.notify_all()

    def _executor(self, idx: int) -> None:
        start = self._options.on_thread_start_functor
        stop = self._options.on_thread_stop_functor
        if start is not None:
            start(idx)
        try:
            while True:
                with self._cv:
                    self._cv.wait_for(lambda: self._queue or self._shutdown_requested)
                    if not self._queue:
                        break
                    handle = self._queue.popleft()
                try:
                    handle()
                finally:
                    with self._cv:
                        self._size -= 1
        finally:
            if stop is not None:
                stop(idx)
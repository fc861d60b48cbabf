"""Lazily started coroutine tasks driven by explicit resumption.

Awaitables that take part in this scheduling model yield a single callable,
``suspend(handle)``, from their ``__await__`` generator. The driving task calls
it with ``handle``, a zero-argument callable that resumes the task. If
``suspend`` returns ``False`` the task continues at once; otherwise the task
stays suspended until somebody calls ``handle``. Results are handed back
through the awaitable's own state once ``__await__`` continues.
"""

from __future__ import annotations

import inspect
import threading
from typing import Any, Callable, Generator, Optional


class Task:
    """A coroutine that does not run until it is resumed or awaited."""

    def __init__(self, coro: Any) -> None:
        if not inspect.iscoroutine(coro):
            raise TypeError(f"Task expects a coroutine object, got {type(coro).__name__}")
        self._coro = coro
        self._lock = threading.Lock()
        self._done = False
        self._value: Any = None
        self._exception: Optional[BaseException] = None
        self._continuation: Optional[Callable[[], Any]] = None

    def is_ready(self) -> bool:
        """Return True if the task has finished or has been destroyed."""
        return self._coro is None or self._done

    def resume(self) -> bool:
        """Run the task until it next suspends; return True while it is unfinished."""
        if self._coro is None:
            raise RuntimeError("task has been destroyed")
        if not self._done:
            self._run()
        return not self._done

    def destroy(self) -> bool:
        """Close the underlying coroutine; return False if it was already gone."""
        if self._coro is None:
            return False
        coro, self._coro = self._coro, None
        coro.close()
        with self._lock:
            self._continuation = None
        return True

    def result(self) -> Any:
        """Return the task's value, re-raising any exception it ended with."""
        if self._coro is None:
            raise RuntimeError("task has been destroyed")
        if not self._done:
            raise RuntimeError("task has not completed")
        if self._exception is not None:
            raise self._exception
        return self._value

    def __await__(self) -> Generator[Callable[[Callable[[], Any]], bool], None, Any]:
        if not self.is_ready():
            yield self._await_suspend
        return self.result()

    def _await_suspend(self, handle: Callable[[], Any]) -> bool:
        if self._coro is None:
            return False
        if not self._done:
            self.resume()
        return self._set_continuation(handle)

    def _set_continuation(self, continuation: Callable[[], Any]) -> bool:
        """Register a callback for completion; return False if already complete."""
        with self._lock:
            if self._done:
                return False
            self._continuation = continuation
            return True

    def _run(self) -> None:
        pending: Optional[BaseException] = None
        while True:
            coro = self._coro
            if coro is None:
                return
            try:
                if pending is None:
                    request = coro.send(None)
                else:
                    error, pending = pending, None
                    request = coro.throw(error)
            except StopIteration as stop:
                self._finish(value=stop.value)
                return
            except BaseException as error:
                self._finish(exception=error)
                if not isinstance(error, Exception):
                    raise
                return

            if not callable(request):
                pending = TypeError(f"awaitable yielded an unsupported value: {request!r}")
                continue
            try:
                suspend = request(self.resume)
            except Exception as error:
                pending = error
                continue
            if suspend is not False:
                return

    def _finish(self, value: Any = None, exception: Optional[BaseException] = None) -> None:
        with self._lock:
            self._value = value
            self._exception = exception
            self._done = True
            continuation, self._continuation = self._continuation, None
        if continuation is not None:
            continuation()
"""A bounded FIFO buffer whose producers and consumers suspend when it is full or empty."""

from __future__ import annotations

import collections
import enum
import threading
from typing import Any, Callable, Deque, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")
Handle = Callable[[], Any]


class ProduceResult(enum.Enum):
    """Outcome of producing an element."""

    PRODUCED = 0
    RING_BUFFER_STOPPED = 1


class RingBufferStopped(Exception):
    """Raised by a consume operation when the ring buffer has been stopped."""


class _ProduceOperation(Generic[T]):
    def __init__(self, rb: "RingBuffer[T]", element: T) -> None:
        self._rb = rb
        self._element = element
        self._handle: Optional[Handle] = None
        self._stopped = False

    def __await__(self):
        rb = self._rb
        with rb._lock:
            produced, to_resume = rb._try_produce_locked(self._element)
        if to_resume is not None:
            to_resume()
        if not produced:
            yield self._suspend
        return ProduceResult.RING_BUFFER_STOPPED if self._stopped else ProduceResult.PRODUCED

    def _suspend(self, handle: Handle) -> bool:
        rb = self._rb
        with rb._lock:
            # A consumer may have made room since the first attempt.
            produced, to_resume = rb._try_produce_locked(self._element)
            if not produced:
                if rb._stopped:
                    self._stopped = True
                else:
                    self._handle = handle
                    rb._produce_waiters.append(self)
                    return True
        if to_resume is not None:
            to_resume()
        return False


class _ConsumeOperation(Generic[T]):
    def __init__(self, rb: "RingBuffer[T]") -> None:
        self._rb = rb
        self._element: Any = None
        self._handle: Optional[Handle] = None
        self._stopped = False

    def __await__(self):
        rb = self._rb
        with rb._lock:
            consumed, to_resume = rb._try_consume_locked(self)
        if to_resume is not None:
            to_resume()
        if not consumed:
            yield self._suspend
        if self._stopped:
            raise RingBufferStopped("ring buffer has been stopped")
        element, self._element = self._element, None
        return element

    def _suspend(self, handle: Handle) -> bool:
        rb = self._rb
        with rb._lock:
            # A producer may have added an element since the first attempt.
            consumed, to_resume = rb._try_consume_locked(self)
            if not consumed:
                if rb._stopped:
                    self._stopped = True
                else:
                    self._handle = handle
                    rb._consume_waiters.append(self)
                    return True
        if to_resume is not None:
            to_resume()
        return False


class RingBuffer(Generic[T]):
    """A fixed-capacity FIFO buffer shared between producing and consuming tasks.

    Producing into a full buffer and consuming from an empty one suspend the
    awaiting task. Waiting producers and consumers are woken most recent first.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be at least one")
        self._capacity = capacity
        self._lock = threading.Lock()
        self._elements: Deque[T] = collections.deque()
        self._produce_waiters: List[_ProduceOperation[T]] = []
        self._consume_waiters: List[_ConsumeOperation[T]] = []
        self._stopped = False

    def produce(self, element: T) -> _ProduceOperation[T]:
        """Return an awaitable that stores ``element``, waiting for a free slot.

        Awaiting it gives a :class:`ProduceResult`.
        """
        return _ProduceOperation(self, element)

    def consume(self) -> _ConsumeOperation[T]:
        """Return an awaitable that takes the oldest element, waiting for one.

        Awaiting it raises :class:`RingBufferStopped` if the buffer was stopped.
        """
        return _ConsumeOperation(self)

    def size(self) -> int:
        """Return the number of elements currently stored."""
        return len(self._elements)

    def empty(self) -> bool:
        """Return True if no elements are stored."""
        return self.size() == 0

    def __len__(self) -> int:
        return self.size()

    def notify_waiters(self) -> None:
        """Stop the buffer and wake every waiting producer and consumer.

        Woken producers report :attr:`ProduceResult.RING_BUFFER_STOPPED`; woken
        consumers raise :class:`RingBufferStopped`. Only the first call has an effect.
        """
        with self._lock:
            if self._stopped:
                return
            self._stopped = True
        for waiters in (self._produce_waiters, self._consume_waiters):
            while True:
                with self._lock:
                    if not waiters:
                        break
                    op = waiters.pop()
                    op._stopped = True
                    handle = op._handle
                if handle is not None:
                    handle()

    def _try_produce_locked(self, element: T) -> Tuple[bool, Optional[Handle]]:
        if len(self._elements) >= self._capacity:
            return False, None
        self._elements.append(element)
        if self._consume_waiters:
            op = self._consume_waiters.pop()
            op._element = self._elements.popleft()
            return True, op._handle
        return True, None

    def _try_consume_locked(self, op: _ConsumeOperation[T]) -> Tuple[bool, Optional[Handle]]:
        if not self._elements:
            return False, None
        op._element = self._elements.popleft()
        if self._produce_waiters:
            producer = self._produce_waiters.pop()
            self._elements.append(producer._element)
            return True, producer._handle
        return True, None
# corolib

corolib provides coroutine building blocks that run without an event loop.
You write an `async def` function and then choose how to run it:

- drive it yourself with `Task`;
- run it to completion on the current thread with `sync_wait`;
- move it onto worker threads with a `ThreadPool`.

The synchronisation primitives `Event`, `Latch`, `Mutex` and `RingBuffer`
can be used from several threads at once.

Python 3.10 or later is required. The package has no runtime
dependencies.

## Installation

From a checkout of the package:

```
pip install .
```

## Tasks and sync_wait

```python
from corolib.task import Task
from corolib.sync_wait import sync_wait

async def square(x):
    return x * x

async def square_and_add_5(x):
    return await Task(square(x)) + 5

print(sync_wait(Task(square_and_add_5(2))))  # 9
```

`Task(coro)` wraps a coroutine object. Passing anything else raises
`TypeError`. A task is lazy: it does nothing until it is awaited, run with
`resume()`, or handed to `sync_wait`.

| Member | What it does |
| --- | --- |
| `resume()` | Runs the task until it next suspends. Returns `True` while the task is unfinished. |
| `is_ready()` | Reports whether the task has finished or has been destroyed. |
| `result()` | Returns the task's value, or re-raises its exception. Raises `RuntimeError` if the task has not completed or has been destroyed. |
| `destroy()` | Closes the coroutine. Returns `False` if the task was already destroyed. |

`sync_wait(awaitable)` starts the awaitable on the calling thread. If the
awaitable suspends and is later resumed on another thread, the caller
blocks until it finishes. `sync_wait` then returns the result, or raises
the exception the awaitable raised. It raises `TypeError` for objects that
are not awaitable.

`SyncWaitEvent` is the blocking event that `sync_wait` uses. It offers
`set()`, `reset()` and `wait()`.

### Writing your own awaitables

An awaitable takes part in this scheduling model as follows:

1. Its `__await__` yields a single callable, `suspend(handle)`.
2. The running task calls `suspend` and passes `handle`, a zero-argument
   callable that resumes the task.
3. If `suspend` returns `False`, the task continues at once.
4. Otherwise the task stays suspended until something calls `handle()`.

## Thread pool

```python
from corolib.thread_pool import ThreadPool, ThreadPoolOptions
from corolib.sync_wait import sync_wait
from corolib.task import Task

with ThreadPool(ThreadPoolOptions(thread_count=4)) as pool:
    async def work(n):
        await pool.schedule()      # continue on a worker thread
        await pool.yield_now()     # go to the back of the queue
        return n * 2

    print(sync_wait(Task(work(21))))  # 42
```

`ThreadPoolOptions` takes these options:

- `thread_count`: the number of worker threads. Zero or less means one
  thread per CPU.
- `on_thread_start_functor` and `on_thread_stop_functor`: optional
  callables. Each worker calls them with its own index when it starts and
  when it stops.

Scheduling work:

- `schedule_call(func, *args)` returns a `Task` that calls the function on
  a worker and returns its result.
- `resume(handle)` queues a single resume handle. `None` is ignored.
- `resume_all(handles)` queues every handle in the iterable that is not
  `None`.

Inspecting the pool:

- `thread_count()` gives the number of worker threads.
- `size()` and `empty()` count queued tasks plus tasks that are executing.
- `queue_size()` and `queue_empty()` count only queued tasks.

Shutting down:

- `shutdown()` stops accepting new work. It lets the queued handles run,
  then joins the workers.
- After `shutdown()`, `schedule()` raises `RuntimeError`.
- Leaving the `with` block calls `shutdown()`.

## Event and Latch

```python
from corolib.event import Event, ResumeOrderPolicy
from corolib.latch import Latch

event = Event()

async def waiter():
    await event          # suspends until event.set()

latch = Latch(3)

async def wait_for_workers():
    await latch          # resumes once count_down() has run 3 times
```

### Event

`Event.set(executor=None, policy=ResumeOrderPolicy.LIFO)` resumes every
waiter. With the default policy, the most recent waiter is resumed first.
`ResumeOrderPolicy.FIFO` resumes waiters in the order they arrived.

By default the waiters run inline, on the thread that calls `set()`. If
you pass an executor such as a `ThreadPool`, each waiter is handed to the
executor's `resume()` instead.

Setting an event that is already set does nothing. `reset()` returns the
event to the unset state. `is_set()` reports the current state.

### Latch

`Latch(count)` is ready at once if `count` is zero or less.

- `count_down(n=1, executor=None)` subtracts `n` from the count. When the
  count reaches zero, it resumes the waiters, through `executor` if one is
  given.
- `remaining()` returns the current count.
- `is_ready()` reports whether the count has reached zero.

## Mutex

```python
from corolib.mutex import Mutex

mutex = Mutex()

async def critical_section(output, value):
    with await mutex.lock():
        output.append(value)
```

`await mutex.lock()` returns a `ScopedLock`. The lock is released when the
`with` block ends. You can also release it earlier with `unlock()`; calling
`unlock()` again after that does nothing.

`Mutex.try_lock()` acquires the lock without waiting. It returns `True` if
it succeeded.

`Mutex.unlock()` releases the lock:

- If tasks are waiting, ownership passes directly to the earliest waiter,
  which is resumed on the releasing thread.
- Unlocking a mutex that is not locked raises `RuntimeError`.

## Ring buffer

```python
from corolib.ring_buffer import RingBuffer, RingBufferStopped, ProduceResult

rb = RingBuffer(16)

async def producer():
    result = await rb.produce(1)   # ProduceResult.PRODUCED or RING_BUFFER_STOPPED

async def consumer():
    try:
        item = await rb.consume()
    except RingBufferStopped:
        pass                       # notify_waiters() was called
```

`RingBuffer(capacity)` raises `ValueError` unless `capacity` is at least
one.

- Producers suspend while the buffer is full.
- Consumers suspend while the buffer is empty.
- Waiting producers and consumers are served most recent first.
- `size()`, `len(rb)` and `empty()` report how many elements the buffer
  currently holds.
- `notify_waiters()` stops the buffer and wakes every waiter. Woken
  producers get `ProduceResult.RING_BUFFER_STOPPED`, and woken consumers
  raise `RingBufferStopped`. Only the first call has an effect.

## Polling constants

`corolib.poll` defines:

- `PollOp`: `READ`, `WRITE` and `READ_WRITE`, using the epoll bit values.
- `PollStatus`: `EVENT`, `TIMEOUT`, `ERROR` and `CLOSED`.
- `poll_op_readable(op)` and `poll_op_writeable(op)`, which test the
  corresponding bits of an operation.

## What the package does not do

The polling values are only constants. corolib has:

- no I/O scheduler that polls file descriptors;
- no timers;
- no sockets, TCP or UDP networking, or DNS resolution;
- no helper for running several tasks at once.

To run many tasks concurrently, wrap them in `Task` objects and start them
on a `ThreadPool`. Use an `Event` or a `Latch` to wait for all of them.

## Running the tests

```
pip install -e .[test]
pytest
```
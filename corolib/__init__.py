"""Coroutine tasks, sync_wait, a thread pool, polling constants and thread-safe synchronisation primitives."""

__version__ = "0.1.0"

__all__ = ["event", "latch", "mutex", "poll", "ring_buffer", "sync_wait", "task", "thread_pool"]
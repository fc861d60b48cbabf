"""Readiness operations and outcomes for polling file descriptors."""

from __future__ import annotations

import enum

# Bit values fixed by the epoll interface (EPOLLIN and EPOLLOUT).
_EPOLLIN = 0x001
_EPOLLOUT = 0x004


class PollOp(enum.IntFlag):
    """The kind of readiness to wait for."""

    READ = _EPOLLIN
    WRITE = _EPOLLOUT
    READ_WRITE = _EPOLLIN | _EPOLLOUT


class PollStatus(enum.Enum):
    """The outcome of a poll operation."""

    EVENT = 0
    """The poll operation was successful."""
    TIMEOUT = 1
    """The poll operation timed out."""
    ERROR = 2
    """The file descriptor had an error while polling."""
    CLOSED = 3
    """The file descriptor was closed by the remote end or internally."""


def poll_op_readable(op: PollOp | int) -> bool:
    """Return True if ``op`` includes waiting for readability."""
    return bool(int(op) & _EPOLLIN)


def poll_op_writeable(op: PollOp | int) -> bool:
    """Return True if ``op`` includes waiting for writability."""
    return bool(int(op) & _EPOLLOUT)
import select

import pytest

from corolib.poll import PollOp, poll_op_readable, poll_op_writeable


@pytest.mark.parametrize(
    "op, readable, writeable",
    [
        (PollOp.READ, True, False),
        (PollOp.WRITE, False, True),
        (PollOp.READ_WRITE, True, True),
        (PollOp.READ | PollOp.WRITE, True, True),
    ],
)
def test_readable_and_writeable(op, readable, writeable):
    assert poll_op_readable(op) is readable
    assert poll_op_writeable(op) is writeable


@pytest.mark.parametrize(
    "bit, readable, writeable",
    [
        (getattr(select, "EPOLLIN", 0x001), True, False),
        (getattr(select, "EPOLLOUT", 0x004), False, True),
    ],
)
def test_raw_epoll_bits_are_understood(bit, readable, writeable):
    assert poll_op_readable(bit) is readable
    assert poll_op_writeable(bit) is writeable


def test_plain_integers_are_accepted():
    assert poll_op_readable(int(PollOp.READ)) is True
    assert poll_op_writeable(int(PollOp.READ)) is False
    assert poll_op_writeable(int(PollOp.READ_WRITE)) is True
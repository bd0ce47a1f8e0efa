import os

import pytest

from talker.protocol import BUFFER_SLACK, MESSAGE_LENGTH, MessageBuffer, should_send


@pytest.mark.parametrize("payload, expected", [
    (b"", False),
    (b"\n", False),
    (b"a\n", False),
    (b"ab\n", True),
    (b"hello\n", True),
])
def test_should_send(payload, expected):
    assert should_send(payload) is expected


def test_buffer_reads_at_most_limit():
    r, w = os.pipe()
    try:
        os.write(w, b"q" * (MESSAGE_LENGTH + 10))
        buf = MessageBuffer()
        assert buf.capacity == MESSAGE_LENGTH + BUFFER_SLACK
        assert buf.fill_from_fd(r) == MESSAGE_LENGTH
        assert buf.fill_from_fd(r) == 10
        assert buf.payload == b"q" * 10
    finally:
        os.close(r)
        os.close(w)


def test_buffer_content_does_not_survive_a_refill():
    r, w = os.pipe()
    try:
        buf = MessageBuffer(limit=8)
        os.write(w, b"longline")
        buf.fill_from_fd(r)
        os.write(w, b"ab")
        buf.fill_from_fd(r)
        assert buf.payload == b"ab"
    finally:
        os.close(r)
        os.close(w)

import io
import os
import select
import socket

import pytest

from talker.loop import DuplexLoop
from talker.shutdown import ShutdownSignal
from talker.transport import Transport

WAIT = 5.0      # upper bound for any single select() in tests


def bounded_select(r, w, x):
    """select() that gives up after WAIT seconds instead of hanging a test."""
    return select.select(r, w, x, WAIT)


def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def pending(sock: socket.socket, timeout: float = 0.2) -> bool:
    ready, _, _ = select.select([sock], [], [], timeout)
    return bool(ready)


class RecordingTerminal:
    """Stands in for TerminalController when no tty is around."""

    def __init__(self):
        self.history = []
        self.canonical = False
        self.restored = 0

    def capture_initial(self):
        self.history.append("capture")

    def enter_line_mode(self):
        self.canonical = True
        self.history.append("line")

    def enter_raw_mode(self):
        self.canonical = False
        self.history.append("raw")

    def restore(self):
        self.restored += 1


class RecordingSelect:
    """bounded_select that remembers every wait set it was handed."""

    def __init__(self):
        self.wait_sets = []

    def __call__(self, r, w, x):
        self.wait_sets.append(list(r))
        return bounded_select(r, w, x)


@pytest.fixture
def peer():
    """Plain UDP socket playing the remote side."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    yield sock
    sock.close()


@pytest.fixture
def transport(peer):
    t = Transport("127.0.0.1", peer.getsockname()[1], 0, bind_host="127.0.0.1").open()
    yield t
    t.close()


@pytest.fixture
def keyboard():
    r, w = os.pipe()
    yield r, w
    for fd in (r, w):
        try:
            os.close(fd)
        except OSError:
            pass


@pytest.fixture
def shutdown():
    s = ShutdownSignal()
    yield s
    s.uninstall()


@pytest.fixture
def make_loop(transport, keyboard, shutdown):
    def factory(selector=bounded_select):
        terminal = RecordingTerminal()
        out = io.BytesIO()
        loop = DuplexLoop(transport, terminal, shutdown,
                          keyboard_fd=keyboard[0], out=out, selector=selector)
        loop.start()
        return loop
    return factory

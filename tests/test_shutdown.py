import select
import signal

import pytest

from talker.shutdown import ShutdownSignal


def readable(fd):
    return bool(select.select([fd], [], [], 0)[0])


def test_request_wakes_the_wait_set(shutdown):
    assert not readable(shutdown.fd)
    shutdown.request()
    assert shutdown.is_set()
    assert readable(shutdown.fd)

    shutdown.drain()
    assert not readable(shutdown.fd)
    assert not shutdown.interrupted


def test_sigint_sets_event_and_wakes_fd():
    previous = signal.getsignal(signal.SIGINT)
    sig = ShutdownSignal().install()
    try:
        signal.raise_signal(signal.SIGINT)
        assert sig.interrupted
        assert sig.is_set()
        assert readable(sig.fd)
    finally:
        sig.uninstall()
    assert signal.getsignal(signal.SIGINT) is previous


def test_uninstall_without_install_only_closes(shutdown):
    previous = signal.getsignal(signal.SIGINT)
    shutdown.uninstall()
    assert signal.getsignal(signal.SIGINT) is previous
    with pytest.raises(OSError):
        shutdown.request()

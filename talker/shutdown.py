#!/usr/bin/env python3
"""Ctrl‑C handling as cooperative cancellation.

The SIGINT handler never touches sockets or the terminal.  It only sets an
event; the interpreter additionally writes the signal number to a wake‑up
socket (``signal.set_wakeup_fd``) that sits in the loop's wait set, so the
loop notices the interrupt at its one suspension point and the regular
cleanup path runs synchronously.
"""

from __future__ import annotations

import contextlib
import signal
import socket
import threading
from typing import Optional

from .util import LOG


class ShutdownSignal:
    """Event + self‑pipe pair the main loop can wait on."""

    def __init__(self) -> None:
        self.event = threading.Event()
        self.interrupted = False                    # True only for a real SIGINT
        self._rsock, self._wsock = socket.socketpair()
        self._rsock.setblocking(False)
        self._wsock.setblocking(False)              # set_wakeup_fd insists on it
        self._installed = False
        self._signum = signal.SIGINT
        self._prev_handler = None
        self._prev_wakeup: Optional[int] = None

    # ---------------------------------------------------------------- hooks
    def install(self, signum: int = signal.SIGINT) -> "ShutdownSignal":
        """Route *signum* to this object.  Main thread only."""
        self._prev_wakeup = signal.set_wakeup_fd(self._wsock.fileno())
        self._prev_handler = signal.signal(signum, self._on_signal)
        self._signum = signum
        self._installed = True
        return self

    def uninstall(self) -> None:
        if self._installed:
            signal.signal(self._signum, self._prev_handler)
            signal.set_wakeup_fd(self._prev_wakeup)
            self._installed = False
        self._rsock.close()
        self._wsock.close()

    def _on_signal(self, signum, frame) -> None:
        self.interrupted = True
        self.event.set()

    # ---------------------------------------------------------------- API
    @property
    def fd(self) -> int:
        return self._rsock.fileno()

    def request(self) -> None:
        """Ask the loop to stop at its next wake‑up (EOF, tests, embedding)."""
        self.event.set()
        # A full buffer already holds a pending wake‑up byte.
        with contextlib.suppress(BlockingIOError):
            self._wsock.send(b"\0")

    def drain(self) -> None:
        """Empty the wake‑up socket so it stops reporting ready."""
        while True:
            try:
                if not self._rsock.recv(64):
                    break
            except BlockingIOError:
                break
        LOG.debug("Shutdown requested (interrupted=%s)", self.interrupted)

    def is_set(self) -> bool:
        return self.event.is_set()

#!/usr/bin/env python3
"""Duplex multiplexing loop – the heart of talker.

One thread, one blocking ``select`` per iteration, two states:

* ``Mode.IDLE``      – terminal raw, watching keyboard *and* network.
* ``Mode.COMPOSING`` – terminal canonical, watching the keyboard only, so an
  incoming datagram can never land in the middle of a half typed line.

Transitions on every wake‑up (shutdown fd first, then keyboard, then network):

    IDLE      + keyboard  →  line mode, COMPOSING (nothing read yet)
    COMPOSING + keyboard  →  read line, raw mode, IDLE, send it
    IDLE      + network   →  read datagram, print ">> " + bytes, stay IDLE
"""

from __future__ import annotations

import enum
import select                                      # The one suspension point
import sys
from typing import BinaryIO, Callable, List, Optional

from .errors import MultiplexFailed, ReadFailed, RuntimeFailure
from .protocol import DISPLAY_PREFIX, MESSAGE_LENGTH, MessageBuffer, should_send
from .shutdown import ShutdownSignal
from .terminal import TerminalController
from .transport import Transport
from .util import LOG


class Mode(enum.Enum):
    IDLE = "idle"
    COMPOSING = "composing"


class DuplexLoop:
    """Owns the typing state; everything else is borrowed from the session."""

    def __init__(
        self,
        transport: Transport,
        terminal: TerminalController,
        shutdown: ShutdownSignal,
        keyboard_fd: Optional[int] = None,
        out: Optional[BinaryIO] = None,
        selector: Callable = select.select,
    ) -> None:
        self.transport = transport
        self.terminal = terminal
        self.shutdown = shutdown
        self.keyboard_fd = sys.stdin.fileno() if keyboard_fd is None else keyboard_fd
        self.out = sys.stdout.buffer if out is None else out
        self._select = selector

        self.mode = Mode.IDLE
        self.buffer = MessageBuffer(MESSAGE_LENGTH)
        self.running = False
        self.eof = False                # keyboard reached end of file

        # -------- counters (debug logging / tests) --------
        self.sent = 0
        self.discarded = 0
        self.received = 0

    # ================================================================= main ===
    def start(self) -> None:
        """Enter the initial state: IDLE with the terminal in raw mode."""
        self.terminal.enter_raw_mode()
        self.mode = Mode.IDLE
        self.running = True

    def run(self) -> None:
        self.start()
        while self.step():
            pass

    def wait_set(self) -> List[int]:
        fds = [self.shutdown.fd, self.keyboard_fd]
        if self.mode is Mode.IDLE:
            fds.append(self.transport.receive_fd)
        return fds

    def step(self) -> bool:
        """Block until something is ready, handle it, return ``running``."""
        try:
            ready, _, _ = self._select(self.wait_set(), [], [])
        except OSError as exc:
            raise MultiplexFailed(f"Failed to wait for input: {exc}") from exc

        if self.shutdown.fd in ready:
            self.shutdown.drain()
            if self.shutdown.is_set():
                self.running = False
                return False

        # Keyboard wins over the network inside one pass; a datagram that was
        # also ready stays queued in the kernel for a later iteration.
        if self.keyboard_fd in ready:
            if self.mode is Mode.IDLE:
                self._begin_composing()
            else:
                self._finish_composing()
        elif self.mode is Mode.IDLE and self.transport.receive_fd in ready:
            self._show_incoming()

        return self.running

    # ---------------------------------------------------------------- transitions
    def _begin_composing(self) -> None:
        self.terminal.enter_line_mode()
        self.mode = Mode.COMPOSING
        LOG.debug("idle -> composing")

    def _finish_composing(self) -> None:
        try:
            count = self.buffer.fill_from_fd(self.keyboard_fd)
        except OSError as exc:
            raise ReadFailed(f"Failed to read from keyboard: {exc}") from exc
        self.terminal.enter_raw_mode()
        self.mode = Mode.IDLE
        LOG.debug("composing -> idle (%d bytes typed)", count)

        if count == 0:                          # Ctrl‑D / closed stdin
            self.eof = True
            self.running = False
            return

        payload = self.buffer.payload
        if not should_send(payload):
            self.discarded += 1
            return
        self.transport.send_all(payload)
        self.sent += 1

    def _show_incoming(self) -> None:
        count = self.transport.receive_into(self.buffer)
        try:
            self.out.write(DISPLAY_PREFIX + self.buffer.payload)
            self.out.flush()
        except OSError as exc:
            raise RuntimeFailure(f"Failed to display message: {exc}") from exc
        self.received += 1
        LOG.debug("Displayed %d bytes from network", count)

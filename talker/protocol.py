#!/usr/bin/env python3
"""Shared constants plus the reusable message buffer.

There is no packet format: a datagram carries exactly the bytes the peer typed,
so everything both directions must agree on lives here as plain constants.
"""

from __future__ import annotations       # Postponed annotation evaluation (PEP 563)
import os                                # Raw fd reads for the keyboard side
import socket                            # Only for the type hint on fill_from_socket

# --- Network configuration -------------------------------------------------
MESSAGE_LENGTH: int = 700     # Max bytes read per keyboard/network read call
BUFFER_SLACK: int = 47        # Extra capacity kept past MESSAGE_LENGTH
DEFAULT_OUT_PORT: int = 12345 # Peer port we send to when none is given
DEFAULT_IN_PORT: int = 12345  # Local port we listen on when none is given
WILDCARD_HOST: str = "0.0.0.0"

# --- Display / send policy -------------------------------------------------
DISPLAY_PREFIX: bytes = b">> "  # Marks lines that came from the network
MIN_SEND_LENGTH: int = 3        # Shorter input (a bare "\n", "x\n") is dropped


def should_send(payload: bytes) -> bool:
    """True when *payload* carries more than a bare line terminator."""
    return len(payload) >= MIN_SEND_LENGTH


# --- Buffer ----------------------------------------------------------------

class MessageBuffer:
    """Fixed‑capacity byte buffer reused for every read of the session.

    Each fill replaces the previous content; nothing is queued or kept
    between iterations.
    """

    __slots__ = ("limit", "length", "_data")

    def __init__(self, limit: int = MESSAGE_LENGTH) -> None:
        self.limit = limit
        self.length = 0
        self._data = bytearray(limit + BUFFER_SLACK)

    @property
    def capacity(self) -> int:
        return len(self._data)

    def fill_from_fd(self, fd: int) -> int:
        """Read at most ``limit`` bytes from *fd*; 0 means end of file."""
        self.length = os.readv(fd, [memoryview(self._data)[: self.limit]])
        return self.length

    def fill_from_socket(self, sock: socket.socket) -> int:
        """Receive one datagram, truncated to ``limit`` bytes."""
        self.length = sock.recv_into(self._data, self.limit)
        return self.length

    @property
    def payload(self) -> bytes:
        return bytes(self._data[: self.length])

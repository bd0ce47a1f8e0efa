#!/usr/bin/env python3
"""Transport setup: two independent unicast UDP endpoints.

* SendEndpoint    – socket ``connect()``‑ed to the peer, used only for send().
* ReceiveEndpoint – socket bound to the wildcard address, used only for recv.

Both are created once in :meth:`Transport.open`; there is no retry.
"""

from __future__ import annotations

import socket                                      # Low‑level UDP API
from typing import Optional, Tuple

from .errors import InvalidAddress, InvalidPort, ReadFailed, SendFailed, TransportInitFailed
from .protocol import DEFAULT_IN_PORT, DEFAULT_OUT_PORT, WILDCARD_HOST, MessageBuffer
from .util import LOG

MAX_PORT = 65535


# ---------------------------------------------------------------- validation
def parse_address(text: str) -> str:
    """Return *text* unchanged if it is a dotted‑decimal IPv4 literal."""
    try:
        socket.inet_pton(socket.AF_INET, text)
    except (OSError, TypeError):
        raise InvalidAddress("Error: First argument isn't valid IP address!") from None
    return text


def parse_port(text: Optional[str], default: int, ordinal: str = "Second") -> int:
    """Port string → int in 1..65535; ``None`` selects *default*.

    *ordinal* names the argument in the diagnostic ("Second", "Third").
    """
    if text is None:
        return default
    try:
        port = int(text)
    except ValueError:
        port = 0
    if not 0 < port <= MAX_PORT:
        raise InvalidPort(f"Error: {ordinal} argument isn't valid port! ({text!r})")
    return port


class Transport:
    """Owns the send and receive sockets for one chat session."""

    def __init__(
        self,
        peer_ip: str,
        send_port: int = DEFAULT_OUT_PORT,
        listen_port: int = DEFAULT_IN_PORT,
        bind_host: str = WILDCARD_HOST,
    ) -> None:
        self.peer: Tuple[str, int] = (peer_ip, send_port)
        self.local: Tuple[str, int] = (bind_host, listen_port)
        self.send_sock: Optional[socket.socket] = None
        self.recv_sock: Optional[socket.socket] = None

    # ================================================================= setup ===
    def open(self) -> "Transport":
        """Create both endpoints; any socket error is fatal."""
        try:
            # -------- SendEndpoint --------
            self.send_sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            self.send_sock.connect(self.peer)       # later send() needs no address
            LOG.debug("Send endpoint connected to %s:%d", *self.peer)

            # -------- ReceiveEndpoint --------
            self.recv_sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            self.recv_sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self.recv_sock.bind(self.local)
            LOG.debug("Receive endpoint bound on %s:%d", *self.local)
        except OSError as exc:
            self.close()
            raise TransportInitFailed(f"Error while setting up sockets: {exc}") from exc
        return self

    @property
    def listen_port(self) -> int:
        """Port actually bound (differs from the requested one only for port 0)."""
        if self.recv_sock is None:
            return self.local[1]
        return self.recv_sock.getsockname()[1]

    @property
    def receive_fd(self) -> int:
        return self.recv_sock.fileno()

    # ============================================================ data path ===
    def send_all(self, data: bytes) -> int:
        """Keep calling send() from the current offset until *data* is out."""
        view = memoryview(data)
        sent = 0
        while sent < len(data):
            try:
                sent += self.send_sock.send(view[sent:])
            except OSError as exc:
                raise SendFailed(f"Failed to send data: {exc}") from exc
        LOG.debug("Sent %d bytes to %s:%d", sent, *self.peer)
        return sent

    def receive_into(self, buffer: MessageBuffer) -> int:
        try:
            return buffer.fill_from_socket(self.recv_sock)
        except OSError as exc:
            raise ReadFailed(f"Failed to read data from network: {exc}") from exc

    # ============================================================= teardown ===
    def close(self) -> None:
        for sock in (self.send_sock, self.recv_sock):
            if sock is not None:
                sock.close()

    @property
    def closed(self) -> bool:
        return all(s is None or s.fileno() == -1 for s in (self.send_sock, self.recv_sock))

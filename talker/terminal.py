#!/usr/bin/env python3
"""Terminal mode controller.

Canonical (line) mode gives the user line editing and echo while composing a
message.  Raw/pass‑through mode exists only so that ``select`` reports the
keyboard ready on the *first* keystroke, letting the loop flip into line mode
before the user keeps typing.
"""

from __future__ import annotations

import copy
import sys
import termios                                      # POSIX tty attribute API
from typing import List, Optional

from .errors import TerminalError, TerminalModeFailed
from .util import LOG

LFLAG = 3          # index of c_lflag in the tcgetattr() list


class TerminalController:
    """Snapshot + working copy of one tty's attributes."""

    def __init__(self, fd: Optional[int] = None) -> None:
        self.fd = sys.stdin.fileno() if fd is None else fd
        self.snapshot: Optional[List] = None    # never mutated after capture
        self.working: Optional[List] = None     # ICANON toggled on this copy
        self._restored = False

    def capture_initial(self) -> None:
        try:
            attrs = termios.tcgetattr(self.fd)
        except termios.error as exc:
            raise TerminalError(f"Failed to save initial terminal settings: {exc}") from exc
        self.snapshot = attrs
        self.working = copy.deepcopy(attrs)
        self._restored = False

    def enter_line_mode(self) -> None:
        self.working[LFLAG] |= termios.ICANON
        self._apply("line")

    def enter_raw_mode(self) -> None:
        self.working[LFLAG] &= ~termios.ICANON
        self._apply("raw")

    def _apply(self, label: str) -> None:
        try:
            termios.tcsetattr(self.fd, termios.TCSANOW, self.working)
        except termios.error as exc:
            raise TerminalModeFailed(f"Failed to switch terminal to {label} mode: {exc}") from exc
        LOG.debug("Terminal in %s mode", label)

    @property
    def canonical(self) -> bool:
        return bool(self.working and self.working[LFLAG] & termios.ICANON)

    def restore(self) -> None:
        """Put the launch‑time attributes back.  Only the first call acts."""
        if self.snapshot is None or self._restored:
            return
        self._restored = True
        try:
            termios.tcsetattr(self.fd, termios.TCSANOW, self.snapshot)
        except termios.error as exc:
            raise TerminalError(f"Failed to restore initial terminal settings: {exc}") from exc

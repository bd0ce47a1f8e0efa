"""talker – a two‑party UDP text chat for the terminal.

Importing this package exposes :class:`talker.Talker` (a whole session) and
:class:`talker.DuplexLoop` (the select loop on its own), so the chat can be
embedded in another application or launched via ``python -m talker``.
"""

# ------------------------ re-exports ------------------------
from .client import Talker, TalkerConfig, main, run   # noqa: F401
from .loop import DuplexLoop, Mode                     # noqa: F401

__all__: list[str] = [
    "DuplexLoop",    # Keyboard/network multiplexing state machine
    "Mode",          # IDLE / COMPOSING
    "Talker",        # Full session: sockets + terminal + signals
    "TalkerConfig",  # Validated CLI configuration
    "main",
    "run",
]

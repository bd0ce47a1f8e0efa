"""Exception hierarchy.

Every failure in talker is fatal for the process.  Instead of exiting where
the failure happens, each layer raises one of these and the top‑level
handler in :mod:`talker.client` cleans up and turns ``exit_code`` into the
process status.
"""

from __future__ import annotations


class TalkerError(Exception):
    """Base class; ``exit_code`` is what the process should return."""

    exit_code: int = 1


# --------------------------------------------------------- argument problems
class UsageError(TalkerError):
    """Wrong number of command‑line arguments."""


class ValidationError(TalkerError):
    """An argument was present but malformed."""


class InvalidAddress(ValidationError):
    pass


class InvalidPort(ValidationError):
    pass


# ------------------------------------------------------------ setup problems
class SetupFailure(TalkerError):
    """Sockets or terminal could not be prepared."""


class TransportInitFailed(SetupFailure):
    pass


class TerminalError(SetupFailure):
    pass


# ---------------------------------------------------------- runtime problems
class RuntimeFailure(TalkerError):
    """Something broke inside the main loop."""


class MultiplexFailed(RuntimeFailure):
    pass


class ReadFailed(RuntimeFailure):
    pass


class SendFailed(RuntimeFailure):
    pass


class TerminalModeFailed(RuntimeFailure):
    pass

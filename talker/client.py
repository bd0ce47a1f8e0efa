#!/usr/bin/env python3
"""Command‑line UDP *talker*: type to the peer, read what the peer types.

Usage (after installing package locally):

    talker 192.0.2.7                # send to :12345, listen on :12345
    talker 127.0.0.1 9000 9001      # send to :9000, listen on :9001

Every failure below travels up as a :class:`talker.errors.TalkerError`;
:meth:`Talker.start` and :func:`run` are the only places that turn one into
cleanup plus an exit status, and :func:`main` is the only ``sys.exit``.
"""

from __future__ import annotations

import argparse                                    # For CLI parsing
import select
import sys
from dataclasses import dataclass
from typing import BinaryIO, Callable, List, Optional, TextIO

from .errors import RuntimeFailure, SetupFailure, TalkerError, UsageError, ValidationError
from .loop import DuplexLoop
from .protocol import DEFAULT_IN_PORT, DEFAULT_OUT_PORT
from .shutdown import ShutdownSignal
from .terminal import TerminalController
from .transport import Transport, parse_address, parse_port
from .util import LOG, configure_logging, get_local_ip

# 3rd‑party: coloured terminal output
from colorama import Fore, Style, init


@dataclass(slots=True)
class TalkerConfig:
    """Validated command‑line configuration."""

    peer_ip: str
    send_port: int = DEFAULT_OUT_PORT
    listen_port: int = DEFAULT_IN_PORT
    debug: bool = False
    log_file: Optional[str] = None


class _ArgumentParser(argparse.ArgumentParser):
    """argparse exits with 2 on bad usage; we want a UsageError (status 1)."""

    def error(self, message: str) -> None:
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="talker",
        usage="%(prog)s ip_address [port] [in_port] [--debug] [--log-file PATH]",
        description="Bidirectional UDP text chat between two terminals.",
    )
    parser.add_argument("ip_address", help="IPv4 address of the peer")
    parser.add_argument("port", nargs="?", help=f"peer UDP port (default {DEFAULT_OUT_PORT})")
    parser.add_argument("in_port", nargs="?", help=f"local UDP port to listen on (default {DEFAULT_IN_PORT})")
    parser.add_argument("-d", "--debug", action="store_true", help="trace state changes on stderr")
    parser.add_argument("--log-file", metavar="PATH", help="also log to a rotating file")
    return parser


def parse_config(argv: Optional[List[str]] = None,
                 parser: Optional[argparse.ArgumentParser] = None) -> TalkerConfig:
    """argv → TalkerConfig.  Raises UsageError / ValidationError, opens nothing."""
    parser = parser or build_parser()
    args = parser.parse_args(argv)
    return TalkerConfig(
        peer_ip=parse_address(args.ip_address),
        send_port=parse_port(args.port, DEFAULT_OUT_PORT, "Second"),
        listen_port=parse_port(args.in_port, DEFAULT_IN_PORT, "Third"),
        debug=args.debug,
        log_file=args.log_file,
    )


class Talker:
    """One chat session: sockets + terminal + signal hook + loop."""

    def __init__(
        self,
        config: TalkerConfig,
        keyboard_fd: Optional[int] = None,
        out: Optional[BinaryIO] = None,
        console: Optional[TextIO] = None,
        install_signals: bool = True,
        selector: Callable = select.select,
    ) -> None:
        self.config = config
        self.console = console or sys.stdout
        self.transport = Transport(config.peer_ip, config.send_port, config.listen_port)
        self.terminal = TerminalController(keyboard_fd)
        self.shutdown = ShutdownSignal()
        self.loop = DuplexLoop(
            self.transport, self.terminal, self.shutdown,
            keyboard_fd=keyboard_fd, out=out, selector=selector,
        )
        self.install_signals = install_signals
        self._cleaned = False

    # ================================================================== main ===
    def start(self) -> int:
        """Run until Ctrl‑C, end of input, or a fatal error; return exit status."""
        self._say("Talker is starting...")
        try:
            self.transport.open()
            self.terminal.capture_initial()
            if self.install_signals:
                self.shutdown.install()
            self._say(
                f"Listening on {get_local_ip()}:{self.transport.listen_port}, "
                f"talking to {self.config.peer_ip}:{self.config.send_port}"
            )
            self._say("Ctrl + C to exit.")
            self.loop.run()
        except (SetupFailure, RuntimeFailure) as exc:
            LOG.error("%s", exc)
            self.cleanup()
            return exc.exit_code

        if self.loop.eof:
            LOG.info("End of input")
        self.cleanup()
        self._say("Exiting...", colour=Fore.GREEN)
        return 0

    def cleanup(self) -> None:
        """Restore the terminal and release both sockets.  Runs once."""
        if self._cleaned:
            return
        self._cleaned = True
        self._say("\nCleaning up...")
        try:
            self.terminal.restore()
        except TalkerError as exc:
            LOG.error("%s", exc)
        finally:
            self.transport.close()
            self.shutdown.uninstall()

    def _say(self, text: str, colour: str = Fore.CYAN) -> None:
        print(f"{colour}{text}{Style.RESET_ALL}", file=self.console, flush=True)


# ======================================================================
#  Command‑line entry point
# ======================================================================

def run(argv: Optional[List[str]] = None) -> int:
    """Parse *argv*, run a session, return the process exit status."""
    parser = build_parser()
    try:
        config = parse_config(argv, parser)
    except (UsageError, ValidationError) as exc:
        print(f"{Fore.RED}{exc}{Style.RESET_ALL}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return exc.exit_code

    configure_logging(config.debug, config.log_file)
    return Talker(config).start()


def main() -> None:
    init(autoreset=True)               # Strips colours when not on a tty
    sys.exit(run())


if __name__ == "__main__":
    main()

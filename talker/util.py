#!/usr/bin/env python3
"""Logging setup **and** a helper that discovers our outward‑facing IP address."""

from __future__ import annotations
import logging                           # Python stdlib logging framework
import socket                            # Needed for IP detection
import sys                               # For the stderr handle
from logging.handlers import RotatingFileHandler
from typing import Optional

__all__ = ["LOG", "configure_logging", "get_local_ip"]

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(message)s"
LOG_DATEFMT = "%H:%M:%S"

# Named logger shared by every module:
#     from talker.util import LOG
# Handlers are only attached by configure_logging(), called from main().
LOG = logging.getLogger("talker")

# ----------------------------------------------------------------------
# configure_logging() attaches console (+ optional rotating file) output.
# stdout belongs to the chat itself, so diagnostics go to stderr.
# ----------------------------------------------------------------------

def configure_logging(debug: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """Return the "talker" logger with handlers attached (INFO, or DEBUG)."""

    LOG.setLevel(logging.DEBUG if debug else logging.INFO)
    LOG.propagate = False

    # Calling twice (tests, embedding) must not duplicate every line.
    for handler in list(LOG.handlers):
        LOG.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter(LOG_FORMAT, LOG_DATEFMT)

    # ----- Console handler (stderr) -----
    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(fmt)
    LOG.addHandler(sh)

    # ----- Rotating file handler -----
    # Rotates once file hits ±1 MiB, keeps 3 backups ⇒ log ≲ 4 MiB on disk.
    if log_file:
        fh = RotatingFileHandler(
            log_file,
            maxBytes=1_048_576,
            backupCount=3,
            encoding="utf-8",
        )
        fh.setFormatter(fmt)
        LOG.addHandler(fh)

    return LOG

# ----------------------------------------------------------------------
# best‑effort outward IP discovery (no external calls, works offline)
# ----------------------------------------------------------------------

def get_local_ip() -> str:
    """Return the host's primary IP, fallback to 127.0.0.1 on failure."""

    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)  # UDP socket ≠ connect
    try:
        # connect() on UDP sends nothing; it only makes the OS pick a source IP.
        sock.connect(("8.8.8.8", 80))
        return sock.getsockname()[0]            # (<chosen‑ip>, <port>) tuple
    except OSError:
        return "127.0.0.1"                      # Either offline or no NIC
    finally:
        sock.close()

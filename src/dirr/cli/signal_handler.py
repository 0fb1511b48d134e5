"""Signal handling utilities for the dirr CLI.

Listings are often piped into pagers or ``head``; these handlers record a closed
pipe (SIGPIPE) or Ctrl+C (SIGINT) so the CLI can stop writing and exit with the
conventional status instead of printing a traceback.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Optional

HAS_SIGPIPE = hasattr(signal, "SIGPIPE")


class SignalHandler:
    """Records SIGPIPE and SIGINT so that output can be stopped cleanly.

    Each handler fires once: after recording the signal it restores the handler
    that was installed before, so a second Ctrl+C behaves as usual.

    Attributes:
        sigpipe_received: Event that is set when a SIGPIPE signal is received.
        sigint_received: Event that is set when a SIGINT signal is received.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self.original_sigpipe_handler: Any = signal.getsignal(signal.SIGPIPE) if HAS_SIGPIPE else None
        self.original_sigint_handler: Any = signal.getsignal(signal.SIGINT)

    @property
    def interrupted(self) -> bool:
        """Whether either signal has been received."""
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()
        signal.signal(signal.SIGPIPE, self.original_sigpipe_handler)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigint_received.set()
        signal.signal(signal.SIGINT, self.original_sigint_handler)

    def exit_code(self) -> Optional[int]:
        """Conventional exit status for the received signal, if any."""
        if self.sigpipe_received.is_set():
            return 141
        if self.sigint_received.is_set():
            return 130
        return None


# Shared by the writer and the entry point
signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Install the SIGPIPE (where available) and SIGINT handlers."""
    if HAS_SIGPIPE:
        signal.signal(signal.SIGPIPE, signal_handler.handle_sigpipe)
    signal.signal(signal.SIGINT, signal_handler.handle_sigint)


def cleanup() -> None:
    """Silence stdout at exit after an interruption.

    Python flushes stdout during shutdown; on a closed pipe that flush would print
    an error, so stdout is pointed at the null device first.
    """
    if signal_handler.interrupted:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)

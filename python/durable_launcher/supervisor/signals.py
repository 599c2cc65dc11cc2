"""Absorbs termination signals aimed at the supervisor process."""

import logging
import signal
from typing import Any, Dict, Tuple

ABSORBED_SIGNALS: Tuple[signal.Signals, ...] = (
    signal.SIGINT,
    signal.SIGTERM,
    signal.SIGHUP,
)


class SignalAbsorber:
    """Logs SIGINT, SIGTERM and SIGHUP instead of dying from them.

    The supervisor is usually started over a remote shell, which sends a
    hangup when the calling side disconnects. Nothing is forwarded to the
    script, which lives in its own session and handles its signals itself.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._original_handlers: Dict[int, Any] = {}

    def setup(self) -> None:
        """Install the handler. Must be called from the main thread."""
        for sig in ABSORBED_SIGNALS:
            self._original_handlers[sig] = signal.signal(sig, self._handle_signal)

    def restore(self) -> None:
        """Put back the handlers that were active before :meth:`setup`."""
        for sig, handler in self._original_handlers.items():
            signal.signal(sig, handler)
        self._original_handlers.clear()

    def _handle_signal(self, signum: int, frame) -> None:
        self.logger.info(f"(sig catcher) caught: {signal.Signals(signum).name}")

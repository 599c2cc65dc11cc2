import threading
from typing import Optional


class CompletionSignal:
    """One-shot notification that the supervised script has finished.

    The launcher fires it once the result file is written; the heartbeat
    polls it between touches of the log file.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def fire(self) -> None:
        """Mark the script as finished. Firing again has no effect."""
        self._event.set()

    def fired(self) -> bool:
        """Non-blocking check of whether the signal has fired."""
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the signal fires or ``timeout`` seconds pass.

        Returns:
            True if the signal has fired
        """
        return self._event.wait(timeout)

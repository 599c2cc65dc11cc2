"""Liveness heartbeat: keeps touching the log file while the script runs."""

import logging
import os

from .completion import CompletionSignal
from .models import DEFAULT_HEARTBEAT_INTERVAL


class HeartbeatMonitor:
    """Refreshes the log file's mtime until the completion signal fires.

    An external poller decides whether the job is still alive by comparing
    the log file's mtime against a staleness threshold of its own.
    """

    def __init__(
        self,
        control_dir: str,
        result_path: str,
        log_path: str,
        completion: CompletionSignal,
        logger: logging.Logger,
        interval: float = DEFAULT_HEARTBEAT_INTERVAL,
    ):
        self.control_dir = control_dir
        self.result_path = result_path
        self.log_path = log_path
        self.completion = completion
        self.logger = logger
        self.interval = interval
        self.touches = 0

    def should_run(self) -> bool:
        """Check the preconditions that are evaluated once, before looping."""
        if not os.path.exists(self.control_dir):
            self.logger.error(f"Control directory does not exist: {self.control_dir}")
            return False
        if os.path.exists(self.result_path):
            self.logger.warning(
                f"Result file already exists, stopping heartbeat: {self.result_path}"
            )
            return False
        return True

    def touch(self) -> bool:
        """Set the log file's access and modification times to now."""
        try:
            os.utime(self.log_path, None)
        except OSError as e:
            self.logger.error(f"Failed to touch log file '{self.log_path}': {e}")
            return False
        self.touches += 1
        return True

    def run(self) -> None:
        if not self.should_run():
            return

        while True:
            if self.completion.fired():
                self.logger.debug("received script finished, exiting")
                return
            self.logger.debug("touch log")
            self.touch()
            # Sleeps for one period, waking early once the script has finished
            self.completion.wait(self.interval)

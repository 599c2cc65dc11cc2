"""
Shared state handed to every supervisor task.

The context owns the open log file and the four logical log streams written
into it:

- main: start-up details and absorbed signals
- launcher: how the script was started and how it ended
- heartbeat: liveness touches of the log file
- script: failures that the job's owner needs to see (always recorded)

The first three only record warnings and errors unless debug is enabled.
"""

import logging
from dataclasses import dataclass
from typing import IO

from ..logging_config import get_stream_logger, release_stream_logger


@dataclass
class SupervisorContext:
    """Log stream handles for one supervisor run."""

    log_file: IO[str]
    main: logging.Logger
    launcher: logging.Logger
    heartbeat: logging.Logger
    script: logging.Logger

    @classmethod
    def create(cls, log_file: IO[str], debug: bool = False) -> "SupervisorContext":
        """Build the log streams on top of an already open log file."""
        diagnostic_level = logging.DEBUG if debug else logging.WARNING
        return cls(
            log_file=log_file,
            main=get_stream_logger("main", log_file, diagnostic_level),
            launcher=get_stream_logger("launcher", log_file, diagnostic_level),
            heartbeat=get_stream_logger("heartbeat", log_file, diagnostic_level),
            script=get_stream_logger("script", log_file, logging.INFO),
        )

    def close(self) -> None:
        """Detach the log streams and close the log file."""
        for logger in (self.main, self.launcher, self.heartbeat, self.script):
            release_stream_logger(logger)
        self.log_file.close()


def open_log_file(log_path: str) -> IO[str]:
    """Create (or truncate) the shared log file.

    Raises:
        OSError: If the file cannot be created
    """
    return open(log_path, "w", encoding="utf-8", buffering=1)

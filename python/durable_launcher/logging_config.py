"""Logging configuration for the durable launcher."""

import logging
import os
import sys
from typing import IO, Union

LOG_FORMAT = "[%(levelname)s] %(name)s - %(filename)s:%(lineno)d: %(message)s"
FILE_LOG_FORMAT = "%(asctime)s " + LOG_FORMAT


def parse_level(level: Union[str, int]) -> int:
    """Convert a level name or numeric string into a logging level.

    Raises:
        ValueError: If the level name is not registered with ``logging``.
    """
    if isinstance(level, int):
        return level
    level = level.strip().upper()
    if level.isdigit():
        return int(level)
    if level == "WARN":
        level = "WARNING"
    value = logging.getLevelName(level)
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: '{level}'")
    return value


def get_logger(name: str = "durable_launcher") -> logging.Logger:
    """Get a configured logger for the package.

    The logger uses DURABLE_LAUNCHER_LOG_LEVEL (or LOG_LEVEL) to determine the log level.
    If not set, defaults to ERROR level, which effectively disables most package logging.

    This logger writes to stdout and is only meant for code that runs before
    the supervisor has detached (argument parsing, configuration).

    Returns:
        Configured logger instance for the package.
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        level = os.getenv(
            "DURABLE_LAUNCHER_LOG_LEVEL", os.getenv("LOG_LEVEL", "ERROR")
        )

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

        logger.setLevel(parse_level(level))

        # Prevent propagation to avoid duplicate logs
        logger.propagate = False

    return logger


def get_stream_logger(
    stream: str, target: IO[str], level: Union[str, int] = logging.INFO
) -> logging.Logger:
    """Get a logger that writes one named stream into the shared log file.

    Unlike :func:`get_logger`, any handlers left over from a previous run are
    replaced, so the returned logger always writes to ``target``.

    Args:
        stream: Stream name, e.g. ``main``, ``launcher``, ``heartbeat``
        target: Open text file the records are written to
        level: Minimum level that reaches ``target``

    Returns:
        Logger named ``durable_launcher.<stream>``
    """
    logger = logging.getLogger(f"durable_launcher.{stream}")

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = logging.StreamHandler(target)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(parse_level(level))
    logger.propagate = False

    return logger


def release_stream_logger(logger: logging.Logger) -> None:
    """Flush and detach every handler of a stream logger."""
    for handler in list(logger.handlers):
        handler.flush()
        logger.removeHandler(handler)
        handler.close()


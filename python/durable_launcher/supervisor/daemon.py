"""Self re-invocation that frees the supervisor from its own parent."""

import subprocess
import sys
from typing import List

from .models import LaunchConfig

# Module run by ``python -m`` when the supervisor re-invokes itself
ENTRY_MODULE = "durable_launcher"


class DaemonizeError(RuntimeError):
    """Raised when the detached copy of the supervisor cannot be started."""

    pass


def detached_command(config: LaunchConfig) -> List[str]:
    """Build the argv of the detached copy: same flags, without ``-daemon``."""
    return [sys.executable, "-m", ENTRY_MODULE, *config.to_argv(include_daemon=False)]


def detach(command: List[str]) -> subprocess.Popen:
    """Spawn ``command`` in a new session with no inherited standard streams."""
    return subprocess.Popen(
        command,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


def daemonize(config: LaunchConfig) -> int:
    """Re-invoke the supervisor detached; the caller must exit right after.

    A flag is used rather than checking the parent pid, since the parent can
    legitimately be pid 1 (a container without an init process).

    Returns:
        Process id of the detached supervisor

    Raises:
        DaemonizeError: If the detached process could not be started
    """
    try:
        process = detach(detached_command(config))
    except (OSError, ValueError, subprocess.SubprocessError) as e:
        raise DaemonizeError(f"Double launch failed: {e}") from e
    return process.pid

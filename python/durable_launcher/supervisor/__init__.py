"""
Detached script supervision.

This module launches a script in its own session, keeps a heartbeat on the
log file while it runs, and records the exit status in a result file that an
external orchestrator can poll.
"""

from .completion import CompletionSignal
from .context import SupervisorContext, open_log_file
from .daemon import DaemonizeError, daemonize
from .heartbeat import HeartbeatMonitor
from .launcher import ScriptLauncher, build_command, build_environment
from .models import ConfigurationError, LaunchConfig, build_config
from .result import LAUNCH_FAILED, write_result
from .runner import run_supervisor
from .signals import SignalAbsorber

__all__ = [
    "LaunchConfig",
    "ConfigurationError",
    "build_config",
    "CompletionSignal",
    "SupervisorContext",
    "open_log_file",
    "ScriptLauncher",
    "build_command",
    "build_environment",
    "HeartbeatMonitor",
    "SignalAbsorber",
    "DaemonizeError",
    "daemonize",
    "LAUNCH_FAILED",
    "write_result",
    "run_supervisor",
]

"""Runs the launcher and the heartbeat side by side and waits for both."""

import os
import threading

from .completion import CompletionSignal
from .context import SupervisorContext
from .heartbeat import HeartbeatMonitor
from .launcher import ScriptLauncher
from .models import LaunchConfig
from .signals import SignalAbsorber


def run_supervisor(config: LaunchConfig, context: SupervisorContext) -> None:
    """Supervise one script run to completion.

    Signals are absorbed for the whole run; the function returns only after
    the result file has been handled and the heartbeat has stopped.
    """
    logger = context.main
    for field_name, value in config.model_dump().items():
        logger.debug(f"{field_name}: {value}")
    logger.debug(f"Main pid is: {os.getpid()}")
    logger.debug(f"Parent pid is: {os.getppid()}")

    absorber = SignalAbsorber(logger)
    absorber.setup()
    try:
        completion = CompletionSignal()
        launcher = ScriptLauncher(config, context, completion)
        heartbeat = HeartbeatMonitor(
            config.control_dir,
            config.result_path,
            config.log_path,
            completion,
            context.heartbeat,
            interval=config.heartbeat_interval,
        )

        threads = [
            threading.Thread(target=launcher.run, name="launcher"),
            threading.Thread(target=heartbeat.run, name="heartbeat"),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
    finally:
        absorber.restore()

    logger.debug("done.")

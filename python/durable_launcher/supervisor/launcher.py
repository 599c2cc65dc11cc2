"""
Script launcher.

Starts the supervised script in a session of its own, waits for it and
records how it ended. Whatever happens, the completion signal is fired as the
very last step so the heartbeat never outlives the script.
"""

import os
import subprocess
from typing import IO, Dict, List, Optional

from .completion import CompletionSignal
from .context import SupervisorContext
from .models import LaunchConfig
from .result import LAUNCH_FAILED, exit_code_from_returncode, write_result

# Interpreter flags: trace each command, stop at the first failing one.
STRICT_SHELL_FLAGS = "-xe"


def build_command(script_path: str, interpreter: Optional[str] = None) -> List[str]:
    """Build the argv used to start the script."""
    if interpreter:
        return [interpreter, STRICT_SHELL_FLAGS, script_path]
    return [script_path]


def build_environment(cookie_name: str, cookie_value: str) -> Dict[str, str]:
    """Inherit the supervisor's environment and add the cookie variable."""
    env = dict(os.environ)
    env[cookie_name] = cookie_value
    return env


def spawn_in_new_session(
    command: List[str],
    env: Dict[str, str],
    stdout: IO,
    stderr,
) -> subprocess.Popen:
    """Start ``command`` as the leader of a new session.

    The child has no controlling terminal and is outside the supervisor's
    process group, so hangups and interrupts aimed at either never reach it.
    """
    return subprocess.Popen(
        command,
        env=env,
        stdin=subprocess.DEVNULL,
        stdout=stdout,
        stderr=stderr,
        start_new_session=True,
    )


class ScriptLauncher:
    """Runs the script and records its exit status."""

    def __init__(
        self,
        config: LaunchConfig,
        context: SupervisorContext,
        completion: CompletionSignal,
    ):
        self.config = config
        self.context = context
        self.completion = completion
        self.process: Optional[subprocess.Popen] = None

    def run(self) -> int:
        """Launch, wait, record the result and release the heartbeat.

        Returns:
            The exit code written (or attempted) to the result file
        """
        try:
            try:
                exit_code = self._launch_and_wait()
            except Exception as e:
                self.context.script.error(
                    f"Failed to launch '{self.config.script_path}': {e}"
                )
                exit_code = LAUNCH_FAILED
            if write_result(self.config.result_path, exit_code, self.context.script):
                self.context.launcher.debug(
                    f"Wrote exit code {exit_code} to {self.config.result_path}"
                )
            return exit_code
        finally:
            self.completion.fire()
            self.context.launcher.debug("Signaled script exit")

    def _launch_and_wait(self) -> int:
        logger = self.context.launcher
        command = build_command(self.config.script_path, self.config.interpreter)
        env = build_environment(self.config.cookie_name, self.config.cookie_value)
        for i, arg in enumerate(command):
            logger.debug(f"args {i}: {arg}")

        output_file = None
        if self.config.output_path:
            try:
                output_file = open(self.config.output_path, "wb")
            except OSError as e:
                self.context.script.error(
                    f"Cannot create output file '{self.config.output_path}': {e}"
                )
                return LAUNCH_FAILED

        try:
            if output_file is not None:
                stdout, stderr = output_file, self.context.log_file
            else:
                stdout, stderr = self.context.log_file, subprocess.STDOUT

            try:
                self.context.log_file.flush()
                self.process = spawn_in_new_session(command, env, stdout, stderr)
            except (OSError, ValueError, subprocess.SubprocessError) as e:
                self.context.script.error(
                    f"Failed to start '{self.config.script_path}': {e}"
                )
                return LAUNCH_FAILED

            logger.info(f"launched {self.process.pid}")
            returncode = self.process.wait()
        finally:
            if output_file is not None:
                output_file.close()

        exit_code = exit_code_from_returncode(returncode)
        if returncode < 0:
            logger.warning(
                f"script killed by signal {-returncode}, recording exit code {exit_code}"
            )
        logger.info(f"script exit code: {exit_code}")
        return exit_code

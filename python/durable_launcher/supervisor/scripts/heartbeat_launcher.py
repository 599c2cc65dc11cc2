#!/usr/bin/env python3
"""
Heartbeat Launcher CLI Script

Launches a script in a new session, touches the log file while the script
runs, and writes the script's exit code to the result file once it ends.
Nothing is written to stdout/stderr after start-up, so the supervisor keeps
running when the process that started it goes away.

Usage:
    heartbeat-launcher -controldir=DIR -result=FILE -log=FILE \\
        -cookiename=NAME -cookieval=VALUE -script=FILE \\
        [-shell=INTERPRETER] [-output=FILE] [-debug] [-daemon]

Example:
    heartbeat-launcher -controldir=/ws/.ctl/ -result=/ws/.ctl/result.txt \\
        -log=/ws/.ctl/log.txt -cookiename=JOB_COOKIE -cookieval=abc123 \\
        -script=/ws/.ctl/script.sh -shell=/bin/sh -daemon
"""

import argparse
import sys
from typing import List, Optional

from durable_launcher.supervisor.context import SupervisorContext, open_log_file
from durable_launcher.supervisor.daemon import DaemonizeError, daemonize
from durable_launcher.supervisor.models import (
    ConfigurationError,
    LaunchConfig,
    build_config,
    missing_required,
)
from durable_launcher.supervisor.runner import run_supervisor


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="heartbeat-launcher",
        description="Launch a script detached and record its liveness and exit status",
    )
    parser.add_argument(
        "-controldir", "--controldir", dest="control_dir", help="working directory"
    )
    parser.add_argument(
        "-result", "--result", dest="result_path", help="full path of the result file"
    )
    parser.add_argument(
        "-log", "--log", dest="log_path", help="full path of the log file"
    )
    parser.add_argument(
        "-cookiename",
        "--cookiename",
        dest="cookie_name",
        help="name of the environment variable tagging the script's processes",
    )
    parser.add_argument(
        "-cookieval",
        "--cookieval",
        dest="cookie_value",
        help="value of the environment variable tagging the script's processes",
    )
    parser.add_argument(
        "-script",
        "--script",
        dest="script_path",
        help="full path of the script to be launched",
    )
    parser.add_argument(
        "-shell", "--shell", dest="interpreter", help="(optional) interpreter to use"
    )
    parser.add_argument(
        "-output",
        "--output",
        dest="output_path",
        help="(optional) if recording output, full path of the output file",
    )
    parser.add_argument(
        "-debug", "--debug", action="store_true", help="noisy output to log"
    )
    parser.add_argument(
        "-daemon",
        "--daemon",
        action="store_true",
        help="immediately free the launcher from its parent process",
    )
    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> LaunchConfig:
    """
    Parse command-line arguments into a validated configuration.

    Raises:
        ConfigurationError: If required flags are missing or values are invalid
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    values = vars(args)

    if missing_required(values):
        parser.print_usage(sys.stderr)

    return build_config(values)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the heartbeat-launcher CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = parse_arguments(argv)
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    # Double launch to free the supervisor from its parent process
    if config.daemon:
        try:
            daemonize(config)
        except DaemonizeError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1
        return 0

    try:
        log_file = open_log_file(config.log_path)
    except OSError as e:
        print(f"LAUNCHER: {e}", file=sys.stderr)
        return 1

    context = SupervisorContext.create(log_file, debug=config.debug)
    try:
        run_supervisor(config, context)
    finally:
        context.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Durable launcher.

Runs a script detached from the process that started it, proves liveness by
touching a log file, and records the script's exit code in a result file.

Supervisor components live in :mod:`durable_launcher.supervisor`.
"""

__version__ = "0.1.0"

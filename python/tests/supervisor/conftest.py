"""Shared fixtures for supervisor unit tests."""

import pytest

from durable_launcher.supervisor.context import SupervisorContext, open_log_file
from durable_launcher.supervisor.models import LaunchConfig


@pytest.fixture
def control_dir(tmp_path):
    """Existing control directory holding the result and log files."""
    path = tmp_path / "control"
    path.mkdir()
    return path


@pytest.fixture
def make_script(tmp_path):
    """Write an executable script and return its path."""

    def _make(body, name="script.sh", shebang="#!/bin/sh", executable=True):
        path = tmp_path / name
        path.write_text(f"{shebang}\n{body}\n")
        path.chmod(0o755 if executable else 0o644)
        return str(path)

    return _make


@pytest.fixture
def make_config(control_dir):
    """Build a LaunchConfig pointing at the control directory."""

    def _make(script_path, **overrides):
        values = {
            "control_dir": str(control_dir),
            "result_path": str(control_dir / "result.txt"),
            "log_path": str(control_dir / "log.txt"),
            "cookie_name": "JOB_COOKIE",
            "cookie_value": "cookie-123",
            "script_path": script_path,
            "heartbeat_interval": 0.05,
        }
        values.update(overrides)
        return LaunchConfig(**values)

    return _make


@pytest.fixture
def open_context():
    """Open a SupervisorContext on a config's log file; closed at teardown."""
    contexts = []

    def _open(config):
        context = SupervisorContext.create(
            open_log_file(config.log_path), debug=config.debug
        )
        contexts.append(context)
        return context

    yield _open

    for context in contexts:
        context.close()

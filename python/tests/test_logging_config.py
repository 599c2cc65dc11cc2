"""Unit tests for logging_config module."""

import io
import logging
import os
from unittest.mock import patch

import pytest

from durable_launcher.logging_config import (
    get_logger,
    get_stream_logger,
    parse_level,
    release_stream_logger,
)


class TestParseLevel:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("DEBUG", logging.DEBUG),
            ("info", logging.INFO),
            ("warn", logging.WARNING),
            (" Error ", logging.ERROR),
            ("10", 10),
            (logging.CRITICAL, logging.CRITICAL),
        ],
    )
    def test_valid_levels(self, value, expected):
        assert parse_level(value) == expected

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            parse_level("chatty")


class TestGetLogger:
    """Test get_logger function."""

    def test_default_error_level(self):
        """Test that logger defaults to ERROR level when no env var set."""
        with patch.dict(os.environ, {}, clear=True):
            test_logger = get_logger("test_default_logger")
            try:
                assert len(test_logger.handlers) > 0
                assert test_logger.level == logging.ERROR
            finally:
                test_logger.handlers.clear()

    def test_package_log_level_debug(self):
        """Test that DURABLE_LAUNCHER_LOG_LEVEL=DEBUG sets DEBUG level."""
        with patch.dict(os.environ, {"DURABLE_LAUNCHER_LOG_LEVEL": "DEBUG"}):
            test_logger = get_logger("test_debug_logger")
            try:
                assert test_logger.level == logging.DEBUG
            finally:
                test_logger.handlers.clear()

    def test_log_level_fallback(self):
        """Test that LOG_LEVEL is used when DURABLE_LAUNCHER_LOG_LEVEL not set."""
        with patch.dict(os.environ, {"LOG_LEVEL": "info"}, clear=True):
            test_logger = get_logger("test_fallback_logger")
            try:
                assert test_logger.level == logging.INFO
            finally:
                test_logger.handlers.clear()

    def test_package_level_takes_priority(self):
        with patch.dict(
            os.environ,
            {"DURABLE_LAUNCHER_LOG_LEVEL": "WARNING", "LOG_LEVEL": "DEBUG"},
        ):
            test_logger = get_logger("test_priority_logger")
            try:
                assert test_logger.level == logging.WARNING
            finally:
                test_logger.handlers.clear()

    def test_logger_not_reconfigured_if_already_configured(self):
        """Test that logger is not reconfigured if it already has handlers."""
        test_logger = get_logger("test_reconfig_logger")
        try:
            initial_handler_count = len(test_logger.handlers)

            test_logger_again = get_logger("test_reconfig_logger")

            assert test_logger is test_logger_again
            assert len(test_logger_again.handlers) == initial_handler_count
            assert test_logger.propagate is False
        finally:
            test_logger.handlers.clear()


class TestStreamLogger:
    def test_writes_to_target(self):
        target = io.StringIO()
        logger = get_stream_logger("test_stream", target, logging.INFO)
        try:
            logger.info("hello")
            logger.debug("hidden")
        finally:
            release_stream_logger(logger)

        output = target.getvalue()
        assert "[INFO] durable_launcher.test_stream" in output
        assert "hello" in output
        assert "hidden" not in output

    def test_replaces_previous_target(self):
        first, second = io.StringIO(), io.StringIO()
        get_stream_logger("test_replace", first)
        logger = get_stream_logger("test_replace", second)
        try:
            logger.warning("only second")
        finally:
            release_stream_logger(logger)

        assert first.getvalue() == ""
        assert "only second" in second.getvalue()
        assert len(logger.handlers) == 0

    def test_release_leaves_target_open(self):
        target = io.StringIO()
        logger = get_stream_logger("test_release", target)

        release_stream_logger(logger)

        assert not target.closed
        assert logger.handlers == []

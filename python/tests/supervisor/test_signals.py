"""Unit tests for the signal absorber."""

import os
import signal
import time
from unittest.mock import Mock, patch

import pytest

from durable_launcher.supervisor.signals import ABSORBED_SIGNALS, SignalAbsorber


def wait_until(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


class TestSignalAbsorber:
    def test_init(self):
        logger = Mock()
        absorber = SignalAbsorber(logger)

        assert absorber.logger == logger
        assert absorber._original_handlers == {}

    @patch("signal.signal")
    def test_setup(self, mock_signal):
        """Handlers are installed for SIGINT, SIGTERM and SIGHUP."""
        originals = [Mock(), Mock(), Mock()]
        mock_signal.side_effect = originals
        absorber = SignalAbsorber(Mock())

        absorber.setup()

        assert mock_signal.call_count == 3
        installed = [c[0][0] for c in mock_signal.call_args_list]
        assert installed == [signal.SIGINT, signal.SIGTERM, signal.SIGHUP]
        for sig, original in zip(ABSORBED_SIGNALS, originals):
            assert absorber._original_handlers[sig] is original

    @patch("signal.signal")
    def test_restore(self, mock_signal):
        original = Mock()
        absorber = SignalAbsorber(Mock())
        absorber._original_handlers = {signal.SIGHUP: original}

        absorber.restore()

        mock_signal.assert_called_once_with(signal.SIGHUP, original)
        assert absorber._original_handlers == {}

    @pytest.mark.parametrize("sig", [signal.SIGHUP, signal.SIGTERM, signal.SIGINT])
    def test_signal_is_logged_not_fatal(self, sig):
        logger = Mock()
        absorber = SignalAbsorber(logger)
        original = signal.getsignal(sig)

        absorber.setup()
        try:
            os.kill(os.getpid(), sig)
            assert wait_until(lambda: logger.info.called)
        finally:
            absorber.restore()

        assert sig.name in logger.info.call_args[0][0]
        assert signal.getsignal(sig) == original

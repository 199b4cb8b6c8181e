"""
Unit tests for ConsoleActivationNotifier adapter.

Tests verify the console notifier implements the ActivationNotifier protocol
and logs activation tokens in the expected format.
"""

import logging

import pytest

from src.adapters.smtp.console import ConsoleActivationNotifier
from src.domain.ports import ActivationNotifier


class TestConsoleActivationNotifierProtocol:
    def test_implements_activation_notifier_protocol(self) -> None:
        notifier = ConsoleActivationNotifier()

        def accepts_notifier(n: ActivationNotifier) -> None:
            pass

        assert callable(notifier.send_activation)
        accepts_notifier(notifier)

    def test_no_explicit_inheritance(self) -> None:
        """ConsoleActivationNotifier uses structural subtyping, not inheritance."""
        assert ConsoleActivationNotifier.__bases__ == (object,)


class TestSendActivation:
    def test_logs_one_info_record(self, caplog: pytest.LogCaptureFixture) -> None:
        notifier = ConsoleActivationNotifier()

        with caplog.at_level(logging.INFO):
            notifier.send_activation("user1@mail.com", "0123456789abcdef")

        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.INFO

    def test_log_format(self, caplog: pytest.LogCaptureFixture) -> None:
        notifier = ConsoleActivationNotifier()

        with caplog.at_level(logging.INFO):
            notifier.send_activation("user1@mail.com", "0123456789abcdef")

        assert caplog.records[0].getMessage() == (
            "[ACTIVATION] Email: user1@mail.com Token: 0123456789abcdef"
        )

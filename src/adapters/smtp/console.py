"""
Console notifier adapter - Implements ActivationNotifier protocol.

This module provides a console-based implementation of the domain's
activation notifier port, logging activation tokens for demo purposes.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleActivationNotifier:
    """
    Implements ActivationNotifier protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints activation tokens to stdout.
    """

    def send_activation(self, email: str, token: str) -> None:
        """
        Log activation message to console (simulates email delivery).

        In production, this would be replaced with an SMTP adapter.
        The token is logged at INFO level to be visible in container logs.

        Args:
            email: Recipient email address
            token: Activation token
        """
        logger.info("[ACTIVATION] Email: %s Token: %s", email, token)

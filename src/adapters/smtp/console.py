"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging messages to stdout for development.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - never fails, nothing leaves the process.
    """

    def send(self, to_address: str, subject: str, html_body: str) -> None:
        """
        Log the message to console (simulates email delivery).

        Logged at INFO level so reset codes are visible in container logs.

        Args:
            to_address: Recipient email address
            subject: Message subject
            html_body: HTML message body
        """
        logger.info("[EMAIL] To: %s Subject: %s Body: %s", to_address, subject, html_body)

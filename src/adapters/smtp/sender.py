"""
SMTP email sender adapter - Implements EmailSender protocol.

Delivers HTML mail through an SMTP relay with STARTTLS and login.
Connection, authentication and protocol failures are raised as the
domain's NotificationError; retry policy, if any, belongs to the relay.
"""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from src.domain.exceptions import NotificationError

logger = logging.getLogger(__name__)


class SmtpEmailSender:
    """
    Implements EmailSender protocol via smtplib.

    A new SMTP connection is opened per message.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender_email: str,
        sender_name: str = "",
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._sender_email = sender_email
        self._sender_name = sender_name
        self._use_tls = use_tls
        self._timeout = timeout

    def send(self, to_address: str, subject: str, html_body: str) -> None:
        """
        Send an HTML message.

        Args:
            to_address: Recipient email address
            subject: Message subject
            html_body: HTML message body

        Raises:
            NotificationError: If the relay cannot be reached or rejects the message
        """
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = formataddr((self._sender_name, self._sender_email))
        msg["To"] = to_address
        msg.attach(MIMEText(html_body, "html"))

        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
                if self._use_tls:
                    server.starttls()
                if self._username:
                    server.login(self._username, self._password)
                server.sendmail(self._sender_email, [to_address], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", to_address, e)
            raise NotificationError(f"Email delivery to {to_address} failed") from e

        logger.info("Email sent to %s: %s", to_address, subject)

"""
SMTP Email Adapter.

Sends plain-text emails through an SMTP server with STARTTLS.
Connection, protocol and message-formatting errors are reported as
FAILED results rather than raised.
"""

from __future__ import annotations

import logging
import smtplib
import ssl
from email.errors import MessageError
from email.mime.text import MIMEText
from email.utils import formatdate, make_msgid

from modion.core.ports.email import EmailAddress, EmailMessage, EmailResult

logger = logging.getLogger(__name__)


class SMTPEmailAdapter:
    """EmailPort implementation backed by smtplib."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        default_sender: str | None = None,
        use_tls: bool = True,
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.default_sender = default_sender or username or f"no-reply@{host}"
        self.use_tls = use_tls
        self.timeout = timeout

    def _build(self, message: EmailMessage) -> MIMEText:
        mime = MIMEText(message.body_text, "plain", "utf-8")
        sender = message.sender or EmailAddress(self.default_sender)
        mime["From"] = str(sender)
        mime["To"] = str(message.recipient)
        mime["Subject"] = message.subject
        mime["Date"] = formatdate(localtime=False)
        mime["Message-ID"] = make_msgid()
        return mime

    def send(self, message: EmailMessage) -> EmailResult:
        recipient = str(message.recipient)

        try:
            mime = self._build(message)
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls(context=ssl.create_default_context())
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(mime)
        except (MessageError, ValueError) as e:
            logger.error("Could not format email to %r: %s", recipient, e)
            return EmailResult.failed(recipient, str(e))
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP send to %s failed: %s", recipient, e)
            return EmailResult.failed(recipient, str(e))

        logger.info("Email sent to %s (%s)", recipient, message.subject)
        return EmailResult.success(recipient, message_id=mime["Message-ID"])

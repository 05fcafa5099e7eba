"""
Notification component.

Sends fixed-template acknowledgement emails through an EmailPort.
Unlike the port itself, a failed delivery here is an error: callers
treat it as a failure of the whole request.
"""

from __future__ import annotations

import logging

from modion.core.ports.email import (
    EmailAddress,
    EmailMessage,
    EmailPort,
    EmailResult,
    EmailSendError,
)

logger = logging.getLogger(__name__)

SIGNATURE = "Modion Team"

CONTACT_ACK_SUBJECT = "Thanks for Contacting Us"
SUBSCRIBE_ACK_SUBJECT = "Thanks for Subscribing!"


class NotificationError(EmailSendError):
    """An acknowledgement email could not be delivered."""

    pass


def render_contact_ack(name: str, subject: str) -> str:
    return (
        f"Hello {name},\n\n"
        f'Thank you for reaching out to us regarding "{subject}". '
        "We have received your message and will act accordingly.\n\n"
        f"{SIGNATURE}"
    )


def render_subscribe_ack() -> str:
    return (
        "Hi there,\n\n"
        "Thanks for subscribing to our website! We'll notify you when we have "
        "new updates, promotions, or exciting content.\n\n"
        f"{SIGNATURE}"
    )


def send_notification(to: str, subject: str, body_text: str, email: EmailPort) -> EmailResult:
    """
    Send a plain-text email.

    Raises:
        NotificationError: If the email adapter reports a failed delivery
    """
    message = EmailMessage(
        recipient=EmailAddress(to),
        subject=subject,
        body_text=body_text,
    )
    result = email.send(message)
    if not result.ok:
        logger.error("Email to %s failed: %s", to, result.error)
        raise NotificationError(to, result.error or "unknown error")
    return result

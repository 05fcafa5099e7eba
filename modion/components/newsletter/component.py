"""
Newsletter component.

Functional core for email subscriptions.

Key behaviors:
- Emails are trimmed and lowercased before lookup and storage
- A second subscription for the same address is rejected
- A thank-you email is sent after the subscriber is stored; a failed
  send fails the request (the subscriber row stays)
"""

from __future__ import annotations

import re

from modion.components.notify import (
    SUBSCRIBE_ACK_SUBJECT,
    NotificationError,
    render_subscribe_ack,
    send_notification,
)
from modion.core.ports.db import DuplicateKeyError, StorageError
from modion.core.ports.email import EmailPort
from modion.domain.entities import EmailSubscriber

from .models import SubscribeInput, SubscribeOutput, ValidateEmailOutput, ValidationError
from .ports import SubscriberRepoPort

# --- Email Validation Regex (RFC 5322 simplified) ---

EMAIL_REGEX = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@"
    r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$"
)


def validate_email(email: str | None) -> ValidateEmailOutput:
    """
    Validate and normalize an email address.

    Args:
        email: Email address to validate

    Returns:
        ValidateEmailOutput with the normalized address or errors
    """
    normalized = email.strip().lower() if email else ""

    if not normalized:
        return ValidateEmailOutput(
            is_valid=False,
            errors=[ValidationError("EMPTY_EMAIL", "Email is required", "email")],
        )

    if len(normalized) > 254:
        return ValidateEmailOutput(
            is_valid=False,
            errors=[ValidationError("EMAIL_TOO_LONG", "Email address is too long", "email")],
        )

    if not EMAIL_REGEX.match(normalized):
        return ValidateEmailOutput(
            is_valid=False,
            errors=[ValidationError("INVALID_FORMAT", "Invalid email format", "email")],
        )

    return ValidateEmailOutput(is_valid=True, normalized_email=normalized)


def run(
    inp: SubscribeInput,
    repo: SubscriberRepoPort,
    email_sender: EmailPort,
) -> SubscribeOutput:
    """
    Subscribe an email address.

    Error codes: EMPTY_EMAIL, EMAIL_TOO_LONG, INVALID_FORMAT,
    ALREADY_SUBSCRIBED, UNEXPECTED.
    """
    validation = validate_email(inp.email)
    if not validation.is_valid or validation.normalized_email is None:
        return SubscribeOutput(success=False, errors=validation.errors)

    email = validation.normalized_email
    already = SubscribeOutput(
        success=False,
        already_subscribed=True,
        errors=[ValidationError("ALREADY_SUBSCRIBED", "You're already subscribed", "email")],
    )

    try:
        if repo.get_by_email(email):
            return already

        subscriber = repo.save(EmailSubscriber(email=email))
        send_notification(email, SUBSCRIBE_ACK_SUBJECT, render_subscribe_ack(), email_sender)
    except DuplicateKeyError:
        return already
    except (StorageError, NotificationError) as e:
        return SubscribeOutput(
            success=False,
            errors=[ValidationError("UNEXPECTED", str(e))],
        )

    return SubscribeOutput(success=True, subscriber=subscriber)

"""
Contact component.

Stores a contact message and acknowledges it by email. Both steps must
succeed for the request to succeed. The sender address is checked before
anything is stored, since it becomes a mail header.
"""

from __future__ import annotations

from modion.components.newsletter import validate_email
from modion.components.notify import (
    CONTACT_ACK_SUBJECT,
    NotificationError,
    render_contact_ack,
    send_notification,
)
from modion.core.ports.db import StorageError
from modion.core.ports.email import EmailPort
from modion.domain.entities import ContactMessage

from .models import ContactInput, ContactOutput
from .ports import ContactRepoPort


def run(inp: ContactInput, repo: ContactRepoPort, email_sender: EmailPort) -> ContactOutput:
    if not inp.name or not inp.email or not inp.subject or not inp.message:
        return ContactOutput(success=False, error="All fields are required.", code="missing_fields")

    validation = validate_email(inp.email)
    if not validation.is_valid or validation.normalized_email is None:
        return ContactOutput(
            success=False, error=validation.errors[0].message, code="invalid_email"
        )

    contact = ContactMessage(
        name=inp.name,
        email=validation.normalized_email,
        subject=inp.subject,
        message=inp.message,
    )
    try:
        repo.save(contact)
        send_notification(
            validation.normalized_email,
            CONTACT_ACK_SUBJECT,
            render_contact_ack(inp.name, inp.subject),
            email_sender,
        )
    except (StorageError, NotificationError) as e:
        return ContactOutput(success=False, error=str(e), code="unexpected")

    return ContactOutput(success=True, contact=contact)

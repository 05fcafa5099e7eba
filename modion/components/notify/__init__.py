"""Notification component - transactional email."""

from .component import (
    CONTACT_ACK_SUBJECT,
    SUBSCRIBE_ACK_SUBJECT,
    NotificationError,
    render_contact_ack,
    render_subscribe_ack,
    send_notification,
)

__all__ = [
    "CONTACT_ACK_SUBJECT",
    "SUBSCRIBE_ACK_SUBJECT",
    "NotificationError",
    "render_contact_ack",
    "render_subscribe_ack",
    "send_notification",
]

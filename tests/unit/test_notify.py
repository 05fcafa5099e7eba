import pytest

from modion.adapters.dev_email import DevEmailAdapter
from modion.components.notify import (
    NotificationError,
    render_contact_ack,
    render_subscribe_ack,
    send_notification,
)
from modion.core.ports.email import EmailStatus


def test_send_logs_with_dev_adapter():
    sender = DevEmailAdapter()
    result = send_notification("ann@example.com", "Hi", "Body", sender)

    assert result.status == EmailStatus.SKIPPED
    assert result.ok
    assert sender.get_emails_to("ann@example.com")[0].subject == "Hi"


def test_failed_delivery_raises():
    with pytest.raises(NotificationError) as exc_info:
        send_notification("ann@example.com", "Hi", "Body", DevEmailAdapter(fail_with="550 rejected"))

    assert exc_info.value.recipient == "ann@example.com"
    assert exc_info.value.error == "550 rejected"


def test_templates_are_signed():
    assert render_subscribe_ack().endswith("Modion Team")
    contact = render_contact_ack("Ann", "Pricing")
    assert contact.startswith("Hello Ann,")
    assert 'regarding "Pricing"' in contact
    assert contact.endswith("Modion Team")

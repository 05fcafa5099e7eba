from unittest.mock import Mock

import pytest

from modion.adapters.dev_email import DevEmailAdapter
from modion.components.contact import ContactInput, run
from modion.core.ports.db import StorageError


@pytest.fixture
def repo():
    repo = Mock()
    repo.save.side_effect = lambda contact: contact
    return repo


def contact_input(**overrides):
    data = {
        "name": "Ann",
        "email": "ann@example.com",
        "subject": "Collaboration",
        "message": "Hello there",
    }
    data.update(overrides)
    return ContactInput(**data)


@pytest.mark.parametrize("field", ["name", "email", "subject", "message"])
def test_all_fields_required(field, repo):
    result = run(contact_input(**{field: ""}), repo, DevEmailAdapter())
    assert not result.success
    assert result.code == "missing_fields"
    assert result.error == "All fields are required."
    repo.save.assert_not_called()


def test_stores_and_acknowledges(repo):
    sender = DevEmailAdapter()
    result = run(contact_input(), repo, sender)

    assert result.success
    stored = repo.save.call_args.args[0]
    assert stored.subject == "Collaboration"

    mail = sender.get_last_email()
    assert mail.recipient == "ann@example.com"
    assert mail.subject == "Thanks for Contacting Us"
    assert mail.body_text.startswith("Hello Ann,")
    assert '"Collaboration"' in mail.body_text


def test_storage_failure(repo):
    repo.save.side_effect = StorageError("database is locked")
    result = run(contact_input(), repo, DevEmailAdapter())
    assert result.code == "unexpected"


def test_email_failure(repo):
    result = run(contact_input(), repo, DevEmailAdapter(fail_with="refused"))
    assert result.code == "unexpected"
    assert "refused" in result.error


@pytest.mark.parametrize("email", ["not-an-email", "ann@example.com\r\nBcc: victim@evil.com"])
def test_rejects_malformed_sender_before_storing(email, repo):
    sender = DevEmailAdapter()
    result = run(contact_input(email=email), repo, sender)

    assert result.code == "invalid_email"
    assert result.error == "Invalid email format"
    repo.save.assert_not_called()
    assert sender.email_count == 0


def test_sender_is_normalized(repo):
    result = run(contact_input(email="  Ann@Example.com "), repo, DevEmailAdapter())
    assert result.contact.email == "ann@example.com"

from unittest.mock import Mock

import pytest

from modion.adapters.dev_email import DevEmailAdapter
from modion.components.newsletter import SubscribeInput, run, validate_email
from modion.core.ports.db import DuplicateKeyError, StorageError
from modion.domain.entities import EmailSubscriber


class MockSubscriberRepo:
    def __init__(self):
        self._by_email = {}

    def get_by_email(self, email):
        return self._by_email.get(email)

    def save(self, subscriber):
        if subscriber.email in self._by_email:
            raise DuplicateKeyError("UNIQUE constraint failed", key=subscriber.email)
        self._by_email[subscriber.email] = subscriber
        return subscriber


@pytest.fixture
def repo():
    return MockSubscriberRepo()


@pytest.fixture
def sender():
    return DevEmailAdapter()


# --- Validation ---


@pytest.mark.parametrize("email", [None, "", "   "])
def test_empty_email(email):
    result = validate_email(email)
    assert not result.is_valid
    assert result.errors[0].message == "Email is required"


@pytest.mark.parametrize("email", ["plainaddress", "a@b", "@x.com", "a b@x.com"])
def test_invalid_format(email):
    result = validate_email(email)
    assert result.errors[0].code == "INVALID_FORMAT"
    assert result.errors[0].message == "Invalid email format"


def test_too_long():
    result = validate_email("a" * 250 + "@x.com")
    assert result.errors[0].code == "EMAIL_TOO_LONG"


def test_normalizes():
    assert validate_email("  Reader@Example.COM ").normalized_email == "reader@example.com"


# --- Subscribe ---


def test_subscribe_stores_and_acknowledges(repo, sender):
    result = run(SubscribeInput(email=" Reader@Example.com"), repo, sender)

    assert result.success
    assert result.subscriber.email == "reader@example.com"
    assert repo.get_by_email("reader@example.com") is not None

    mail = sender.get_last_email()
    assert mail.recipient == "reader@example.com"
    assert mail.subject == "Thanks for Subscribing!"
    assert mail.body_text.endswith("Modion Team")


def test_second_subscription_rejected(repo, sender):
    assert run(SubscribeInput(email="reader@example.com"), repo, sender).success
    again = run(SubscribeInput(email="READER@example.com "), repo, sender)

    assert not again.success
    assert again.already_subscribed
    assert again.errors[0].message == "You're already subscribed"
    assert sender.email_count == 1


def test_duplicate_on_insert_is_already_subscribed(sender):
    repo = Mock()
    repo.get_by_email.return_value = None
    repo.save.side_effect = DuplicateKeyError("UNIQUE constraint failed")

    result = run(SubscribeInput(email="reader@example.com"), repo, sender)
    assert result.already_subscribed


def test_storage_failure(sender):
    repo = Mock()
    repo.get_by_email.side_effect = StorageError("disk I/O error")

    result = run(SubscribeInput(email="reader@example.com"), repo, sender)
    assert result.errors[0].code == "UNEXPECTED"
    assert sender.email_count == 0


def test_email_failure_keeps_subscriber(repo):
    sender = DevEmailAdapter(fail_with="SMTP down")
    result = run(SubscribeInput(email="reader@example.com"), repo, sender)

    assert not result.success
    assert result.errors[0].code == "UNEXPECTED"
    assert isinstance(repo.get_by_email("reader@example.com"), EmailSubscriber)

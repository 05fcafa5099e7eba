"""
Newsletter component ports.

Protocol interfaces for subscription dependencies.
"""

from __future__ import annotations

from typing import Protocol

from modion.domain.entities import EmailSubscriber


class SubscriberRepoPort(Protocol):
    """Email subscriber repository interface."""

    def get_by_email(self, email: str) -> EmailSubscriber | None:
        """Get subscriber by normalized email address."""
        ...

    def save(self, subscriber: EmailSubscriber) -> EmailSubscriber:
        """Insert a new subscriber. Raises DuplicateKeyError if the email exists."""
        ...

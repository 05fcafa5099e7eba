from __future__ import annotations

from typing import Protocol

from modion.domain.entities import ContactMessage


class ContactRepoPort(Protocol):
    """Append-only store for contact messages."""

    def save(self, contact: ContactMessage) -> ContactMessage: ...

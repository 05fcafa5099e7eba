from __future__ import annotations

from dataclasses import dataclass

from modion.domain.entities import ContactMessage


@dataclass(frozen=True)
class ContactInput:
    name: str | None
    email: str | None
    subject: str | None
    message: str | None


@dataclass(frozen=True)
class ContactOutput:
    success: bool
    contact: ContactMessage | None = None
    error: str | None = None
    code: str | None = None

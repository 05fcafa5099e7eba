"""
Newsletter component models.

Subscriptions are append-only: one row per normalized email address.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from modion.domain.entities import EmailSubscriber


@dataclass(frozen=True)
class SubscribeInput:
    """Input for new subscription."""

    email: str | None


@dataclass(frozen=True)
class ValidationError:
    """Validation error detail."""

    code: str
    message: str
    field: str | None = None


@dataclass(frozen=True)
class ValidateEmailOutput:
    """Output from email validation."""

    is_valid: bool
    normalized_email: str | None = None  # Lowercase, trimmed
    errors: list[ValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class SubscribeOutput:
    """Output from subscription attempt."""

    success: bool
    subscriber: EmailSubscriber | None = None
    errors: list[ValidationError] = field(default_factory=list)
    already_subscribed: bool = False

"""
Newsletter component.

Email subscription with duplicate rejection.
"""

from modion.components.newsletter.component import EMAIL_REGEX, run, validate_email
from modion.components.newsletter.models import (
    SubscribeInput,
    SubscribeOutput,
    ValidateEmailOutput,
    ValidationError,
)
from modion.components.newsletter.ports import SubscriberRepoPort

__all__ = [
    "EMAIL_REGEX",
    "run",
    "validate_email",
    "SubscribeInput",
    "SubscribeOutput",
    "ValidateEmailOutput",
    "ValidationError",
    "SubscriberRepoPort",
]

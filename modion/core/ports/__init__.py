# Ports (Protocol Interfaces)
# Abstract interfaces for adapters; no implementations here

from modion.core.ports.db import DuplicateKeyError, StorageError
from modion.core.ports.email import (
    EmailAddress,
    EmailMessage,
    EmailPort,
    EmailResult,
    EmailSendError,
    EmailStatus,
)
from modion.core.ports.time import TimePort

__all__ = [
    # Storage
    "DuplicateKeyError",
    "StorageError",
    # Email
    "EmailAddress",
    "EmailMessage",
    "EmailPort",
    "EmailResult",
    "EmailSendError",
    "EmailStatus",
    # Time
    "TimePort",
]

"""
Storage error types shared by all repository adapters.

Repositories translate driver exceptions into these so components and
routes never depend on a specific database driver.
"""

from __future__ import annotations


class StorageError(Exception):
    """The document store failed to complete an operation."""

    pass


class DuplicateKeyError(StorageError):
    """A write violated a unique key (email, article id, subscriber)."""

    def __init__(self, message: str, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)

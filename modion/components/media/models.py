"""
Media component input/output models.

Results are plain dataclasses so route code can branch on `success`
without catching exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UploadedImage:
    """An image file received from a client (multipart upload)."""

    content: bytes
    mime_type: str = "image/jpeg"
    filename: str | None = None

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class MediaUploadResult:
    """Outcome of an upload to the media host."""

    success: bool
    url: str | None = None
    host_id: str | None = None
    width: int | None = None
    height: int | None = None
    format: str | None = None
    byte_size: int | None = None
    error: str | None = None

    @classmethod
    def failed(cls, error: str) -> MediaUploadResult:
        return cls(success=False, error=error)


@dataclass(frozen=True)
class MediaDeleteResult:
    """Outcome of a delete request; `result` is the host's result code."""

    success: bool
    result: str | None = None
    error: str | None = None


class MediaHostError(Exception):
    """Raised by media host adapters when the remote call fails."""

    pass

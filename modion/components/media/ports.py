"""
Media component port definitions.

The host port is a thin wrapper over the image-hosting SDK; it raises
MediaHostError on failure and the component turns that into results.
"""

from __future__ import annotations

from typing import Any, Protocol


class MediaHostPort(Protocol):
    """Remote image host (Cloudinary or the dev stand-in)."""

    def upload(self, source: str, options: dict[str, Any]) -> dict[str, Any]:
        """
        Upload an image.

        Args:
            source: Path, URL or data URI of the image
            options: Host options (folder, resource_type, quality, ...)

        Returns:
            Host response with secure_url, public_id, width, height, format, bytes
        """
        ...

    def destroy(self, public_id: str) -> dict[str, Any]:
        """Delete an asset. Returns the host response with a `result` code."""
        ...

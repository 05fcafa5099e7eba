"""
Dev Media Adapter.

In-memory stand-in for the image host, used when no Cloudinary
credentials are configured and as a test double. Operations are logged
and uploaded assets are kept in memory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from modion.components.media import MediaHostError

logger = logging.getLogger(__name__)

DEV_BASE_URL = "https://res.cloudinary.com/dev/image/upload"


@dataclass
class DevMediaAdapter:
    """Implements MediaHostPort without network access."""

    # public_id -> original upload source
    assets: dict[str, str] = field(default_factory=dict)
    destroyed: list[str] = field(default_factory=list)

    # Failure switches for tests
    fail_uploads: str | None = None
    fail_destroys: str | None = None

    def upload(self, source: str, options: dict[str, Any]) -> dict[str, Any]:
        if self.fail_uploads:
            raise MediaHostError(self.fail_uploads)

        name = options.get("public_id") or uuid4().hex[:20]
        folder = options.get("folder")
        public_id = f"{folder}/{name}" if folder else str(name)
        self.assets[public_id] = source

        logger.info("MEDIA (dev): uploaded %s (%d chars)", public_id, len(source))
        return {
            "secure_url": f"{DEV_BASE_URL}/v1/{public_id}.jpg",
            "public_id": public_id,
            "width": 800,
            "height": 600,
            "format": "jpg",
            "bytes": len(source),
        }

    def destroy(self, public_id: str) -> dict[str, Any]:
        if self.fail_destroys:
            raise MediaHostError(self.fail_destroys)

        self.destroyed.append(public_id)
        if self.assets.pop(public_id, None) is None:
            logger.info("MEDIA (dev): %s not found", public_id)
            return {"result": "not found"}

        logger.info("MEDIA (dev): destroyed %s", public_id)
        return {"result": "ok"}

    def clear(self) -> None:
        self.assets.clear()
        self.destroyed.clear()

"""
Cloudinary Media Adapter.

Thin wrapper over the Cloudinary SDK implementing MediaHostPort.
SDK errors are re-raised as MediaHostError.
"""

from __future__ import annotations

import logging
from typing import Any

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from modion.components.media import MediaHostError

logger = logging.getLogger(__name__)


class CloudinaryMediaAdapter:
    def __init__(
        self,
        cloud_name: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
    ) -> None:
        # Without explicit credentials the SDK reads CLOUDINARY_URL itself.
        if cloud_name and api_key and api_secret:
            cloudinary.config(
                cloud_name=cloud_name,
                api_key=api_key,
                api_secret=api_secret,
                secure=True,
            )
        else:
            cloudinary.config(secure=True)

    def upload(self, source: str, options: dict[str, Any]) -> dict[str, Any]:
        try:
            response: dict[str, Any] = cloudinary.uploader.upload(source, **options)
        except cloudinary.exceptions.Error as e:
            raise MediaHostError(str(e)) from e
        logger.info("Uploaded image %s", response.get("public_id"))
        return response

    def destroy(self, public_id: str) -> dict[str, Any]:
        try:
            response: dict[str, Any] = cloudinary.uploader.destroy(public_id)
        except cloudinary.exceptions.Error as e:
            raise MediaHostError(str(e)) from e
        logger.info("Destroyed image %s: %s", public_id, response.get("result"))
        return response

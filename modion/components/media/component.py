"""
Media component - image hosting operations.

Uploads, replaces and deletes article images on the media host, and
derives host identifiers from stored image URLs.

Key behaviors:
- Upload sources are normalized to what the host accepts (path/URL/data URI)
- Host failures are returned as failed results, never raised
- Replace reports the upload result even if deleting the old asset failed
- Avatar URLs pick a random style on every call
"""

from __future__ import annotations

import base64
import logging
import random
import re
from urllib.parse import quote

from .models import (
    MediaDeleteResult,
    MediaHostError,
    MediaUploadResult,
    UploadedImage,
)
from .ports import MediaHostPort

logger = logging.getLogger(__name__)

DEFAULT_FOLDER = "articles"
HOST_DOMAIN = "cloudinary.com"

AVATAR_ENDPOINT = "https://api.dicebear.com/7.x"
AVATAR_STYLES: tuple[str, ...] = ("avataaars", "big-smile", "bottts", "identicon", "initials")

_VERSION_SEGMENT = re.compile(r"^v\d+$")
_EXTENSION = re.compile(r"\.[^/.]+$")


# --- Pure Functions ---


def normalize_image_source(source: str | bytes | UploadedImage) -> str:
    """
    Convert an image source into a form the media host accepts.

    Strings (file path, URL or base64 data URI) pass through unchanged.
    Raw bytes are sent as a JPEG data URI; uploaded files keep their MIME type.

    Raises:
        ValueError: If the source type is not supported
    """
    if isinstance(source, str):
        return source
    if isinstance(source, bytes):
        b64 = base64.b64encode(source).decode("ascii")
        return f"data:image/jpeg;base64,{b64}"
    if isinstance(source, UploadedImage):
        b64 = base64.b64encode(source.content).decode("ascii")
        mime_type = source.mime_type or "image/jpeg"
        return f"data:{mime_type};base64,{b64}"
    raise ValueError("Invalid image input type")


def extract_public_id(url: str | None) -> str | None:
    """
    Derive the host identifier from a stored image URL.

    https://res.cloudinary.com/demo/image/upload/v1712/articles/cover.jpg
    -> "articles/cover"

    Returns None if the URL does not belong to the media host.
    """
    if not url or HOST_DOMAIN not in url:
        return None

    parts = url.split("/")
    try:
        upload_index = parts.index("upload")
    except ValueError:
        return None

    id_parts = parts[upload_index + 1 :]
    if id_parts and _VERSION_SEGMENT.match(id_parts[0]):
        id_parts = id_parts[1:]

    public_id = _EXTENSION.sub("", "/".join(id_parts))
    return public_id or None


def generate_avatar_url(name: str, size: int = 100) -> str:
    """Build an avatar URL seeded with the name, in a randomly chosen style."""
    style = random.choice(AVATAR_STYLES)
    seed = quote(re.sub(r"\s+", "", name or ""), safe="!~*'()")
    return f"{AVATAR_ENDPOINT}/{style}/svg?seed={seed}&size={size}"


# --- Operations ---


def run_upload(
    source: str | bytes | UploadedImage,
    host: MediaHostPort,
    folder: str = DEFAULT_FOLDER,
    public_id: str | None = None,
) -> MediaUploadResult:
    """Upload an image with automatic quality/format optimization."""
    options: dict[str, object] = {
        "folder": folder,
        "resource_type": "image",
        "quality": "auto",
        "fetch_format": "auto",
    }
    if public_id:
        options["public_id"] = public_id

    try:
        upload_source = normalize_image_source(source)
        response = host.upload(upload_source, options)
    except (ValueError, MediaHostError) as e:
        logger.error("Media upload error: %s", e)
        return MediaUploadResult.failed(str(e))

    return MediaUploadResult(
        success=True,
        url=response.get("secure_url"),
        host_id=response.get("public_id"),
        width=response.get("width"),
        height=response.get("height"),
        format=response.get("format"),
        byte_size=response.get("bytes"),
    )


def run_delete(public_id: str, host: MediaHostPort) -> MediaDeleteResult:
    """Delete an asset; success only when the host answers "ok"."""
    try:
        response = host.destroy(public_id)
    except MediaHostError as e:
        logger.error("Media delete error: %s", e)
        return MediaDeleteResult(success=False, error=str(e))

    result = response.get("result")
    return MediaDeleteResult(
        success=result == "ok",
        result=result,
        error=None if result == "ok" else f"Host returned {result!r}",
    )


def run_replace(
    old_public_id: str | None,
    source: str | bytes | UploadedImage,
    host: MediaHostPort,
    folder: str = DEFAULT_FOLDER,
) -> MediaUploadResult:
    """Delete the old asset (if any), then upload the new one."""
    if old_public_id:
        deleted = run_delete(old_public_id, host)
        if not deleted.success:
            logger.warning("Could not delete previous image %s: %s", old_public_id, deleted.error)

    return run_upload(source, host, folder=folder)

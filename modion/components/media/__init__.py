"""
Media component - image hosting.

Upload, replace and delete article images on the media host.
"""

from .component import (
    AVATAR_STYLES,
    DEFAULT_FOLDER,
    extract_public_id,
    generate_avatar_url,
    normalize_image_source,
    run_delete,
    run_replace,
    run_upload,
)
from .models import MediaDeleteResult, MediaHostError, MediaUploadResult, UploadedImage
from .ports import MediaHostPort

__all__ = [
    # Entry points
    "run_delete",
    "run_replace",
    "run_upload",
    # Helpers
    "AVATAR_STYLES",
    "DEFAULT_FOLDER",
    "extract_public_id",
    "generate_avatar_url",
    "normalize_image_source",
    # Models
    "MediaDeleteResult",
    "MediaHostError",
    "MediaUploadResult",
    "UploadedImage",
    # Ports
    "MediaHostPort",
]

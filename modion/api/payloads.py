"""
Article request payloads.

Article create/update accept either multipart form data (fields plus an
`image` file) or a JSON object of fields. Both are reduced to a plain
field mapping and an optional UploadedImage.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from fastapi import HTTPException, Request, status
from starlette.datastructures import UploadFile

from modion.components.media import UploadedImage

IMAGE_FIELD = "image"
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


@dataclass
class ArticlePayload:
    fields: dict[str, Any] = field(default_factory=dict)
    image: UploadedImage | None = None


def _bad_request() -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid request body")


async def read_article_payload(request: Request) -> ArticlePayload:
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        payload = ArticlePayload()
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                # Only the first file in the image field is used; others are ignored
                if key == IMAGE_FIELD and payload.image is None:
                    payload.image = UploadedImage(
                        content=await value.read(),
                        mime_type=value.content_type or "application/octet-stream",
                        filename=value.filename,
                    )
                continue
            payload.fields[key] = value
        return payload

    raw = await request.body()
    if not raw.strip():
        return ArticlePayload()

    try:
        body = json.loads(raw)
    except json.JSONDecodeError:
        raise _bad_request() from None
    if not isinstance(body, dict):
        raise _bad_request()
    return ArticlePayload(fields=body)

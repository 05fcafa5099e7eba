"""
Articles component - article CRUD, listing and search.

Public reads only ever see published articles. Mutations are limited to
the article's author or an admin.

Create/update pipeline:
1. Check the attached image (MIME type, size)
2. Normalize the raw payload (JSON-encoded tags/sections, string booleans)
3. Validate the resulting article before touching the media host
4. Upload (or replace) the image
5. Persist

Delete removes the remote image best-effort; a failure there is logged
and the article is deleted anyway.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from typing import Any
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from modion.components.media import (
    MediaHostPort,
    UploadedImage,
    extract_public_id,
    run_delete,
    run_replace,
    run_upload,
)
from modion.core.ports.db import DuplicateKeyError, StorageError
from modion.core.ports.time import TimePort
from modion.domain.entities import Article
from modion.domain.policy import PolicyEngine

from .models import (
    ArticleError,
    ArticleListOutput,
    ArticleOutput,
    CategoriesOutput,
    CategoryCount,
    CreateArticleInput,
    DeleteArticleInput,
    GetArticleInput,
    ListArticlesInput,
    NormalizedPayload,
    SearchArticlesInput,
    UpdateArticleInput,
)
from .ports import ArticleRepoPort

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200
FEATURED_LIMIT = 3
MAX_IMAGE_BYTES = 5 * 1024 * 1024

# Fields a client may set. Author and image fields are always server-assigned.
ARTICLE_FIELDS = (
    "id",
    "title",
    "category",
    "reading_time",
    "sections",
    "tags",
    "meta_description",
    "featured",
    "status",
)
UPDATABLE_FIELDS = tuple(f for f in ARTICLE_FIELDS if f != "id")

_default_policy = PolicyEngine()


# --- Pure Functions ---


def _word_count(text: Any) -> int:
    return len(text.split()) if isinstance(text, str) else 0


def calculate_reading_time(sections: Any) -> str:
    """Estimate reading time at 200 words per minute, never below one minute."""
    if not sections or not isinstance(sections, list):
        return "1 min read"

    total_words = 0
    for section in sections:
        if isinstance(section, Mapping):
            content, title = section.get("content"), section.get("title")
        else:
            content, title = getattr(section, "content", None), getattr(section, "title", None)
        total_words += _word_count(content) + _word_count(title)

    minutes = max(1, math.ceil(total_words / WORDS_PER_MINUTE))
    return f"{minutes} min read"


def normalize_article_fields(raw: Mapping[str, Any], allowed: tuple[str, ...] = ARTICLE_FIELDS) -> NormalizedPayload:
    """
    Coerce a raw client payload into article field types.

    Multipart submissions carry tags/sections as JSON strings and featured
    as "true"/"false". Empty strings count as "not supplied".
    """
    fields: dict[str, Any] = {}
    for key in allowed:
        if key not in raw:
            continue
        value = raw[key]
        if isinstance(value, str) and value == "" and key != "meta_description":
            continue
        fields[key] = value

    errors: list[ArticleError] = []
    for key in ("tags", "sections"):
        value = fields.get(key)
        if isinstance(value, str):
            try:
                fields[key] = json.loads(value)
            except json.JSONDecodeError:
                errors.append(ArticleError(f"invalid_{key}", f"Invalid {key} format"))

    featured = fields.get("featured")
    if isinstance(featured, str):
        fields["featured"] = featured.strip() == "true"

    return NormalizedPayload(fields=fields, errors=errors)


def check_image(image: UploadedImage, max_bytes: int = MAX_IMAGE_BYTES) -> list[ArticleError]:
    """Only image MIME types up to the size limit are accepted."""
    if not (image.mime_type or "").startswith("image/"):
        return [ArticleError("invalid_image", "Only image files are allowed!")]
    if image.size_bytes > max_bytes:
        return [ArticleError("image_too_large", "File too large")]
    return []


def format_validation_error(error: PydanticValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def matches_query(article: Article, query: str) -> bool:
    """Case-insensitive substring match on title, section content or tags."""
    needle = query.lower()
    if needle in article.title.lower():
        return True
    if any(needle in section.content.lower() for section in article.sections):
        return True
    return any(needle in tag.lower() for tag in article.tags)


def _fail(code: str, message: str, detail: str | None = None) -> ArticleOutput:
    return ArticleOutput(success=False, errors=[ArticleError(code, message, detail)])


def _discard_upload(public_id: str | None, media: MediaHostPort) -> None:
    if not public_id:
        return
    result = run_delete(public_id, media)
    if not result.success:
        logger.warning("Failed to clean up uploaded image %s: %s", public_id, result.error)


# --- Reads ---


def run_list(inp: ListArticlesInput, repo: ArticleRepoPort) -> ArticleListOutput:
    """List published articles, optionally by category or featured flag."""
    items = repo.list_articles(
        status="published",
        category=inp.category,
        featured=True if inp.featured_only else None,
        limit=inp.limit,
    )
    return ArticleListOutput(items=items)


def run_featured(repo: ArticleRepoPort) -> ArticleListOutput:
    return run_list(ListArticlesInput(featured_only=True, limit=FEATURED_LIMIT), repo)


def run_get(inp: GetArticleInput, repo: ArticleRepoPort) -> ArticleOutput:
    """Get a published article; drafts and archived articles are not found."""
    article = repo.get_by_id(inp.article_id)
    if article is None or article.status != "published":
        return _fail("not_found", "Article not found")
    return ArticleOutput(article=article)


def run_categories(repo: ArticleRepoPort) -> CategoriesOutput:
    counts = repo.count_by_category(status="published")
    return CategoriesOutput(
        categories=[CategoryCount(category=c, count=n) for c, n in counts]
    )


def run_search(inp: SearchArticlesInput, repo: ArticleRepoPort) -> ArticleListOutput:
    if not inp.query:
        return ArticleListOutput(
            success=False,
            errors=[ArticleError("query_required", "Search query is required")],
        )

    published = repo.list_articles(status="published")
    return ArticleListOutput(items=[a for a in published if matches_query(a, inp.query)])


# --- Mutations ---


def run_create(
    inp: CreateArticleInput,
    repo: ArticleRepoPort,
    media: MediaHostPort,
    time: TimePort,
) -> ArticleOutput:
    """Create an article owned by the caller."""
    if inp.image is None:
        return _fail("image_required", "Image file is required")

    image_errors = check_image(inp.image)
    if image_errors:
        return ArticleOutput(success=False, errors=image_errors)

    normalized = normalize_article_fields(inp.fields)
    if normalized.errors:
        return ArticleOutput(success=False, errors=normalized.errors)

    fields = dict(normalized.fields)
    if not fields.get("reading_time"):
        fields["reading_time"] = calculate_reading_time(fields.get("sections"))
    if not fields.get("id"):
        fields["id"] = uuid4().hex

    now = time.now_utc()
    try:
        draft = Article.model_validate(
            {
                **fields,
                "image": "",
                "author_id": inp.actor.id,
                "created_at": now,
                "updated_at": now,
            }
        )
    except PydanticValidationError as e:
        return _fail("validation", "Error creating article", format_validation_error(e))

    if repo.get_by_id(draft.id) is not None:
        return _fail("duplicate_id", "Article ID already exists")

    upload = run_upload(inp.image, media, folder=inp.folder)
    if not upload.success:
        return _fail("upload_failed", "Failed to upload image", upload.error)

    article = draft.model_copy(update={"image": upload.url, "image_public_id": upload.host_id})
    try:
        repo.save(article)
    except DuplicateKeyError:
        _discard_upload(upload.host_id, media)
        return _fail("duplicate_id", "Article ID already exists")
    except StorageError:
        _discard_upload(upload.host_id, media)
        raise

    logger.info("Article %s created by %s", article.id, inp.actor.id)
    return ArticleOutput(article=article.model_copy(update={"author_name": inp.actor.name}))


def run_update(
    inp: UpdateArticleInput,
    repo: ArticleRepoPort,
    media: MediaHostPort,
    time: TimePort,
    policy: PolicyEngine = _default_policy,
) -> ArticleOutput:
    """Update an article; only its author or an admin may do so."""
    existing = repo.get_by_id(inp.article_id)
    if existing is None:
        return _fail("not_found", "Article not found")

    if not policy.can_modify_article(inp.actor, existing):
        return _fail("forbidden", "You are not authorized to update this article")

    if inp.image is not None:
        image_errors = check_image(inp.image)
        if image_errors:
            return ArticleOutput(success=False, errors=image_errors)

    normalized = normalize_article_fields(inp.fields, allowed=UPDATABLE_FIELDS)
    if normalized.errors:
        return ArticleOutput(success=False, errors=normalized.errors)

    updates = dict(normalized.fields)
    if "sections" in updates:
        updates["reading_time"] = calculate_reading_time(updates["sections"])

    merged = existing.model_dump()
    merged.update(updates)
    merged["updated_at"] = time.now_utc()
    try:
        candidate = Article.model_validate(merged)
    except PydanticValidationError as e:
        return _fail("validation", "Error updating article", format_validation_error(e))

    if inp.image is not None:
        old_public_id = existing.image_public_id or extract_public_id(existing.image)
        replaced = run_replace(old_public_id, inp.image, media, folder=inp.folder)
        if not replaced.success:
            return _fail("upload_failed", "Failed to update image", replaced.error)
        candidate = candidate.model_copy(
            update={"image": replaced.url, "image_public_id": replaced.host_id}
        )

    try:
        repo.save(candidate)
    except StorageError:
        if inp.image is not None:
            _discard_upload(candidate.image_public_id, media)
        raise
    logger.info("Article %s updated by %s", candidate.id, inp.actor.id)
    return ArticleOutput(article=candidate.model_copy(update={"author_name": existing.author_name}))


def run_delete_article(
    inp: DeleteArticleInput,
    repo: ArticleRepoPort,
    media: MediaHostPort,
    policy: PolicyEngine = _default_policy,
) -> ArticleOutput:
    """Delete an article and, best-effort, its remote image."""
    existing = repo.get_by_id(inp.article_id)
    if existing is None:
        return _fail("not_found", "Article not found")

    if not policy.can_modify_article(inp.actor, existing):
        return _fail("forbidden", "You are not authorized to delete this article")

    public_id = existing.image_public_id or extract_public_id(existing.image)
    if public_id:
        result = run_delete(public_id, media)
        if not result.success:
            logger.warning("Failed to delete image from media host: %s", result.error)

    repo.delete(existing.record_id)
    logger.info("Article %s deleted by %s", existing.id, inp.actor.id)
    return ArticleOutput(article=existing)

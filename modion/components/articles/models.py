"""
Article component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from modion.components.media import UploadedImage
from modion.domain.entities import Article, User

# --- Validation Error ---


@dataclass(frozen=True)
class ArticleError:
    """Article operation error."""

    code: str
    message: str
    detail: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class ListArticlesInput:
    """Input for listing published articles."""

    category: str | None = None
    featured_only: bool = False
    limit: int | None = None


@dataclass(frozen=True)
class GetArticleInput:
    article_id: str


@dataclass(frozen=True)
class SearchArticlesInput:
    query: str | None


@dataclass(frozen=True)
class CreateArticleInput:
    """Input for creating an article; `fields` is the raw client payload."""

    actor: User
    fields: dict[str, Any]
    image: UploadedImage | None = None
    folder: str = "articles"


@dataclass(frozen=True)
class UpdateArticleInput:
    article_id: str
    actor: User
    fields: dict[str, Any]
    image: UploadedImage | None = None
    folder: str = "articles"


@dataclass(frozen=True)
class DeleteArticleInput:
    article_id: str
    actor: User


# --- Output Models ---


@dataclass(frozen=True)
class NormalizedPayload:
    """Result of coercing a raw payload into article field types."""

    fields: dict[str, Any]
    errors: list[ArticleError] = field(default_factory=list)


@dataclass(frozen=True)
class ArticleOutput:
    """Output containing a single article."""

    article: Article | None = None
    errors: list[ArticleError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ArticleListOutput:
    """Output containing a list of articles."""

    items: list[Article] = field(default_factory=list)
    errors: list[ArticleError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class CategoryCount:
    category: str
    count: int


@dataclass(frozen=True)
class CategoriesOutput:
    categories: list[CategoryCount] = field(default_factory=list)
    success: bool = True

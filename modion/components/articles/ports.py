"""
Article component port definitions.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from modion.domain.entities import Article, ArticleStatus


class ArticleRepoPort(Protocol):
    """Repository interface for article documents.

    Every read resolves the author's display name into `author_name`.
    """

    def get_by_id(self, article_id: str) -> Article | None:
        """Get an article by external id, regardless of status."""
        ...

    def list_articles(
        self,
        *,
        status: ArticleStatus | None = "published",
        category: str | None = None,
        featured: bool | None = None,
        limit: int | None = None,
    ) -> list[Article]:
        """List articles newest first."""
        ...

    def count_by_category(self, status: ArticleStatus = "published") -> list[tuple[str, int]]:
        """Return (category, count) pairs, highest count first."""
        ...

    def save(self, article: Article) -> Article:
        """Insert or update an article. Raises DuplicateKeyError on id collision."""
        ...

    def delete(self, record_id: UUID) -> None:
        """Delete an article by storage record id."""
        ...

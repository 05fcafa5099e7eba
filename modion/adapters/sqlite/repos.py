"""
SQLite Database Adapter.

Stores users, article documents, subscribers and contact messages.
Article sections and tags are kept as JSON documents in their row.
Driver errors are translated to StorageError / DuplicateKeyError.
"""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any
from uuid import UUID

from modion.core.ports.db import DuplicateKeyError, StorageError
from modion.domain.entities import (
    Article,
    ArticleStatus,
    ContactMessage,
    EmailSubscriber,
    Section,
    User,
)

# -----------------------------------------------------------------------------
# Helper functions
# -----------------------------------------------------------------------------


def dict_factory(cursor: sqlite3.Cursor, row: tuple[Any, ...]) -> dict[str, Any]:
    """Convert SQLite row to dictionary."""
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


def parse_uuid(value: object) -> UUID | None:
    """Parse a UUID, returning None for malformed input."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (ValueError, TypeError):
        return None


# -----------------------------------------------------------------------------
# Base SQLite Repository
# -----------------------------------------------------------------------------


class SQLiteRepoBase:
    """Base class for SQLite repositories."""

    def __init__(self, db_path: str, connection: sqlite3.Connection | None = None):
        self.db_path = db_path
        self._external_conn = connection

    def _get_conn(self) -> sqlite3.Connection:
        """Get database connection (uses external if provided)."""
        if self._external_conn is not None:
            return self._external_conn

        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def _should_close(self) -> bool:
        """Whether to close connection after use."""
        return self._external_conn is None

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection; commit on success and map driver errors."""
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StorageError(f"Could not open database: {e}") from e

        try:
            yield conn
            if self._should_close():
                conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            if "UNIQUE" in str(e):
                raise DuplicateKeyError(str(e)) from e
            raise StorageError(str(e)) from e
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(str(e)) from e
        finally:
            if self._should_close():
                conn.close()


# -----------------------------------------------------------------------------
# Users
# -----------------------------------------------------------------------------


class SQLiteUserRepo(SQLiteRepoBase):
    def save(self, user: User) -> User:
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO users (id, name, email, password_hash, role, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    email = excluded.email,
                    password_hash = excluded.password_hash,
                    role = excluded.role,
                    updated_at = excluded.updated_at
                """,
                (
                    str(user.id),
                    user.name,
                    user.email,
                    user.password_hash,
                    user.role,
                    user.created_at.isoformat(),
                    user.updated_at.isoformat(),
                ),
            )
        return user

    def get_by_email(self, email: str) -> User | None:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
        return self._map_row(row) if row else None

    def get_by_id(self, user_id: object) -> User | None:
        uid = parse_uuid(user_id)
        if uid is None:
            return None
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (str(uid),)).fetchone()
        return self._map_row(row) if row else None

    def _map_row(self, row: dict[str, Any]) -> User:
        return User(
            id=UUID(row["id"]),
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            role=row["role"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )


# -----------------------------------------------------------------------------
# Articles
# -----------------------------------------------------------------------------

_ARTICLE_SELECT = """
    SELECT a.*, u.name AS author_name
    FROM articles a
    LEFT JOIN users u ON u.id = a.author_id
"""


class SQLiteArticleRepo(SQLiteRepoBase):
    def save(self, article: Article) -> Article:
        sections = [s.model_dump() for s in article.sections]
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO articles (
                    record_id, id, title, category, image, image_public_id,
                    author_id, reading_time, sections_json, tags_json,
                    meta_description, featured, status, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(record_id) DO UPDATE SET
                    id = excluded.id,
                    title = excluded.title,
                    category = excluded.category,
                    image = excluded.image,
                    image_public_id = excluded.image_public_id,
                    author_id = excluded.author_id,
                    reading_time = excluded.reading_time,
                    sections_json = excluded.sections_json,
                    tags_json = excluded.tags_json,
                    meta_description = excluded.meta_description,
                    featured = excluded.featured,
                    status = excluded.status,
                    updated_at = excluded.updated_at
                """,
                (
                    str(article.record_id),
                    article.id,
                    article.title,
                    article.category,
                    article.image,
                    article.image_public_id,
                    str(article.author_id),
                    article.reading_time,
                    json.dumps(sections),
                    json.dumps(article.tags),
                    article.meta_description,
                    int(article.featured),
                    article.status,
                    article.created_at.isoformat(),
                    article.updated_at.isoformat(),
                ),
            )
        return article

    def get_by_id(self, article_id: str) -> Article | None:
        with self._connection() as conn:
            row = conn.execute(_ARTICLE_SELECT + " WHERE a.id = ?", (article_id,)).fetchone()
        return self._map_row(row) if row else None

    def list_articles(
        self,
        *,
        status: ArticleStatus | None = "published",
        category: str | None = None,
        featured: bool | None = None,
        limit: int | None = None,
    ) -> list[Article]:
        query = _ARTICLE_SELECT + " WHERE 1=1"
        params: list[Any] = []

        if status is not None:
            query += " AND a.status = ?"
            params.append(status)
        if category is not None:
            query += " AND a.category = ?"
            params.append(category)
        if featured is not None:
            query += " AND a.featured = ?"
            params.append(int(featured))

        query += " ORDER BY a.created_at DESC, a.rowid DESC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()
        return [self._map_row(r) for r in rows]

    def count_by_category(self, status: ArticleStatus = "published") -> list[tuple[str, int]]:
        with self._connection() as conn:
            rows = conn.execute(
                """
                SELECT category, COUNT(*) AS count
                FROM articles
                WHERE status = ?
                GROUP BY category
                ORDER BY count DESC, category
                """,
                (status,),
            ).fetchall()
        return [(r["category"], r["count"]) for r in rows]

    def delete(self, record_id: UUID) -> None:
        with self._connection() as conn:
            conn.execute("DELETE FROM articles WHERE record_id = ?", (str(record_id),))

    def _map_row(self, row: dict[str, Any]) -> Article:
        return Article(
            record_id=UUID(row["record_id"]),
            id=row["id"],
            title=row["title"],
            category=row["category"],
            image=row["image"],
            image_public_id=row["image_public_id"],
            author_id=UUID(row["author_id"]),
            author_name=row.get("author_name"),
            reading_time=row["reading_time"],
            sections=[Section(**s) for s in json.loads(row["sections_json"])],
            tags=json.loads(row["tags_json"] or "[]"),
            meta_description=row["meta_description"],
            featured=bool(row["featured"]),
            status=row["status"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )


# -----------------------------------------------------------------------------
# Subscribers & Contact Messages
# -----------------------------------------------------------------------------


class SQLiteSubscriberRepo(SQLiteRepoBase):
    def get_by_email(self, email: str) -> EmailSubscriber | None:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT * FROM email_subscribers WHERE email = ?", (email.strip().lower(),)
            ).fetchone()
        if not row:
            return None
        return EmailSubscriber(
            id=UUID(row["id"]),
            email=row["email"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def save(self, subscriber: EmailSubscriber) -> EmailSubscriber:
        with self._connection() as conn:
            conn.execute(
                "INSERT INTO email_subscribers (id, email, created_at) VALUES (?, ?, ?)",
                (str(subscriber.id), subscriber.email, subscriber.created_at.isoformat()),
            )
        return subscriber


class SQLiteContactRepo(SQLiteRepoBase):
    def save(self, contact: ContactMessage) -> ContactMessage:
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO contact_messages (id, name, email, subject, message, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    str(contact.id),
                    contact.name,
                    contact.email,
                    contact.subject,
                    contact.message,
                    contact.created_at.isoformat(),
                ),
            )
        return contact


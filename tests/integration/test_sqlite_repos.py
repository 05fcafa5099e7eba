import sqlite3
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from modion.adapters.sqlite.repos import (
    SQLiteArticleRepo,
    SQLiteContactRepo,
    SQLiteSubscriberRepo,
    SQLiteUserRepo,
    dict_factory,
)
from modion.core.ports.db import DuplicateKeyError, StorageError
from modion.domain.entities import Article, ContactMessage, EmailSubscriber, Section, User


@pytest.fixture
def users(db_path):
    return SQLiteUserRepo(db_path)


@pytest.fixture
def articles(db_path):
    return SQLiteArticleRepo(db_path)


@pytest.fixture
def author(users):
    return users.save(User(name="Ann Writer", email="ann@example.com", password_hash="h"))


def count_rows(db_path, table):
    with sqlite3.connect(db_path) as conn:
        return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


def make_article(author_id, **overrides):
    data = {
        "id": f"article-{uuid4().hex[:8]}",
        "title": "Title",
        "category": "design",
        "image": "https://res.cloudinary.com/demo/image/upload/v1/articles/a.jpg",
        "image_public_id": "articles/a",
        "author_id": author_id,
        "reading_time": "2 min read",
        "sections": [Section(id="s1", title="Intro", content="Hello world", type="paragraph")],
        "tags": ["ux", "calm"],
        "meta_description": "desc",
    }
    data.update(overrides)
    return Article(**data)


# --- Users ---


def test_save_and_get_user(users):
    user = users.save(User(name="Ann", email="a@x.com", password_hash="h", role="admin"))

    by_id = users.get_by_id(user.id)
    assert by_id is not None
    assert by_id.name == "Ann"
    assert by_id.role == "admin"
    assert by_id.password_hash == "h"

    assert users.get_by_id(str(user.id)).id == user.id
    assert users.get_by_email("a@x.com").id == user.id


def test_get_missing_user(users):
    assert users.get_by_id(uuid4()) is None
    assert users.get_by_id("not-a-uuid") is None
    assert users.get_by_email("missing@example.com") is None


def test_duplicate_email(users):
    users.save(User(name="Ann", email="a@x.com", password_hash="h"))
    with pytest.raises(DuplicateKeyError):
        users.save(User(name="Other", email="a@x.com", password_hash="h"))


# --- Articles ---


def test_article_document_roundtrip(articles, author):
    article = articles.save(make_article(author.id, featured=True))

    fetched = articles.get_by_id(article.id)
    assert fetched is not None
    assert fetched.record_id == article.record_id
    assert fetched.sections == article.sections
    assert fetched.tags == ["ux", "calm"]
    assert fetched.featured is True
    assert fetched.image_public_id == "articles/a"
    assert fetched.author_name == "Ann Writer"


def test_missing_author_resolves_to_none(articles):
    article = articles.save(make_article(uuid4()))
    assert articles.get_by_id(article.id).author_name is None


def test_duplicate_external_id(articles, author):
    articles.save(make_article(author.id, id="same"))
    with pytest.raises(DuplicateKeyError):
        articles.save(make_article(author.id, id="same"))


def test_save_updates_in_place(articles, author):
    article = articles.save(make_article(author.id, title="Before"))
    articles.save(article.model_copy(update={"title": "After"}))

    assert articles.get_by_id(article.id).title == "After"
    assert len(articles.list_articles(status=None)) == 1


def test_list_filters_and_orders(articles, author):
    base = datetime(2024, 1, 1, tzinfo=UTC)
    a = articles.save(make_article(author.id, created_at=base, category="story"))
    b = articles.save(make_article(author.id, created_at=base + timedelta(hours=1), featured=True))
    c = articles.save(make_article(author.id, created_at=base + timedelta(hours=2), featured=True))
    articles.save(make_article(author.id, created_at=base + timedelta(hours=3), status="draft"))

    assert [x.id for x in articles.list_articles()] == [c.id, b.id, a.id]
    assert [x.id for x in articles.list_articles(category="story")] == [a.id]
    assert [x.id for x in articles.list_articles(featured=True, limit=1)] == [c.id]
    assert len(articles.list_articles(status=None)) == 4


def test_same_timestamp_newest_insert_first(articles, author):
    now = datetime(2024, 1, 1, tzinfo=UTC)
    first = articles.save(make_article(author.id, created_at=now))
    second = articles.save(make_article(author.id, created_at=now))
    assert [x.id for x in articles.list_articles()] == [second.id, first.id]


def test_count_by_category(articles, author):
    for category in ("story", "story", "design"):
        articles.save(make_article(author.id, category=category))
    articles.save(make_article(author.id, category="ideas", status="archived"))

    assert articles.count_by_category() == [("story", 2), ("design", 1)]


def test_delete(articles, author):
    article = articles.save(make_article(author.id))
    articles.delete(article.record_id)
    assert articles.get_by_id(article.id) is None


def test_storage_error_on_missing_schema(tmp_path):
    repo = SQLiteArticleRepo(str(tmp_path / "empty.db"))
    with pytest.raises(StorageError):
        repo.list_articles()


def test_external_connection_is_not_closed(db_path, author):
    conn = sqlite3.connect(db_path)
    conn.row_factory = dict_factory
    repo = SQLiteArticleRepo(db_path, connection=conn)
    repo.save(make_article(author.id, id="shared"))
    assert repo.get_by_id("shared") is not None
    conn.execute("SELECT 1")
    conn.close()


# --- Subscribers & contact ---


def test_subscriber_lookup_is_normalized(db_path):
    repo = SQLiteSubscriberRepo(db_path)
    repo.save(EmailSubscriber(email=" Reader@Example.com "))

    assert repo.get_by_email("READER@example.com").email == "reader@example.com"
    assert count_rows(db_path, "email_subscribers") == 1
    with pytest.raises(DuplicateKeyError):
        repo.save(EmailSubscriber(email="reader@example.com"))


def test_contact_messages(db_path):
    repo = SQLiteContactRepo(db_path)
    repo.save(ContactMessage(name="Ann", email="a@x.com", subject="Hi", message="Hello"))
    with sqlite3.connect(db_path) as conn:
        rows = conn.execute("SELECT name, subject FROM contact_messages").fetchall()
    assert rows == [("Ann", "Hi")]

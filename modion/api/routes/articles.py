from typing import Any

from fastapi import APIRouter, Depends, status

from modion.adapters.clock import SystemClock
from modion.adapters.sqlite.repos import SQLiteArticleRepo
from modion.api.deps import (
    get_article_repo,
    get_current_user,
    get_media_host,
    get_policy,
    get_time_port,
)
from modion.api.errors import raise_for_errors, storage_errors
from modion.api.payloads import ArticlePayload, read_article_payload
from modion.api.schemas import ArticleResponse, CategoryResponse, MessageResponse
from modion.components.articles import (
    ArticleListOutput,
    CreateArticleInput,
    DeleteArticleInput,
    GetArticleInput,
    ListArticlesInput,
    SearchArticlesInput,
    UpdateArticleInput,
    run_categories,
    run_create,
    run_delete_article,
    run_featured,
    run_get,
    run_list,
    run_search,
    run_update,
)
from modion.components.media import MediaHostPort
from modion.domain.entities import User
from modion.domain.policy import PolicyEngine

router = APIRouter()


def _to_response(result: ArticleListOutput) -> list[ArticleResponse]:
    if not result.success:
        raise_for_errors(result.errors)
    return [ArticleResponse.from_entity(a) for a in result.items]


# --- Public reads ---
# Static paths are registered before "/{article_id}" so they are not shadowed.


@router.get("", response_model=list[ArticleResponse])
def list_articles(repo: SQLiteArticleRepo = Depends(get_article_repo)) -> list[ArticleResponse]:
    """List published articles, newest first."""
    with storage_errors("Error fetching articles"):
        result = run_list(ListArticlesInput(), repo)
    return _to_response(result)


@router.get("/featured", response_model=list[ArticleResponse])
def featured_articles(repo: SQLiteArticleRepo = Depends(get_article_repo)) -> list[ArticleResponse]:
    with storage_errors("Error fetching featured articles"):
        result = run_featured(repo)
    return _to_response(result)


@router.get("/search", response_model=list[ArticleResponse])
def search_articles(
    q: str | None = None,
    repo: SQLiteArticleRepo = Depends(get_article_repo),
) -> list[ArticleResponse]:
    """Search published articles by title, section content or tag."""
    with storage_errors("Error searching articles"):
        result = run_search(SearchArticlesInput(query=q), repo)
    return _to_response(result)


@router.get("/categories", response_model=list[CategoryResponse])
def categories(repo: SQLiteArticleRepo = Depends(get_article_repo)) -> list[CategoryResponse]:
    with storage_errors("Error fetching categories"):
        result = run_categories(repo)
    return [CategoryResponse(category=c.category, count=c.count) for c in result.categories]


@router.get("/category/{category}", response_model=list[ArticleResponse])
def articles_by_category(
    category: str,
    repo: SQLiteArticleRepo = Depends(get_article_repo),
) -> list[ArticleResponse]:
    with storage_errors("Error fetching articles by category"):
        result = run_list(ListArticlesInput(category=category), repo)
    return _to_response(result)


@router.get("/{article_id}", response_model=ArticleResponse)
def get_article(
    article_id: str,
    repo: SQLiteArticleRepo = Depends(get_article_repo),
) -> ArticleResponse:
    with storage_errors("Error fetching article"):
        result = run_get(GetArticleInput(article_id=article_id), repo)
    if not result.success or result.article is None:
        raise_for_errors(result.errors)
    return ArticleResponse.from_entity(result.article)


# --- Authenticated mutations ---


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
def create_article(
    payload: ArticlePayload = Depends(read_article_payload),
    current_user: User = Depends(get_current_user),
    repo: SQLiteArticleRepo = Depends(get_article_repo),
    media: MediaHostPort = Depends(get_media_host),
    clock: SystemClock = Depends(get_time_port),
) -> ArticleResponse:
    """Create an article; requires an `image` file."""
    inp = CreateArticleInput(actor=current_user, fields=payload.fields, image=payload.image)
    with storage_errors("Error creating article"):
        result = run_create(inp, repo, media, clock)
    if not result.success or result.article is None:
        raise_for_errors(result.errors)
    return ArticleResponse.from_entity(result.article)


@router.put("/{article_id}", response_model=ArticleResponse)
def update_article(
    article_id: str,
    payload: ArticlePayload = Depends(read_article_payload),
    current_user: User = Depends(get_current_user),
    repo: SQLiteArticleRepo = Depends(get_article_repo),
    media: MediaHostPort = Depends(get_media_host),
    clock: SystemClock = Depends(get_time_port),
    policy: PolicyEngine = Depends(get_policy),
) -> ArticleResponse:
    inp = UpdateArticleInput(
        article_id=article_id,
        actor=current_user,
        fields=payload.fields,
        image=payload.image,
    )
    with storage_errors("Error updating article"):
        result = run_update(inp, repo, media, clock, policy=policy)
    if not result.success or result.article is None:
        raise_for_errors(result.errors)
    return ArticleResponse.from_entity(result.article)


@router.delete("/{article_id}", response_model=MessageResponse)
def delete_article(
    article_id: str,
    current_user: User = Depends(get_current_user),
    repo: SQLiteArticleRepo = Depends(get_article_repo),
    media: MediaHostPort = Depends(get_media_host),
    policy: PolicyEngine = Depends(get_policy),
) -> Any:
    inp = DeleteArticleInput(article_id=article_id, actor=current_user)
    with storage_errors("Error deleting article"):
        result = run_delete_article(inp, repo, media, policy=policy)
    if not result.success:
        raise_for_errors(result.errors)
    return MessageResponse(message="Article deleted successfully")

"""
Articles component - article lifecycle, listing and search.
"""

from .component import (
    FEATURED_LIMIT,
    MAX_IMAGE_BYTES,
    calculate_reading_time,
    check_image,
    matches_query,
    normalize_article_fields,
    run_categories,
    run_create,
    run_delete_article,
    run_featured,
    run_get,
    run_list,
    run_search,
    run_update,
)
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

__all__ = [
    # Entry points
    "run_categories",
    "run_create",
    "run_delete_article",
    "run_featured",
    "run_get",
    "run_list",
    "run_search",
    "run_update",
    # Helpers
    "FEATURED_LIMIT",
    "MAX_IMAGE_BYTES",
    "calculate_reading_time",
    "check_image",
    "matches_query",
    "normalize_article_fields",
    # Models
    "ArticleError",
    "ArticleListOutput",
    "ArticleOutput",
    "CategoriesOutput",
    "CategoryCount",
    "CreateArticleInput",
    "DeleteArticleInput",
    "GetArticleInput",
    "ListArticlesInput",
    "NormalizedPayload",
    "SearchArticlesInput",
    "UpdateArticleInput",
    # Ports
    "ArticleRepoPort",
]

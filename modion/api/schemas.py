from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_serializer

from modion.components.media import generate_avatar_url
from modion.domain.entities import Article, ArticleStatus, SectionType, User

UNKNOWN_AUTHOR = "Unknown"


# --- Auth ---
# Fields are optional so missing values produce the endpoint's own 400 message.
class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserSummary(BaseModel):
    id: str
    name: str
    email: str
    role: str

    @classmethod
    def from_entity(cls, user: User) -> "UserSummary":
        return cls(id=str(user.id), name=user.name, email=user.email, role=user.role)


class TokenResponse(BaseModel):
    success: bool = True
    message: str
    token: str
    user: UserSummary


class StatusResponse(BaseModel):
    user: UserSummary


# --- Articles ---
class SectionModel(BaseModel):
    id: str | None = None
    title: str | None = None
    content: str
    type: SectionType | None = None


class ArticleResponse(BaseModel):
    id: str
    title: str
    category: str
    image: str
    author: str
    author_image: str
    reading_time: str
    sections: list[SectionModel]
    tags: list[str]
    meta_description: str | None = None
    featured: bool
    status: ArticleStatus
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def from_entity(cls, article: Article) -> "ArticleResponse":
        author = article.author_name or UNKNOWN_AUTHOR
        return cls(
            id=article.id,
            title=article.title,
            category=article.category,
            image=article.image,
            author=author,
            author_image=generate_avatar_url(author),
            reading_time=article.reading_time,
            sections=[SectionModel(**s.model_dump()) for s in article.sections],
            tags=article.tags,
            meta_description=article.meta_description,
            featured=article.featured,
            status=article.status,
            createdAt=article.created_at,
            updatedAt=article.updated_at,
        )

    @field_serializer("sections")
    def _omit_unset_section_keys(self, sections: list[SectionModel]) -> list[dict[str, Any]]:
        return [s.model_dump(exclude_none=True) for s in sections]


class CategoryResponse(BaseModel):
    category: str
    count: int


# --- Generic ---
class MessageResponse(BaseModel):
    message: str


class SuccessResponse(BaseModel):
    success: bool = True
    message: str

from datetime import UTC, datetime
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

# --- Enums / Literals ---
RoleType = Literal["user", "admin"]
ArticleCategory = Literal[
    "business",
    "fashion",
    "ideas",
    "lifestyle",
    "design",
    "Technology",
    "creative",
    "story",
]
ArticleStatus = Literal["draft", "published", "archived"]
SectionType = Literal["paragraph", "heading", "list", "quote", "code"]

ROLES: tuple[str, ...] = ("user", "admin")
CATEGORIES: tuple[str, ...] = (
    "business",
    "fashion",
    "ideas",
    "lifestyle",
    "design",
    "Technology",
    "creative",
    "story",
)

READING_TIME_PATTERN = r"^\d+\smin\sread$"
META_DESCRIPTION_MAX_LENGTH = 10000


def utcnow() -> datetime:
    return datetime.now(UTC)


# --- User & Auth ---

class User(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    email: str
    password_hash: str = Field(default="", exclude=True)
    role: RoleType = "user"
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


# --- Articles ---

class Section(BaseModel):
    id: str | None = None
    title: str | None = None
    content: str = Field(min_length=1)
    type: SectionType | None = None


class Article(BaseModel):
    record_id: UUID = Field(default_factory=uuid4)
    id: str = Field(min_length=1)  # external id
    title: str = Field(min_length=1)
    category: ArticleCategory
    image: str
    image_public_id: str | None = None
    author_id: UUID
    reading_time: str = Field(pattern=READING_TIME_PATTERN)
    sections: list[Section]
    tags: list[str] = Field(default_factory=list)
    meta_description: str | None = Field(default=None, max_length=META_DESCRIPTION_MAX_LENGTH)
    featured: bool = False
    status: ArticleStatus = "published"
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    # Resolved from the author's user record on read; never persisted.
    author_name: str | None = Field(default=None, exclude=True)

    @field_validator("sections")
    @classmethod
    def require_sections(cls, v: list[Section]) -> list[Section]:
        if not v:
            raise ValueError("At least one section is required.")
        return v


# --- Subscribers & Contact ---

class EmailSubscriber(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    email: str
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class ContactMessage(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    email: str
    subject: str
    message: str
    created_at: datetime = Field(default_factory=utcnow)

import logging
import os
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from modion.adapters.auth.crypto import JWTAuthAdapter
from modion.adapters.clock import SystemClock
from modion.adapters.dev_email import DevEmailAdapter
from modion.adapters.dev_media import DevMediaAdapter
from modion.adapters.sqlite.repos import (
    SQLiteArticleRepo,
    SQLiteContactRepo,
    SQLiteSubscriberRepo,
    SQLiteUserRepo,
)
from modion.api.auth_utils import DEFAULT_SECRET_KEY
from modion.components.auth import ResolveIdentityInput, run_resolve_identity
from modion.components.media import MediaHostPort
from modion.core.ports.email import EmailPort
from modion.domain.entities import User
from modion.domain.policy import PolicyEngine

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_URLS = "https://modion.vercel.app,http://localhost:5173"


def parse_database_url(url: str) -> str:
    """Accept either `sqlite:///path` or a bare filesystem path."""
    prefix = "sqlite:///"
    if url.startswith(prefix):
        return url[len(prefix) :]
    return url


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.env = os.environ.get("APP_ENV", "development")
        self.port = int(os.environ.get("PORT", "5000"))
        self.jwt_secret = os.environ.get("JWT_SECRET", DEFAULT_SECRET_KEY)
        self.db_path = parse_database_url(os.environ.get("DATABASE_URL", "./data/modion.db"))
        self.log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
        self.client_urls = [
            u.strip()
            for u in os.environ.get("CLIENT_URLS", DEFAULT_CLIENT_URLS).split(",")
            if u.strip()
        ]

        # Media host
        self.cloudinary_url = os.environ.get("CLOUDINARY_URL")
        self.cloudinary_cloud_name = os.environ.get("CLOUDINARY_CLOUD_NAME")
        self.cloudinary_api_key = os.environ.get("CLOUDINARY_API_KEY")
        self.cloudinary_api_secret = os.environ.get("CLOUDINARY_API_SECRET")

        # Email
        self.smtp_host = os.environ.get("SMTP_HOST")
        self.smtp_port = int(os.environ.get("SMTP_PORT", "587"))
        self.smtp_user = os.environ.get("SMTP_USER")
        self.smtp_password = os.environ.get("SMTP_PASSWORD")
        self.email_from = os.environ.get("EMAIL_FROM")

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def has_cloudinary(self) -> bool:
        return bool(
            self.cloudinary_url
            or (
                self.cloudinary_cloud_name
                and self.cloudinary_api_key
                and self.cloudinary_api_secret
            )
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Repos ---
def get_user_repo(settings: Settings = Depends(get_settings)) -> SQLiteUserRepo:
    return SQLiteUserRepo(settings.db_path)


def get_article_repo(settings: Settings = Depends(get_settings)) -> SQLiteArticleRepo:
    return SQLiteArticleRepo(settings.db_path)


def get_subscriber_repo(settings: Settings = Depends(get_settings)) -> SQLiteSubscriberRepo:
    return SQLiteSubscriberRepo(settings.db_path)


def get_contact_repo(settings: Settings = Depends(get_settings)) -> SQLiteContactRepo:
    return SQLiteContactRepo(settings.db_path)


# --- Services ---
def get_policy() -> PolicyEngine:
    return PolicyEngine()


def get_auth_adapter(settings: Settings = Depends(get_settings)) -> JWTAuthAdapter:
    return JWTAuthAdapter(settings.jwt_secret)


# Time adapter for deterministic time operations
_clock_instance: SystemClock | None = None


def get_time_port() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


# Email adapter singleton
_email_instance: EmailPort | None = None


def build_email_adapter(settings: Settings) -> EmailPort:
    if settings.smtp_host:
        from modion.adapters.smtp_email import SMTPEmailAdapter

        return SMTPEmailAdapter(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_user,
            password=settings.smtp_password,
            default_sender=settings.email_from,
        )
    return DevEmailAdapter()


def get_email_adapter() -> EmailPort:
    """Get email adapter singleton (SMTP if configured, else dev logger)."""
    global _email_instance
    if _email_instance is None:
        _email_instance = build_email_adapter(get_settings())
        logger.info("Email adapter: %s", type(_email_instance).__name__)
    return _email_instance


# Media host singleton
_media_instance: MediaHostPort | None = None


def build_media_adapter(settings: Settings) -> MediaHostPort:
    if settings.has_cloudinary:
        from modion.adapters.cloudinary_media import CloudinaryMediaAdapter

        return CloudinaryMediaAdapter(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
        )
    return DevMediaAdapter()


def get_media_host() -> MediaHostPort:
    """Get media host singleton (Cloudinary if configured, else in-memory)."""
    global _media_instance
    if _media_instance is None:
        _media_instance = build_media_adapter(get_settings())
        logger.info("Media host: %s", type(_media_instance).__name__)
    return _media_instance


# --- Auth ---
AUTH_COOKIE = "jwt"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_current_user(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
    auth_adapter: JWTAuthAdapter = Depends(get_auth_adapter),
) -> User:
    # 1. Authorization header (handled by oauth2_scheme), then 2. cookie
    if not token:
        token = request.cookies.get(AUTH_COOKIE)

    result = run_resolve_identity(ResolveIdentityInput(token=token), user_repo, auth_adapter)
    if not result.success or result.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result.error,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return result.user

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from modion import __version__
from modion.adapters.sqlite.migrator import SQLiteMigrator
from modion.api.deps import get_email_adapter, get_media_host, get_settings
from modion.api.errors import install_error_handlers

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()
    configure_logging(settings.log_level)

    # Apply migrations on startup (fail-fast)
    try:
        applied = SQLiteMigrator(settings.db_path).run_migrations()
    except RuntimeError as e:
        logger.critical("Database migration failed: %s", e)
        sys.exit(1)
    if applied:
        logger.info("Applied migrations: %s", ", ".join(applied))

    # Resolve adapters eagerly so the active ones show up in the startup log
    get_email_adapter()
    get_media_host()
    logger.info("Modion API %s started (env=%s)", __version__, settings.env)

    yield


app = FastAPI(
    title="Modion API",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

install_error_handlers(app)

# --- Routers ---
from modion.api.routes import articles, auth, contact, subscribe  # noqa: E402

app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(articles.router, prefix="/api/articles", tags=["Articles"])
app.include_router(contact.router, prefix="/api/contact", tags=["Contact"])
app.include_router(subscribe.router, prefix="/api/subscribe", tags=["Subscribe"])


# CORS (Allow Frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().client_urls,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}

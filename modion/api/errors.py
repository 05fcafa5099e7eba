"""
HTTP error mapping.

Component error codes become HTTP statuses here; every error body is
`{message, error?}`.
"""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any, NoReturn

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from modion.components.articles import ArticleError
from modion.core.ports.db import StorageError

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "forbidden": status.HTTP_403_FORBIDDEN,
}


def error_detail(message: str, error: Any | None = None) -> dict[str, Any]:
    detail: dict[str, Any] = {"message": message}
    if error is not None:
        detail["error"] = error
    return detail


def raise_for_errors(errors: Sequence[ArticleError]) -> NoReturn:
    """Raise the HTTPException for the first component error."""
    err = errors[0]
    raise HTTPException(
        status_code=STATUS_BY_CODE.get(err.code, status.HTTP_400_BAD_REQUEST),
        detail=error_detail(err.message, err.detail),
    )


@contextmanager
def storage_errors(message: str, expose: bool = True) -> Iterator[None]:
    """
    Turn a StorageError inside the block into a 500 with `message`.

    With `expose=False` the body carries only the message; the driver
    error is still logged.
    """
    try:
        yield
    except StorageError as e:
        logger.error("%s: %s", message, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail(message, str(e) if expose else None),
        ) from e


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"message": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request", "errors": jsonable_errors(exc)},
    )


async def storage_exception_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Unhandled storage error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_detail("Internal server error", str(exc)),
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": [str(p) for p in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StorageError, storage_exception_handler)  # type: ignore[arg-type]

"""
Error Handling

Two kinds of error reach the terminal handlers:

1. Not found (404)
   - The requested identifier does not resolve to a record
     (raised explicitly by detail and update pages as NotFoundError)
   - No route matches the path

2. Operation failure (500)
   - Any storage or other unexpected failure

Both render error.html with a message and set the response status.
The full error detail (traceback) is only included outside production.

Validation failures are NOT errors: controllers re-render the form
with the field messages instead.
"""

import logging
import traceback
from collections.abc import Mapping

from fastapi import FastAPI, HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import HTMLResponse

from app.config import get_settings
from app.templating import render

logger = logging.getLogger(__name__)


class NotFoundError(HTTPException):
    """
    The requested record does not exist.

    Example:
        if author is None:
            raise NotFoundError("Author not found")
    """

    def __init__(self, message: str) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=message)


def render_error(
    request: Request,
    message: str,
    status_code: int,
    exc: BaseException | None = None,
    headers: Mapping[str, str] | None = None,
) -> HTMLResponse:
    """Render the generic error page, keeping headers such as Allow on a 405."""
    detail = None
    if exc is not None and not get_settings().is_production:
        detail = "".join(traceback.format_exception(exc))
    return render(
        request,
        "error.html",
        {"title": "Error", "message": message, "status_code": status_code, "detail": detail},
        status_code=status_code,
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """
    Attach the terminal error handlers to the application.

    Starlette's HTTPException covers NotFoundError, unmatched paths and
    wrong methods; everything else is an operation failure.
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> HTMLResponse:
        if exc.status_code >= 500:
            logger.error(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
        else:
            logger.info(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
        return render_error(
            request,
            str(exc.detail),
            exc.status_code,
            exc,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> HTMLResponse:
        logger.error(f"Database error on {request.url.path}: {exc}")
        return render_error(
            request,
            "A database error occurred. Please try again later.",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            exc,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> HTMLResponse:
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
        return render_error(
            request,
            "An internal error occurred.",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            exc,
        )

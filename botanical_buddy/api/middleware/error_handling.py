# 📄 File: botanical_buddy/api/middleware/error_handling.py
#
# 🧭 Purpose (Layman Explanation):
# Catches every problem that happens while answering a request and turns it into the same
# simple error message shape, so the mobile app never sees a raw crash.
#
# 🧪 Purpose (Technical Summary):
# Exception handlers for domain exceptions, request validation, HTTP and rate-limit errors,
# plus a last-resort middleware converting unexpected exceptions into a 500 envelope.
# Exception text is only exposed when DEBUG is on.
#
# 🔗 Dependencies:
# - FastAPI / Starlette exception handling
# - slowapi RateLimitExceeded
# - botanical_buddy.shared.core.exceptions, responses
#
# 🔄 Connected Modules / Calls From:
# - botanical_buddy.main (middleware and handler registration)

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from botanical_buddy.shared.config.settings import get_settings
from botanical_buddy.shared.core.exceptions import BotanicalBuddyException
from botanical_buddy.shared.core.responses import error_envelope

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

# Default summaries for framework-raised HTTP errors
HTTP_ERROR_MESSAGES: Dict[int, str] = {
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not found",
    405: "Method not allowed",
}


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Last-resort handler for exceptions no exception handler claimed.

    Domain and framework errors are rendered by the handlers registered in
    register_exception_handlers; anything reaching this middleware is a bug or an
    infrastructure failure and is answered with a generic 500 envelope.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.settings = get_settings()

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(
                f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}"
            )
            return JSONResponse(
                status_code=500,
                content=error_envelope(
                    INTERNAL_ERROR_MESSAGE,
                    str(exc) if self.settings.DEBUG else None,
                ),
            )


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

async def botanical_buddy_exception_handler(
    request: Request, exc: BotanicalBuddyException
) -> JSONResponse:
    """Render application exceptions with the status their kind maps to."""
    if exc.status_code >= 500:
        logger.error(f"{exc!r} on {request.method} {request.url.path} context={exc.context}")
    else:
        logger.info(f"{exc!r} on {request.method} {request.url.path}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    detail = f"{field}: {first.get('msg')}" if field else first.get("msg")

    logger.info(f"Request validation failed on {request.method} {request.url.path}: {detail}")
    return JSONResponse(status_code=400, content=error_envelope("Invalid input", detail))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    summary = HTTP_ERROR_MESSAGES.get(exc.status_code, "Request failed")
    detail = exc.detail if isinstance(exc.detail, str) and exc.detail.lower() != summary.lower() else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(summary, detail),
        headers=getattr(exc, "headers", None),
    )


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(f"Rate limit exceeded on {request.url.path}: {exc.detail}")
    content: Dict[str, Any] = error_envelope(
        "Too many requests",
        f"Rate limit exceeded: {exc.detail}. Please try again later.",
    )
    return JSONResponse(status_code=429, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BotanicalBuddyException, botanical_buddy_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

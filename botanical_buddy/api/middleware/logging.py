# 📄 File: botanical_buddy/api/middleware/logging.py
#
# 🧭 Purpose (Layman Explanation):
# Keeps a diary line for every request: what was asked, how it ended and how long it took,
# with a tracking number that also comes back to the caller.
#
# 🧪 Purpose (Technical Summary):
# Request logging middleware. Reuses an incoming X-Request-ID or generates one, publishes
# it through request_id_var so every log record carries it, and echoes it in the response.
# Authenticated requests are logged with the caller id.
#
# 🔗 Dependencies:
# - Starlette BaseHTTPMiddleware
# - botanical_buddy.shared.utils.logging (request_id_var)
#
# 🔄 Connected Modules / Calls From:
# - botanical_buddy.main (middleware registration)

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from botanical_buddy.shared.utils.logging import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Header values longer than this are replaced with a generated id
MAX_REQUEST_ID_LENGTH = 128

SLOW_REQUEST_THRESHOLD = 2.0


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Per-request access log with request id correlation."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = self._get_or_create_request_id(request)
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time

            # Set by get_current_user on authenticated routes
            user_id = getattr(request.state, "user_id", None)
            caller = f" user={user_id}" if user_id else ""

            level = logging.WARNING if duration > SLOW_REQUEST_THRESHOLD else logging.INFO
            logger.log(
                level,
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"({duration * 1000:.1f}ms){caller}",
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_var.reset(token)

    def _get_or_create_request_id(self, request: Request) -> str:
        incoming = request.headers.get(REQUEST_ID_HEADER, "").strip()
        if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH and incoming.isprintable():
            return incoming
        return uuid.uuid4().hex

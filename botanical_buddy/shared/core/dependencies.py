"""
Common FastAPI dependencies for Botanical Buddy.
Provides bearer-token authentication, the shared lookup cache and the auth rate limiter.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from slowapi import Limiter
from slowapi.util import get_remote_address

from botanical_buddy.shared.config.settings import get_settings
from botanical_buddy.shared.core.exceptions import AuthenticationError
from botanical_buddy.shared.core.security import INVALID_TOKEN_MESSAGE, get_security_manager
from botanical_buddy.shared.infrastructure.cache.memory_cache import TTLCache

logger = logging.getLogger(__name__)

# Security scheme for OpenAPI documentation; missing headers are reported by us as 401
security = HTTPBearer(auto_error=False)

# Rate limiting for the unauthenticated auth endpoints
limiter = Limiter(
    key_func=get_remote_address,
    enabled=get_settings().RATE_LIMIT_ENABLED,
)


class CurrentUser:
    """Caller identity extracted from a validated access token."""

    def __init__(self, user_id: UUID):
        self.user_id = user_id

    def __repr__(self) -> str:
        return f"CurrentUser(user_id={self.user_id})"


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Pull the token out of an ``Authorization: Bearer <token>`` header value.

    Raises:
        AuthenticationError: Header missing or not a bearer credential
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError(details="Missing or invalid authorization header")
    token = authorization[len("Bearer "):].strip()
    if not token:
        raise AuthenticationError(details="Missing or invalid authorization header")
    return token


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """
    Resolve the authenticated caller.

    The token subject must be a user id; demo tokens carrying a plain username are
    rejected here.

    Raises:
        AuthenticationError: Missing header, invalid token or non-UUID subject
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError(details="Missing or invalid authorization header")

    payload = get_security_manager().decode_token(credentials.credentials)

    try:
        user_id = UUID(payload["sub"])
    except (ValueError, TypeError):
        logger.info("Rejected token whose subject is not a user id")
        raise AuthenticationError(details=INVALID_TOKEN_MESSAGE)

    request.state.user_id = str(user_id)
    return CurrentUser(user_id=user_id)


def get_cache(request: Request) -> TTLCache:
    """Lookup cache owned by the running application."""
    return request.app.state.cache

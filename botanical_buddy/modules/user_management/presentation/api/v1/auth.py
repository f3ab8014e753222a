# 📄 File: botanical_buddy/modules/user_management/presentation/api/v1/auth.py
#
# 🧭 Purpose (Layman Explanation):
# The front door of the app: sign up, log in, check or renew your access pass, and a
# demo pass for trying the API with a shared key.
#
# 🧪 Purpose (Technical Summary):
# Authentication endpoints issuing HS256 bearer tokens. register/login/token are public and
# rate limited with slowapi; refresh and verify validate the presented token; /me needs a
# bearer token.
#
# 🔗 Dependencies:
# - FastAPI router and dependencies
# - slowapi for rate limiting
# - user_management UserService
# - botanical_buddy.shared.core.security
#
# 🔄 Connected Modules / Calls From:
# - botanical_buddy.api.v1.router (mounted at /api/v1/auth)

import hmac
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from botanical_buddy.modules.user_management.domain.services.user_service import UserService
from botanical_buddy.modules.user_management.presentation.api.schemas.auth_schemas import (
    AuthData,
    DemoTokenRequest,
    LoginRequest,
    RegisterRequest,
    TokenData,
    TokenRefreshRequest,
    TokenVerification,
)
from botanical_buddy.modules.user_management.presentation.api.schemas.user_schemas import UserResponse
from botanical_buddy.shared.config.settings import get_settings
from botanical_buddy.shared.core.dependencies import (
    CurrentUser,
    extract_bearer_token,
    get_current_user,
    limiter,
)
from botanical_buddy.shared.core.exceptions import (
    AuthenticationError,
    BadRequestError,
    BotanicalBuddyException,
)
from botanical_buddy.shared.core.responses import ApiResponse
from botanical_buddy.shared.core.security import SecurityManager, get_security_manager
from botanical_buddy.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)

AUTH_RATE_LIMIT = get_settings().AUTH_RATE_LIMIT
TOKEN_USAGE = "Include this token in the Authorization header as: Bearer {token}"

auth_router = APIRouter()


def get_user_service(
    session: AsyncSession = Depends(get_db_session),
    security_manager: SecurityManager = Depends(get_security_manager),
) -> UserService:
    return UserService(session, security_manager)


def _expires_in_text() -> str:
    return f"{get_settings().JWT_ACCESS_TOKEN_EXPIRE_HOURS} hours"


@auth_router.post(
    "/token",
    response_model=ApiResponse[TokenData],
    summary="Issue a demo token",
    description="Issue a token for a plain username, gated by the shared demo API key",
    responses={
        400: {"description": "Missing or invalid username"},
        401: {"description": "Invalid API key"},
        429: {"description": "Too many requests"},
    },
)
@limiter.limit(AUTH_RATE_LIMIT)
async def issue_demo_token(
    request: Request,
    token_request: DemoTokenRequest,
    security_manager: SecurityManager = Depends(get_security_manager),
) -> ApiResponse[TokenData]:
    """
    Issue a demo token.

    Demo tokens carry the username as subject; resource endpoints require a user id
    subject and will reject them.
    """
    username = (token_request.username or "").strip()
    if not username:
        raise BadRequestError("Missing or invalid username")

    expected_key = get_settings().AUTH_DEMO_API_KEY
    if not token_request.api_key or not hmac.compare_digest(token_request.api_key, expected_key):
        logger.warning(f"Demo token request with invalid API key for username: {username}")
        raise AuthenticationError("Invalid API key")

    token = security_manager.issue_token(username)
    logger.info(f"Demo token issued for username: {username}")

    return ApiResponse(
        data=TokenData(token=token, expires_in=_expires_in_text(), usage=TOKEN_USAGE.format(token=token)),
        message="Token issued successfully",
    )


@auth_router.post(
    "/refresh",
    response_model=ApiResponse[TokenData],
    summary="Refresh a token",
    description="Exchange a valid, unexpired token for a new one with the same subject",
    responses={401: {"description": "Invalid or expired token"}},
)
async def refresh_token(
    refresh_request: TokenRefreshRequest,
    security_manager: SecurityManager = Depends(get_security_manager),
) -> ApiResponse[TokenData]:
    subject = security_manager.validate_token(refresh_request.token)
    token = security_manager.issue_token(subject)
    logger.info(f"Token refreshed for subject: {subject}")

    return ApiResponse(
        data=TokenData(token=token, expires_in=_expires_in_text()),
        message="Token refreshed successfully",
    )


@auth_router.get(
    "/verify",
    response_model=ApiResponse[TokenVerification],
    summary="Verify a token",
    description="Check the bearer token in the Authorization header",
    responses={401: {"description": "Missing, invalid or expired token"}},
)
async def verify_token(
    request: Request,
    security_manager: SecurityManager = Depends(get_security_manager),
):
    try:
        token = extract_bearer_token(request.headers.get("Authorization"))
        subject = security_manager.validate_token(token)
    except BotanicalBuddyException as e:
        payload = e.to_dict()
        payload["valid"] = False
        return JSONResponse(status_code=e.status_code, content=payload)

    return ApiResponse(
        data=TokenVerification(valid=True, subject=subject),
        message="Token is valid",
    )


@auth_router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
    summary="Register new user account",
    responses={
        400: {"description": "Invalid data or email already registered"},
        429: {"description": "Too many registration attempts"},
    },
)
@limiter.limit(AUTH_RATE_LIMIT)
async def register(
    request: Request,
    registration_data: RegisterRequest,
    user_service: UserService = Depends(get_user_service),
) -> ApiResponse[AuthData]:
    """Create a Free-tier account and return a token for it."""
    logger.info(f"User registration attempt for email: {registration_data.email}")

    user = await user_service.register(
        email=registration_data.email,
        password=registration_data.password,
        first_name=registration_data.first_name,
        last_name=registration_data.last_name,
    )
    token = user_service.security.issue_token(str(user.id))

    return ApiResponse(
        data=AuthData(
            token=token,
            expires_in=_expires_in_text(),
            user=UserResponse.model_validate(user),
        ),
        message="Registration successful",
    )


@auth_router.post(
    "/login",
    response_model=ApiResponse[AuthData],
    summary="User authentication",
    responses={
        401: {"description": "Invalid email or password"},
        429: {"description": "Too many login attempts"},
    },
)
@limiter.limit(AUTH_RATE_LIMIT)
async def login(
    request: Request,
    login_data: LoginRequest,
    user_service: UserService = Depends(get_user_service),
) -> ApiResponse[AuthData]:
    user = await user_service.authenticate(login_data.email, login_data.password)
    token = user_service.security.issue_token(str(user.id))
    logger.info(f"User logged in: {user.id}")

    return ApiResponse(
        data=AuthData(
            token=token,
            expires_in=_expires_in_text(),
            user=UserResponse.model_validate(user),
        ),
        message="Login successful",
    )


@auth_router.get(
    "/me",
    response_model=ApiResponse[UserResponse],
    summary="Current user profile",
    responses={401: {"description": "Not authenticated"}, 404: {"description": "User not found"}},
)
async def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    user = await user_service.get_user(current_user.user_id)
    return ApiResponse(data=UserResponse.model_validate(user))

"""
Authentication API Schemas

Request Schemas:
- DemoTokenRequest: API-key gated token issuance for a plain username
- TokenRefreshRequest: Exchange a still-valid token for a fresh one
- RegisterRequest: Account creation
- LoginRequest: Email/password credentials

Response Schemas:
- TokenData: Issued token and its metadata
- AuthData: Token plus the authenticated user's profile
- TokenVerification: Result of checking a bearer token
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from botanical_buddy.modules.user_management.presentation.api.schemas.user_schemas import UserResponse


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class DemoTokenRequest(BaseModel):
    """
    Demo token request.

    Both fields are optional at the schema level so the endpoint can answer with its
    own 400/401 messages.
    """

    username: Optional[str] = Field(None, max_length=255, description="Subject to embed in the token")
    api_key: Optional[str] = Field(None, max_length=255, description="Shared demo API key")

    model_config = ConfigDict(
        json_schema_extra={"example": {"username": "demo-user", "api_key": "demo-api-key"}}
    )


class TokenRefreshRequest(BaseModel):
    token: str = Field(..., min_length=1, description="Current, unexpired access token")


class RegisterRequest(BaseModel):
    """User registration request."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=8, max_length=128, description="Account password")
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "jane.doe@example.com",
                "password": "SecurePassword123!",
                "first_name": "Jane",
                "last_name": "Doe",
            }
        }
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Emails are compared case-insensitively."""
        return v.lower()


class LoginRequest(BaseModel):
    """
    User login request.

    The email is not format-validated here; an unknown or malformed address simply
    fails authentication.
    """

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class TokenData(BaseModel):
    token: str
    token_type: str = "Bearer"
    expires_in: str = "24 hours"
    usage: Optional[str] = None


class AuthData(TokenData):
    user: UserResponse


class TokenVerification(BaseModel):
    valid: bool
    subject: Optional[str] = None

"""
Security utilities for Botanical Buddy.

Password hashing with bcrypt (passlib) and issuance/validation of signed,
time-limited bearer tokens (python-jose). Token validation is stateless:
a token stays valid until it expires.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from botanical_buddy.shared.config.settings import Settings, get_settings
from botanical_buddy.shared.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid or expired token"


class SecurityManager:
    """Central security manager for password hashing and token handling."""

    def __init__(self, settings: Settings):
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.issuer = settings.JWT_ISSUER
        self.audience = settings.JWT_AUDIENCE
        self.access_token_expire = timedelta(hours=settings.JWT_ACCESS_TOKEN_EXPIRE_HOURS)
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.BCRYPT_ROUNDS,
        )

    # =========================================================================
    # PASSWORDS
    # =========================================================================

    def hash_password(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its bcrypt hash.

        A malformed or unknown hash counts as a mismatch.
        """
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            logger.warning("Stored password hash could not be parsed")
            return False

    # =========================================================================
    # TOKENS
    # =========================================================================

    def issue_token(
        self,
        subject: str,
        expires_delta: Optional[timedelta] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """
        Issue a signed access token.

        Args:
            subject: Identity placed in the ``sub`` claim
            expires_delta: Token lifetime, defaults to the configured 24 hours
            now: Issue time, defaults to the current UTC time

        Returns:
            str: Encoded JWT
        """
        issued_at = now or datetime.now(timezone.utc)
        expire = issued_at + (expires_delta or self.access_token_expire)

        claims: Dict[str, Any] = {
            "sub": str(subject),
            "jti": uuid.uuid4().hex,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
        }
        token = jwt.encode(claims, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Issued access token {claims['jti']} for subject {subject}")
        return token

    def decode_token(self, token: str) -> Dict[str, Any]:
        """
        Decode and fully verify a token.

        Raises:
            AuthenticationError: On any failure, with one generic message
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={"leeway": 0, "require_exp": True, "require_sub": True},
            )
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            raise AuthenticationError(details=INVALID_TOKEN_MESSAGE)

        if not payload.get("sub"):
            raise AuthenticationError(details=INVALID_TOKEN_MESSAGE)
        return payload

    def validate_token(self, token: str) -> str:
        """Return the subject of a valid token."""
        return self.decode_token(token)["sub"]


@lru_cache()
def get_security_manager() -> SecurityManager:
    return SecurityManager(get_settings())

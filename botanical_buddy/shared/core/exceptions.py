# 📄 File: botanical_buddy/shared/core/exceptions.py
#
# 🧭 Purpose (Layman Explanation):
# Defines the different kinds of problems the app can run into (not logged in, record
# not found, plan limit reached, weather service down) so each one gets a clear,
# consistent answer for the mobile app.
#
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy keyed by an explicit ErrorKind enumeration. The kind is
# mapped to an HTTP status once, in ERROR_STATUS_CODES, and every exception renders
# itself as the uniform error envelope.
#
# 🔗 Dependencies:
# - enum, typing (standard library)
#
# 🔄 Connected Modules / Calls From:
# - Domain services and repositories (raise)
# - botanical_buddy.api.middleware.error_handling (render)

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Error taxonomy surfaced to API clients."""

    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    BAD_REQUEST = "BAD_REQUEST"
    CONFLICT = "CONFLICT"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


ERROR_STATUS_CODES: Dict[ErrorKind, int] = {
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UPSTREAM_FAILURE: 502,
    ErrorKind.INTERNAL_ERROR: 500,
}


class BotanicalBuddyException(Exception):
    """
    Base exception for all application errors.

    Args:
        message: Human readable summary, sent as the envelope ``error`` field
        kind: Error category deciding the HTTP status
        details: Optional detail, sent as the envelope ``message`` field
    """

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        kind: Optional[ErrorKind] = None,
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.details = details
        self.context = context or {}

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_CODES[self.kind]

    def to_dict(self) -> Dict[str, Any]:
        """Render as the error envelope."""
        payload: Dict[str, Any] = {"success": False, "error": self.message}
        if self.details:
            payload["message"] = self.details
        return payload

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind.value}, message={self.message!r})"


# =============================================================================
# AUTHENTICATION
# =============================================================================

class AuthenticationError(BotanicalBuddyException):
    """Missing, malformed or expired credentials."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized", details: Optional[str] = None):
        super().__init__(message=message, details=details)


# =============================================================================
# RESOURCE ERRORS
# =============================================================================

class NotFoundError(BotanicalBuddyException):
    """
    Record does not exist or is owned by another user.

    Both cases share this error so callers cannot probe for other users' records.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource_type: str = "Resource", message: Optional[str] = None):
        super().__init__(
            message=message or f"{resource_type} not found",
            context={"resource_type": resource_type},
        )
        self.resource_type = resource_type


class BadRequestError(BotanicalBuddyException):
    """Invalid input or a reference to a record the caller does not own."""

    kind = ErrorKind.BAD_REQUEST

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message=message, details=details)


class TierLimitExceededError(BadRequestError):
    """Subscription tier does not allow creating another resource."""

    def __init__(self, tier: str, current_count: int):
        super().__init__(
            "Plant limit reached for your subscription tier. Please upgrade to add more plants."
        )
        self.context = {"tier": tier, "current_count": current_count}


class ConflictError(BotanicalBuddyException):
    """Operation conflicts with existing data (referential guard)."""

    kind = ErrorKind.CONFLICT

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message=message, details=details)


# =============================================================================
# INFRASTRUCTURE ERRORS
# =============================================================================

class ExternalAPIError(BotanicalBuddyException):
    """Outbound provider call failed. The provider's own message is kept out of the response."""

    kind = ErrorKind.UPSTREAM_FAILURE

    def __init__(
        self,
        api_name: str,
        message: Optional[str] = None,
        api_status_code: Optional[int] = None,
        details: Optional[str] = None,
    ):
        super().__init__(
            message=message or f"{api_name} request failed",
            details=details,
            context={"api_name": api_name, "api_status_code": api_status_code},
        )
        self.api_name = api_name
        self.api_status_code = api_status_code


class DatabaseError(BotanicalBuddyException):
    kind = ErrorKind.INTERNAL_ERROR

    def __init__(self, message: str = "Database operation failed", operation: Optional[str] = None):
        super().__init__(message=message, context={"operation": operation})
        self.operation = operation

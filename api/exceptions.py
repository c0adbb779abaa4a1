"""Standard exception classes for the API.

All custom exceptions inherit from GatewayException and include:
- message: Human-readable error message
- error_code: Machine-readable error code (e.g., "NOT_FOUND")
- details: Optional dictionary with additional context
- headers: Optional response headers (e.g., WWW-Authenticate)
"""

from typing import Any, Optional


class GatewayException(Exception):
    """Base exception for all gateway API errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for client handling
        details: Optional dictionary with additional error context
        status_code: HTTP status code (set by subclasses)
    """

    status_code: int = 500
    default_error_code: str = "INTERNAL_ERROR"
    default_message: str = "An unexpected error occurred"
    headers: Optional[dict[str, str]] = None

    def __init__(
        self,
        message: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        result = {
            "code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ValidationError(GatewayException):
    """Request validation failed (HTTP 400)."""

    status_code = 400
    default_error_code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class AuthenticationError(GatewayException):
    """Authentication failed (HTTP 401).

    Use when credentials are missing, invalid, or expired.
    """

    status_code = 401
    default_error_code = "AUTHENTICATION_FAILED"
    default_message = "Authentication required"
    headers = {"WWW-Authenticate": "Bearer"}


class MissingCredentialError(AuthenticationError):
    """No bearer token was presented."""

    default_error_code = "TOKEN_REQUIRED"
    default_message = "Access token required"


class TokenExpiredError(AuthenticationError):
    """The bearer token was genuine but is past its expiry."""

    default_error_code = "TOKEN_EXPIRED"
    default_message = "Token expired"


class InvalidCredentialsError(AuthenticationError):
    """Login failed.

    One message for unknown email and wrong password alike.
    """

    default_error_code = "INVALID_CREDENTIALS"
    default_message = "Invalid credentials"
    headers = None


class AuthorizationError(GatewayException):
    """Authorization failed (HTTP 403).

    Use when the user is authenticated but lacks permission.
    """

    status_code = 403
    default_error_code = "FORBIDDEN"
    default_message = "Permission denied"


class InvalidTokenError(AuthorizationError):
    """The bearer token is malformed, tampered with, or signed elsewhere."""

    default_error_code = "TOKEN_INVALID"
    default_message = "Invalid token"


class InsufficientRoleError(AuthorizationError):
    """The identity's role is not in the route's allow-list."""

    default_error_code = "INSUFFICIENT_PERMISSIONS"
    default_message = "Insufficient permissions"


class AccountSuspendedError(AuthorizationError):
    """The account exists but has been suspended; no token is issued."""

    default_error_code = "ACCOUNT_SUSPENDED"
    default_message = "Account suspended"


class NotFoundError(GatewayException):
    """Resource not found (HTTP 404)."""

    status_code = 404
    default_error_code = "NOT_FOUND"
    default_message = "Resource not found"


class ConflictError(GatewayException):
    """Resource conflict (HTTP 409).

    Use when the request conflicts with current state
    (e.g., duplicate email).
    """

    status_code = 409
    default_error_code = "CONFLICT"
    default_message = "Resource conflict"


class RateLimitError(GatewayException):
    """Rate limit exceeded (HTTP 429)."""

    status_code = 429
    default_error_code = "RATE_LIMIT_EXCEEDED"
    default_message = "Too many requests from this IP, please try again later"


class InternalError(GatewayException):
    """Unexpected failure (HTTP 500).

    The message is shown to clients, so it must stay generic.
    """

    status_code = 500
    default_error_code = "INTERNAL_ERROR"
    default_message = "Internal server error"


class ServiceUnavailableError(GatewayException):
    """Dependency unavailable (HTTP 503)."""

    status_code = 503
    default_error_code = "SERVICE_UNAVAILABLE"
    default_message = "Service unavailable"

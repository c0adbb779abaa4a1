"""Authentication and authorization module for the API."""

from api.auth.jwt import (
    TokenPayload,
    TokenService,
    VerificationResult,
    VerificationStatus,
)
from api.auth.password import hash_password, verify_password
from api.auth.dependencies import (
    authenticate,
    get_auth_service,
    get_token_service,
    require_local_auth,
    require_role,
    require_user_sync,
)

__all__ = [
    # JWT
    "TokenPayload",
    "TokenService",
    "VerificationResult",
    "VerificationStatus",
    # Password
    "hash_password",
    "verify_password",
    # Dependencies
    "authenticate",
    "get_auth_service",
    "get_token_service",
    "require_local_auth",
    "require_role",
    "require_user_sync",
]

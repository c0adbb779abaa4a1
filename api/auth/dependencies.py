"""FastAPI dependencies for authentication and authorization.

Provides:
- authenticate: Verify the bearer token and attach the identity to the request
- require_role: Enforce a role allow-list on an authenticated identity
- get_auth_service / get_token_service / get_auth_provider: app-scoped services
"""

from enum import Enum
from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from api.auth.jwt import TokenPayload, TokenService, VerificationStatus
from api.auth.providers import BaseAuthProvider
from api.auth.service import AuthService
from api.exceptions import (
    AuthenticationError,
    InsufficientRoleError,
    InvalidTokenError,
    MissingCredentialError,
    TokenExpiredError,
    ValidationError,
)
from gateway.db import get_session_dependency
from gateway.logging import bind_context, get_logger

logger = get_logger(__name__)

# Security scheme for JWT Bearer tokens; we raise our own 401 when absent
security = HTTPBearer(auto_error=False)


# =============================================================================
# App-scoped services
# =============================================================================


def get_token_service(request: Request) -> TokenService:
    """The TokenService created by create_app."""
    return request.app.state.token_service


def get_auth_provider(request: Request) -> BaseAuthProvider:
    """The identity provider selected by AUTH_PROVIDER."""
    return request.app.state.auth_provider


def get_auth_service(
    session: Session = Depends(get_session_dependency),
    token_service: TokenService = Depends(get_token_service),
) -> AuthService:
    """Dependency to get AuthService with database session."""
    return AuthService(session, token_service)


# =============================================================================
# Access gate
# =============================================================================


async def authenticate(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_service: TokenService = Depends(get_token_service),
) -> TokenPayload:
    """Verify the bearer token and attach the identity to the request.

    Reads ``Authorization: Bearer <token>``. On success the decoded payload
    is stored on ``request.state.identity`` for downstream dependencies.

    Runs on the event loop rather than the thread pool so the ``user_id``
    it binds into the log context reaches the route handler.

    Raises:
        MissingCredentialError (401): No header, or not a Bearer scheme
        TokenExpiredError (401): Token signature is fine but it has expired
        InvalidTokenError (403): Anything else wrong with the token

    Returns:
        TokenPayload of the authenticated caller
    """
    if not credentials or not credentials.credentials:
        raise MissingCredentialError()

    result = token_service.verify(credentials.credentials)

    if result.status is VerificationStatus.EXPIRED:
        raise TokenExpiredError()
    if result.status is not VerificationStatus.OK or result.payload is None:
        logger.info("token_rejected", reason=result.error, path=request.url.path)
        raise InvalidTokenError()

    request.state.identity = result.payload
    request.state.token_claims = result.claims
    bind_context(user_id=result.payload.user_id)
    return result.payload


def require_role(*allowed_roles: str) -> Callable:
    """Create a dependency that checks the caller's role against an allow-list.

    Must run after ``authenticate``:

    ```python
    @router.put(
        "/users/{user_id}/status",
        dependencies=[Depends(authenticate), Depends(require_role("AGENCY_ADMIN"))],
    )
    ```

    Membership is exact string equality (case-sensitive).

    Args:
        *allowed_roles: Role names (or UserRole members) that may pass

    Returns:
        A FastAPI dependency that returns the TokenPayload if authorized

    Raises:
        AuthenticationError 401: No identity attached to the request
        InsufficientRoleError 403: Role not in the allow-list
    """
    allowed = frozenset(
        role.value if isinstance(role, Enum) else role for role in allowed_roles
    )

    async def role_checker(request: Request) -> TokenPayload:
        identity: Optional[TokenPayload] = getattr(request.state, "identity", None)
        if identity is None:
            raise AuthenticationError("Authentication required")

        if identity.role not in allowed:
            logger.info(
                "role_rejected",
                role=identity.role,
                allowed=sorted(allowed),
                path=request.url.path,
            )
            raise InsufficientRoleError()
        return identity

    return role_checker


# =============================================================================
# Provider gates
# =============================================================================


def require_local_auth(
    provider: BaseAuthProvider = Depends(get_auth_provider),
) -> None:
    """Reject signup/login when the active provider is not password-based."""
    if not provider.supports_local_auth:
        raise ValidationError(
            f"This endpoint is not available with {provider.name} authentication. "
            f"Please use the {provider.name} login flow instead.",
            error_code="PROVIDER_UNSUPPORTED",
        )


def require_user_sync(
    provider: BaseAuthProvider = Depends(get_auth_provider),
) -> None:
    """Reject sync-user when the active provider does not delegate to an IdP."""
    if not provider.supports_user_sync:
        raise ValidationError(
            f"This endpoint is not available with {provider.name} authentication. "
            "Use /auth/signup and /auth/login instead.",
            error_code="PROVIDER_UNSUPPORTED",
        )

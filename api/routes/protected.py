"""Routes behind the access gate.

Every route here depends on ``authenticate``; role-restricted routes add
``require_role`` after it.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from api.auth.dependencies import authenticate, get_auth_service, require_role
from api.auth.jwt import TokenPayload
from api.auth.service import AuthService
from api.exceptions import GatewayException, InternalError, NotFoundError
from api.models.api_models import (
    ApiInfoResponse,
    ProfileResponse,
    UpdateStatusRequest,
    UserRead,
)
from api.responses import AUTH_ERROR_RESPONSES
from gateway.db.models import UserRole
from gateway.logging import get_logger

router = APIRouter(prefix="/api", tags=["protected"], responses=AUTH_ERROR_RESPONSES)
logger = get_logger(__name__)


@router.get("", response_model=ApiInfoResponse)
def api_info(
    request: Request,
    identity: TokenPayload = Depends(authenticate),
) -> ApiInfoResponse:
    """Echo the caller's token claims."""
    claims = getattr(request.state, "token_claims", None) or identity.to_claims()
    return ApiInfoResponse(
        message="Protected API endpoint",
        user=claims,
        info="This endpoint requires valid JWT token",
    )


@router.get("/profile", response_model=ProfileResponse, response_model_by_alias=True)
def get_profile(
    identity: TokenPayload = Depends(authenticate),
    auth_service: AuthService = Depends(get_auth_service),
) -> ProfileResponse:
    """Load the caller's user record.

    Raises:
        NotFoundError 404: The token's user no longer exists
    """
    try:
        user = auth_service.get_user_by_id(UUID(identity.user_id))
    except ValueError:
        user = None
    except Exception:
        logger.exception("profile_fetch_failed", user_id=identity.user_id)
        raise InternalError("Failed to fetch profile")

    if not user:
        raise NotFoundError("User not found")

    return ProfileResponse(user=UserRead.model_validate(user))


@router.put(
    "/users/{user_id}/status",
    response_model=ProfileResponse,
    response_model_by_alias=True,
    dependencies=[Depends(authenticate)],
)
def update_user_status(
    user_id: UUID,
    request: UpdateStatusRequest,
    admin: TokenPayload = Depends(require_role(UserRole.AGENCY_ADMIN)),
    auth_service: AuthService = Depends(get_auth_service),
) -> ProfileResponse:
    """Change a user's status (active agency admins, own agency only).

    This is how PENDING accounts are approved to ACTIVE. SUSPENDED
    accounts can no longer sign in or sync.

    Raises:
        AuthorizationError 403: Admin not ACTIVE, or user in another agency
        NotFoundError 404: No such user
    """
    try:
        user = auth_service.change_status(admin.user_id, user_id, request.status)
    except GatewayException:
        raise
    except Exception:
        logger.exception("status_update_failed", user_id=str(user_id))
        raise InternalError("Failed to update user status")

    if not user:
        raise NotFoundError("User not found")

    return ProfileResponse(user=UserRead.model_validate(user))

"""Authentication routes: Firebase user sync, password signup/login, token verify."""

from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.auth.dependencies import (
    get_auth_service,
    get_token_service,
    require_local_auth,
    require_user_sync,
)
from api.auth.jwt import TokenService, VerificationStatus
from api.auth.service import AuthService
from api.error_handlers import create_error_response
from api.exceptions import (
    GatewayException,
    InternalError,
    InvalidCredentialsError,
    ValidationError,
)
from api.models.api_models import (
    AuthResponse,
    LoginRequest,
    SignupRequest,
    SyncUserRequest,
    UserRead,
    VerifyRequest,
    VerifyResponse,
)
from api.responses import VALIDATION_ERROR_RESPONSES
from gateway.db.models import User
from gateway.logging import get_logger

router = APIRouter(prefix="/auth", tags=["auth"], responses=VALIDATION_ERROR_RESPONSES)
logger = get_logger(__name__)


def _auth_response(message: str, user: User, auth_service: AuthService) -> AuthResponse:
    return AuthResponse(
        message=message,
        user=UserRead.model_validate(user),
        token=auth_service.issue_token(user),
    )


# =============================================================================
# Routes
# =============================================================================


@router.post("/sync-user", response_model=AuthResponse, response_model_by_alias=True)
def sync_user(
    request: SyncUserRequest,
    _: None = Depends(require_user_sync),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Create or refresh the user behind a Firebase UID and issue a token.

    First sync creates the user as PENDING with the requested role. Later
    syncs only refresh email, phone and names.
    """
    try:
        user = auth_service.sync_user(
            firebase_uid=request.firebase_uid,
            email=request.email,
            phone=request.phone,
            first_name=request.first_name,
            last_name=request.last_name,
            role=request.role,
            agency_id=request.agency_id,
        )
        return _auth_response("User synced successfully", user, auth_service)
    except GatewayException:
        raise
    except Exception:
        logger.exception("user_sync_failed", firebase_uid=request.firebase_uid)
        raise InternalError("Failed to sync user")


@router.post(
    "/signup",
    response_model=AuthResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
def signup(
    request: SignupRequest,
    _: None = Depends(require_local_auth),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Register a password account and issue a token.

    Raises:
        ConflictError 409: Email already registered
    """
    try:
        user = auth_service.signup(
            email=request.email,
            password=request.password,
            first_name=request.first_name,
            last_name=request.last_name,
            role=request.role,
        )
        return _auth_response("User created successfully", user, auth_service)
    except GatewayException:
        raise
    except Exception:
        logger.exception("signup_failed")
        raise InternalError("Failed to create user")


@router.post("/login", response_model=AuthResponse, response_model_by_alias=True)
def login(
    request: LoginRequest,
    _: None = Depends(require_local_auth),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Authenticate with email and password and issue a token.

    Unknown email and wrong password produce the same 401.
    """
    try:
        user = auth_service.authenticate(
            email=request.email,
            password=request.password,
        )
    except Exception:
        logger.exception("login_failed")
        raise InternalError("Login failed")

    if not user:
        raise InvalidCredentialsError()

    return _auth_response("Login successful", user, auth_service)


@router.post("/verify", response_model=VerifyResponse)
def verify(
    request: Optional[VerifyRequest] = None,
    token_service: TokenService = Depends(get_token_service),
):
    """Check a token without touching the user store.

    Returns the decoded claims when the token is valid. An invalid or
    expired token answers 401 with ``valid: false``.
    """
    if request is None or not request.token:
        raise ValidationError("Token required", error_code="TOKEN_REQUIRED")

    result = token_service.verify(request.token)
    if not result.ok:
        expired = result.status is VerificationStatus.EXPIRED
        code = "TOKEN_EXPIRED" if expired else "TOKEN_INVALID"
        body = create_error_response(code=code, message=result.error or "Invalid token")
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"valid": False, **body},
        )

    return VerifyResponse(valid=True, user=result.claims)

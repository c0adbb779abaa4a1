"""Pydantic models for API requests and responses.

Field names are snake_case in Python and camelCase on the wire
(``firebaseUid``, ``firstName``, ...). Both spellings are accepted on input.
"""

from datetime import datetime
from typing import Annotated, Any, Optional
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    field_validator,
)
from pydantic.alias_generators import to_camel

from gateway.db.models import SIGNUP_ROLES, SYNC_ROLES, UserRole, UserStatus

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
IdentifierStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=128)]


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _normalize_email(value: Optional[str]) -> Optional[str]:
    return value.strip().lower() if value else value


def _check_role(role: UserRole, allowed: tuple[UserRole, ...]) -> UserRole:
    if role not in allowed:
        names = ", ".join(r.value for r in allowed)
        raise ValueError(f"role must be one of: {names}")
    return role


# =============================================================================
# Requests
# =============================================================================


class SyncUserRequest(CamelModel):
    """Request body for syncing a Firebase-authenticated user."""

    firebase_uid: IdentifierStr
    email: Optional[EmailStr] = None
    phone: Optional[Annotated[str, StringConstraints(strip_whitespace=True, max_length=32)]] = None
    first_name: NameStr
    last_name: NameStr
    role: UserRole
    agency_id: Optional[IdentifierStr] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_email(value)

    @field_validator("phone")
    @classmethod
    def blank_phone_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @field_validator("role")
    @classmethod
    def role_allowed_for_sync(cls, value: UserRole) -> UserRole:
        return _check_role(value, SYNC_ROLES)


class SignupRequest(CamelModel):
    """Request body for password signup."""

    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    first_name: NameStr
    last_name: NameStr
    role: UserRole

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator("role")
    @classmethod
    def role_allowed_for_signup(cls, value: UserRole) -> UserRole:
        return _check_role(value, SIGNUP_ROLES)


class LoginRequest(CamelModel):
    """Request body for password login."""

    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _normalize_email(value)


class VerifyRequest(CamelModel):
    """Request body for token verification."""

    token: Optional[str] = None


class UpdateStatusRequest(CamelModel):
    """Request body for changing a user's status."""

    status: UserStatus


# =============================================================================
# Responses
# =============================================================================


class UserRead(CamelModel):
    """Public view of a user record. Never includes the password hash."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: UUID
    firebase_uid: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    first_name: str
    last_name: str
    role: UserRole
    status: UserStatus
    agency_id: Optional[str] = None
    created_at: datetime


class AuthResponse(CamelModel):
    """User plus a freshly issued access token."""

    message: str
    user: UserRead
    token: str


class VerifyResponse(CamelModel):
    """Result of POST /auth/verify."""

    valid: bool
    user: Optional[dict[str, Any]] = None


class ProfileResponse(CamelModel):
    user: UserRead


class ApiInfoResponse(CamelModel):
    message: str
    user: dict[str, Any]
    info: str


class HealthResponse(CamelModel):
    status: str
    timestamp: str


class ReadinessResponse(CamelModel):
    status: str
    database: bool


class RootResponse(CamelModel):
    message: str
    version: str
    security: str
    endpoints: dict[str, str]

"""User model shared by the Firebase sync flow and the password flow."""

from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel

from gateway.db.models.base import UUIDModel, TimestampMixin


class UserRole(str, Enum):
    """Role carried in the user record and in issued tokens.

    One enumeration covers both account flows; each flow accepts only its
    own subset (see SYNC_ROLES and SIGNUP_ROLES).
    """

    AGENCY_ADMIN = "AGENCY_ADMIN"
    EMPLOYEE = "EMPLOYEE"
    GUARDIAN = "GUARDIAN"
    CASE_MANAGER = "CASE_MANAGER"
    CLIENT = "CLIENT"
    PROVIDER = "PROVIDER"
    SUPERVISOR = "SUPERVISOR"


# Roles a Firebase-authenticated user may claim when syncing
SYNC_ROLES: tuple[UserRole, ...] = (
    UserRole.AGENCY_ADMIN,
    UserRole.EMPLOYEE,
    UserRole.GUARDIAN,
    UserRole.CASE_MANAGER,
)

# Roles available to self-registered password accounts
SIGNUP_ROLES: tuple[UserRole, ...] = (
    UserRole.CLIENT,
    UserRole.PROVIDER,
    UserRole.SUPERVISOR,
    UserRole.AGENCY_ADMIN,
)


class UserStatus(str, Enum):
    """Account lifecycle status.

    New accounts start PENDING until an agency admin activates them.
    """

    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"


class UserBase(SQLModel):
    """Profile fields shared by the table and its write paths."""

    email: Optional[str] = Field(default=None, unique=True, index=True)
    phone: Optional[str] = Field(default=None)
    first_name: str
    last_name: str


class User(UUIDModel, UserBase, TimestampMixin, table=True):
    """User table.

    firebase_uid is set by the sync flow, password_hash by the password
    flow. Either may be null, but each is unique when present.
    """

    __tablename__ = "users"

    firebase_uid: Optional[str] = Field(default=None, unique=True, index=True)
    password_hash: Optional[str] = Field(default=None)

    role: UserRole
    status: UserStatus = Field(default=UserStatus.PENDING)

    # Tenant reference; agencies are managed outside this service
    agency_id: Optional[str] = Field(default=None, index=True)

    @property
    def identity_label(self) -> str:
        """Label embedded in tokens: email, else phone, else empty."""
        return self.email or self.phone or ""

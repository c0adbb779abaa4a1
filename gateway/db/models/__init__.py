"""SQLModel table definitions.

All primary keys use UUID.
"""

from gateway.db.models.base import UUIDModel, TimestampMixin, utcnow
from gateway.db.models.user import (
    User,
    UserBase,
    UserRole,
    UserStatus,
    SYNC_ROLES,
    SIGNUP_ROLES,
)

__all__ = [
    "UUIDModel",
    "TimestampMixin",
    "utcnow",
    "User",
    "UserBase",
    "UserRole",
    "UserStatus",
    "SYNC_ROLES",
    "SIGNUP_ROLES",
]

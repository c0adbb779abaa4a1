"""Account service: user sync, signup, login and lookups.

Uses SQLModel for database access. Input has already been validated by
the request models when these methods run.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from api.auth.jwt import TokenPayload, TokenService
from api.auth.password import hash_password, verify_password
from api.exceptions import AccountSuspendedError, AuthorizationError, ConflictError
from gateway.db.models import User, UserRole, UserStatus
from gateway.logging import get_logger

logger = get_logger(__name__)


class AuthService:
    """Service for account operations.

    Handles user sync from the external identity provider, password
    signup and login, and token issuance for the resulting records.
    """

    def __init__(self, session: Session, token_service: TokenService):
        """Initialize with a SQLModel session and the app's token service.

        Args:
            session: SQLModel Session for database operations
            token_service: Issues access tokens for authenticated users
        """
        self._session = session
        self._tokens = token_service

    # =========================================================================
    # Tokens
    # =========================================================================

    def issue_token(self, user: User) -> str:
        """Issue an access token carrying the user's id, label and role.

        Raises:
            AccountSuspendedError: If the user is SUSPENDED
        """
        if user.status is UserStatus.SUSPENDED:
            logger.info("token_refused", user_id=str(user.id), reason="suspended")
            raise AccountSuspendedError()

        payload = TokenPayload(
            user_id=str(user.id),
            email=user.identity_label,
            role=user.role.value,
        )
        return self._tokens.issue(payload)

    # =========================================================================
    # Firebase sync
    # =========================================================================

    def sync_user(
        self,
        firebase_uid: str,
        first_name: str,
        last_name: str,
        role: UserRole,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        agency_id: Optional[str] = None,
    ) -> User:
        """Create or update the user linked to a Firebase UID.

        New users are created PENDING with the requested role and agency.
        Existing users only get their profile fields (email, phone, names)
        refreshed; role, status and agency are left alone.

        Returns:
            The created or updated User
        """
        user = self.get_user_by_firebase_uid(firebase_uid)
        if user is None:
            user = User(
                firebase_uid=firebase_uid,
                email=email,
                phone=phone,
                first_name=first_name,
                last_name=last_name,
                role=role,
                agency_id=agency_id,
                status=UserStatus.PENDING,
            )
            self._session.add(user)
            try:
                self._session.commit()
            except IntegrityError:
                # Lost a race with a concurrent sync for the same UID
                self._session.rollback()
                user = self.get_user_by_firebase_uid(firebase_uid)
                if user is None:
                    raise
            else:
                self._session.refresh(user)
                logger.info("user_created", user_id=str(user.id), flow="sync")
                return user

        user.email = email
        user.phone = phone
        user.first_name = first_name
        user.last_name = last_name
        self._session.add(user)
        self._session.commit()
        self._session.refresh(user)
        logger.info("user_updated", user_id=str(user.id), flow="sync")
        return user

    # =========================================================================
    # Password flow
    # =========================================================================

    def signup(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: UserRole,
    ) -> User:
        """Register a password account.

        Raises:
            ConflictError: If the email is already registered
        """
        if self.get_user_by_email(email) is not None:
            raise ConflictError("Email already registered", error_code="EMAIL_EXISTS")

        user = User(
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=role,
            password_hash=hash_password(password),
            status=UserStatus.PENDING,
        )
        self._session.add(user)
        try:
            self._session.commit()
        except IntegrityError:
            self._session.rollback()
            raise ConflictError("Email already registered", error_code="EMAIL_EXISTS")
        self._session.refresh(user)
        logger.info("user_created", user_id=str(user.id), flow="signup")
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Check an email/password pair.

        Returns:
            User if the credentials match, None otherwise. Callers must not
            reveal which check failed.
        """
        user = self.get_user_by_email(email)

        if not user:
            return None

        if not user.password_hash:
            return None

        if not verify_password(password, user.password_hash):
            return None

        return user

    # =========================================================================
    # Lookups and admin
    # =========================================================================

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        return self._session.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self._session.exec(select(User).where(User.email == email)).first()

    def get_user_by_firebase_uid(self, firebase_uid: str) -> Optional[User]:
        return self._session.exec(
            select(User).where(User.firebase_uid == firebase_uid)
        ).first()

    def set_status(self, user_id: UUID, status: UserStatus) -> Optional[User]:
        """Change a user's status.

        Returns:
            The updated User, or None if no such user exists
        """
        user = self.get_user_by_id(user_id)
        if user is None:
            return None

        user.status = status
        self._session.add(user)
        self._session.commit()
        self._session.refresh(user)
        logger.info("user_status_changed", user_id=str(user.id), status=status.value)
        return user

    def change_status(self, actor_id: str, user_id: UUID, status: UserStatus) -> Optional[User]:
        """Change a user's status on behalf of an agency admin.

        The acting admin must have an ACTIVE record and belong to the same
        agency as the target user. Role is checked by the caller.

        Args:
            actor_id: User id from the admin's token
            user_id: User whose status changes
            status: New status

        Returns:
            The updated User, or None if no such user exists

        Raises:
            AuthorizationError: Admin is not active or is in another agency
        """
        try:
            actor = self.get_user_by_id(UUID(actor_id))
        except ValueError:
            actor = None

        if actor is None or actor.status is not UserStatus.ACTIVE:
            raise AuthorizationError(
                "Only active accounts can change user status",
                error_code="ACCOUNT_INACTIVE",
            )

        user = self.get_user_by_id(user_id)
        if user is None:
            return None

        if actor.agency_id is None or user.agency_id != actor.agency_id:
            raise AuthorizationError(
                "User belongs to another agency",
                error_code="AGENCY_MISMATCH",
            )

        return self.set_status(user.id, status)

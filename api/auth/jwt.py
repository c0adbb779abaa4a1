"""JWT token issuance and verification.

Tokens are HS256-signed with a shared secret. The issuer and verifier are
the same process, so no key distribution is needed. Every token is valid
for a fixed 24 hours.

Verification never raises for a bad token. It returns a VerificationResult
whose status tells expired tokens apart from invalid ones, because callers
answer them differently (401 vs 403).
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Optional

from jose import JWTError, jwt

JWT_ALGORITHM = "HS256"
TOKEN_TTL = timedelta(hours=24)
TOKEN_TTL_SECONDS = int(TOKEN_TTL.total_seconds())

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenPayload:
    """Identity carried inside a token.

    Attributes:
        user_id: Store identifier of the user
        email: Identity label (email, or phone for phone-only users)
        role: Role name at issuance time
    """

    user_id: str
    email: str
    role: str

    def to_claims(self) -> dict[str, Any]:
        return {"userId": self.user_id, "email": self.email, "role": self.role}

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> Optional["TokenPayload"]:
        """Rebuild a payload from decoded claims, or None if they are incomplete."""
        user_id = claims.get("userId")
        role = claims.get("role")
        email = claims.get("email", "")
        if not isinstance(user_id, str) or not user_id:
            return None
        if not isinstance(role, str) or not role:
            return None
        if not isinstance(email, str):
            return None
        return cls(user_id=user_id, email=email, role=role)


class VerificationStatus(str, Enum):
    OK = "ok"
    EXPIRED = "expired"
    INVALID = "invalid"


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of verifying a token.

    Attributes:
        status: OK, EXPIRED or INVALID
        payload: Decoded identity (only when status is OK)
        claims: All decoded claims including iat/exp (only when status is OK)
        error: Short reason for a failed verification
    """

    status: VerificationStatus
    payload: Optional[TokenPayload] = None
    claims: dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is VerificationStatus.OK

    @classmethod
    def valid(cls, payload: TokenPayload, claims: dict[str, Any]) -> "VerificationResult":
        return cls(status=VerificationStatus.OK, payload=payload, claims=claims)

    @classmethod
    def expired(cls) -> "VerificationResult":
        return cls(status=VerificationStatus.EXPIRED, error="Token expired")

    @classmethod
    def invalid(cls, error: str = "Invalid token") -> "VerificationResult":
        return cls(status=VerificationStatus.INVALID, error=error)


class TokenService:
    """Issues and verifies access tokens.

    One instance is created per application and shared by all requests;
    it holds only the secret and the clock.
    """

    def __init__(self, secret: str, clock: Clock = utc_now):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._clock = clock

    def issue(self, payload: TokenPayload) -> str:
        """Create a signed token for ``payload``, valid for TOKEN_TTL.

        Args:
            payload: Identity to embed

        Returns:
            Encoded JWT string
        """
        now = self._clock()
        claims = payload.to_claims()
        claims.update(
            {
                "iat": int(now.timestamp()),
                "exp": int((now + TOKEN_TTL).timestamp()),
            }
        )
        return jwt.encode(claims, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> VerificationResult:
        """Verify signature and structure, then expiry.

        Args:
            token: Encoded JWT string

        Returns:
            VerificationResult; never raises for a bad token
        """
        if not token:
            return VerificationResult.invalid("Token is empty")

        try:
            # Expiry is checked below against the injected clock
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"verify_exp": False, "verify_aud": False},
            )
        except JWTError as e:
            return VerificationResult.invalid(f"Invalid token: {e}")

        exp = claims.get("exp")
        if not isinstance(exp, (int, float)) or isinstance(exp, bool):
            return VerificationResult.invalid("Token missing 'exp' claim")

        payload = TokenPayload.from_claims(claims)
        if payload is None:
            return VerificationResult.invalid("Token payload is incomplete")

        if self._clock().timestamp() >= exp:
            return VerificationResult.expired()

        return VerificationResult.valid(payload, claims)

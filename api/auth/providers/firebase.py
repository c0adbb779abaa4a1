"""Firebase-delegated identity provider.

Firebase authenticates the user in the client. The client then calls
/auth/sync-user with the Firebase UID and profile, and the gateway
upserts the user record and issues its own access token.
"""

from api.auth.providers.base import BaseAuthProvider


class FirebaseAuthProvider(BaseAuthProvider):
    """External identity provider: sync only, no passwords."""

    @property
    def name(self) -> str:
        return "firebase"

    @property
    def description(self) -> str:
        return "Firebase + JWT authentication"

    @property
    def supports_local_auth(self) -> bool:
        """Firebase provider does not serve signup/login."""
        return False

    @property
    def supports_user_sync(self) -> bool:
        return True

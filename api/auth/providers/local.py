"""Local password authentication provider.

Users register with email and password; bcrypt hashes live in the user
store. Suited to self-hosted deployments without an external IdP.
"""

from api.auth.providers.base import BaseAuthProvider


class LocalAuthProvider(BaseAuthProvider):
    """Password-based provider: signup and login, no sync."""

    @property
    def name(self) -> str:
        return "local"

    @property
    def description(self) -> str:
        return "Password + JWT authentication"

    @property
    def supports_local_auth(self) -> bool:
        """Local provider supports signup/login routes."""
        return True

    @property
    def supports_user_sync(self) -> bool:
        return False

"""Base authentication provider abstraction.

A provider is the identity model the gateway runs with. It decides how
users prove who they are before a token is issued:

- external providers (Firebase) authenticate users out of process; the
  gateway only syncs their profile and issues its own token
- local providers keep password hashes in the user store

Token verification, roles, and the user store are the same for every
provider.
"""

from abc import ABC, abstractmethod


class BaseAuthProvider(ABC):
    """Abstract base class for authentication providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this provider (e.g., 'local', 'firebase')."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable summary shown on the API root."""
        ...

    @property
    @abstractmethod
    def supports_local_auth(self) -> bool:
        """Whether /auth/signup and /auth/login are served.

        Local providers (password-based) return True.
        External providers return False.
        """
        ...

    @property
    @abstractmethod
    def supports_user_sync(self) -> bool:
        """Whether /auth/sync-user is served.

        External providers return True; the caller has already been
        authenticated by the identity provider.
        """
        ...

    @property
    def auth_endpoints(self) -> list[str]:
        """Account endpoints enabled under this provider."""
        endpoints = []
        if self.supports_user_sync:
            endpoints.append("/auth/sync-user")
        if self.supports_local_auth:
            endpoints.extend(["/auth/signup", "/auth/login"])
        endpoints.append("/auth/verify")
        return endpoints

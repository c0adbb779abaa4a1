"""Authentication provider factory.

The provider is selected by Settings.auth_provider (AUTH_PROVIDER):

    AUTH_PROVIDER=firebase  (default) - Firebase sync + gateway JWT
    AUTH_PROVIDER=local     - Password signup/login + gateway JWT

Usage:
    from api.auth.providers import get_provider

    provider = get_provider(settings.auth_provider)
    if provider.supports_local_auth:
        ...
"""

from api.auth.providers.base import BaseAuthProvider
from api.auth.providers.firebase import FirebaseAuthProvider
from api.auth.providers.local import LocalAuthProvider

_PROVIDERS: dict[str, type[BaseAuthProvider]] = {
    "firebase": FirebaseAuthProvider,
    "local": LocalAuthProvider,
}


def get_provider(name: str) -> BaseAuthProvider:
    """Build the provider named ``name``.

    Args:
        name: Provider name (case-insensitive)

    Returns:
        BaseAuthProvider instance

    Raises:
        ValueError: If the name is unknown
    """
    provider_cls = _PROVIDERS.get((name or "").lower())
    if provider_cls is None:
        raise ValueError(
            f"Unknown AUTH_PROVIDER: {name}. "
            f"Supported values: {', '.join(sorted(_PROVIDERS))}"
        )
    return provider_cls()


__all__ = [
    "BaseAuthProvider",
    "FirebaseAuthProvider",
    "LocalAuthProvider",
    "get_provider",
]

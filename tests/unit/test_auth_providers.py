"""Tests for authentication providers."""

from unittest.mock import MagicMock

import pytest

from api.auth.dependencies import require_local_auth, require_user_sync
from api.auth.providers import get_provider
from api.auth.providers.base import BaseAuthProvider
from api.auth.providers.firebase import FirebaseAuthProvider
from api.auth.providers.local import LocalAuthProvider
from api.exceptions import ValidationError


class TestFirebaseAuthProvider:
    def test_name(self):
        assert FirebaseAuthProvider().name == "firebase"

    def test_serves_sync_only(self):
        provider = FirebaseAuthProvider()
        assert provider.supports_user_sync is True
        assert provider.supports_local_auth is False

    def test_auth_endpoints(self):
        assert FirebaseAuthProvider().auth_endpoints == ["/auth/sync-user", "/auth/verify"]

    def test_description_matches_banner(self):
        assert FirebaseAuthProvider().description == "Firebase + JWT authentication"


class TestLocalAuthProvider:
    def test_name(self):
        assert LocalAuthProvider().name == "local"

    def test_serves_password_flow_only(self):
        provider = LocalAuthProvider()
        assert provider.supports_local_auth is True
        assert provider.supports_user_sync is False

    def test_auth_endpoints(self):
        assert LocalAuthProvider().auth_endpoints == [
            "/auth/signup",
            "/auth/login",
            "/auth/verify",
        ]


class TestGetProvider:
    @pytest.mark.parametrize(
        "name,expected",
        [("firebase", FirebaseAuthProvider), ("local", LocalAuthProvider), ("LOCAL", LocalAuthProvider)],
    )
    def test_known_names(self, name, expected):
        provider = get_provider(name)
        assert isinstance(provider, expected)
        assert isinstance(provider, BaseAuthProvider)

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError, match="Unknown AUTH_PROVIDER: clerk"):
            get_provider("clerk")


class TestProviderGates:
    def test_local_gate_rejects_firebase(self):
        with pytest.raises(ValidationError) as exc_info:
            require_local_auth(FirebaseAuthProvider())

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == "PROVIDER_UNSUPPORTED"
        assert "firebase" in exc_info.value.message

    def test_local_gate_allows_local(self):
        assert require_local_auth(LocalAuthProvider()) is None

    def test_sync_gate_rejects_local(self):
        with pytest.raises(ValidationError):
            require_user_sync(LocalAuthProvider())

    def test_sync_gate_allows_firebase(self):
        assert require_user_sync(FirebaseAuthProvider()) is None

    def test_gate_uses_provider_flags(self):
        provider = MagicMock(spec=BaseAuthProvider)
        provider.name = "custom"
        provider.supports_local_auth = False

        with pytest.raises(ValidationError, match="custom"):
            require_local_auth(provider)

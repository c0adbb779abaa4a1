"""Tests for request validation models."""

import pytest
from pydantic import ValidationError

from api.models.api_models import (
    LoginRequest,
    SignupRequest,
    SyncUserRequest,
    UserRead,
)
from gateway.db.models import User, UserRole, UserStatus


class TestSyncUserRequest:
    def test_accepts_camel_case(self):
        request = SyncUserRequest.model_validate(
            {
                "firebaseUid": "fb-1",
                "email": "Ada@Example.COM",
                "firstName": "Ada",
                "lastName": "Lovelace",
                "role": "CASE_MANAGER",
                "agencyId": "agency-1",
            }
        )

        assert request.firebase_uid == "fb-1"
        assert request.email == "ada@example.com"
        assert request.role is UserRole.CASE_MANAGER
        assert request.agency_id == "agency-1"

    def test_phone_only(self):
        request = SyncUserRequest(
            firebase_uid="fb-1", phone="+15550001111", first_name="A", last_name="B", role="GUARDIAN"
        )
        assert request.email is None
        assert request.phone == "+15550001111"

    def test_blank_phone_is_none(self):
        request = SyncUserRequest(
            firebase_uid="fb-1", phone="  ", first_name="A", last_name="B", role="EMPLOYEE"
        )
        assert request.phone is None

    def test_rejects_signup_only_role(self):
        with pytest.raises(ValidationError, match="role must be one of"):
            SyncUserRequest(firebase_uid="fb-1", first_name="A", last_name="B", role="CLIENT")

    @pytest.mark.parametrize("missing", ["firebase_uid", "first_name", "last_name", "role"])
    def test_required_fields(self, missing):
        values = dict(firebase_uid="fb-1", first_name="A", last_name="B", role="EMPLOYEE")
        values.pop(missing)
        with pytest.raises(ValidationError):
            SyncUserRequest(**values)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            SyncUserRequest(firebase_uid="fb-1", first_name="  ", last_name="B", role="EMPLOYEE")


class TestSignupRequest:
    def test_valid(self):
        request = SignupRequest(
            email="c@x.io", password="pw-123456", first_name="C", last_name="D", role="PROVIDER"
        )
        assert request.role is UserRole.PROVIDER

    def test_short_password(self):
        with pytest.raises(ValidationError):
            SignupRequest(email="c@x.io", password="short", first_name="C", last_name="D", role="CLIENT")

    def test_rejects_sync_only_role(self):
        with pytest.raises(ValidationError):
            SignupRequest(
                email="c@x.io", password="pw-123456", first_name="C", last_name="D", role="GUARDIAN"
            )

    def test_bad_email(self):
        with pytest.raises(ValidationError):
            SignupRequest(
                email="not-an-email", password="pw-123456", first_name="C", last_name="D", role="CLIENT"
            )


def test_login_lowercases_email():
    assert LoginRequest(email="C@X.io", password="x").email == "c@x.io"


def test_user_read_never_exposes_password_hash():
    user = User(
        first_name="A",
        last_name="B",
        email="a@x.io",
        role=UserRole.CLIENT,
        status=UserStatus.PENDING,
        password_hash="$2b$04$secret",
    )

    dumped = UserRead.model_validate(user).model_dump(by_alias=True)

    assert "passwordHash" not in dumped
    assert "password_hash" not in dumped
    assert dumped["firstName"] == "A"
    assert dumped["status"] == UserStatus.PENDING

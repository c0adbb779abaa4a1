"""Tests for API error handling and exception classes."""

import asyncio
import json
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from pydantic import BaseModel, EmailStr
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.error_handlers import (
    create_error_response,
    gateway_exception_handler,
    http_exception_handler,
    register_error_handlers,
    unhandled_exception_handler,
)
from api.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    GatewayException,
    InsufficientRoleError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingCredentialError,
    NotFoundError,
    RateLimitError,
    TokenExpiredError,
    ValidationError,
)

from tests.http_utils import SyncClient


def _run(coro):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _request(path: str = "/api/test"):
    request = MagicMock()
    request.url.path = path
    return request


class TestExceptionClasses:
    """Tests for custom exception classes."""

    def test_gateway_exception_defaults(self):
        exc = GatewayException()
        assert exc.message == "An unexpected error occurred"
        assert exc.error_code == "INTERNAL_ERROR"
        assert exc.details == {}
        assert exc.status_code == 500

    def test_to_dict_omits_empty_details(self):
        assert NotFoundError("User not found").to_dict() == {
            "code": "NOT_FOUND",
            "message": "User not found",
        }

    def test_to_dict_includes_details(self):
        exc = ConflictError("Email already registered", details={"field": "email"})
        assert exc.to_dict()["details"] == {"field": "email"}

    @pytest.mark.parametrize(
        "exc_cls,status,code,message",
        [
            (MissingCredentialError, 401, "TOKEN_REQUIRED", "Access token required"),
            (TokenExpiredError, 401, "TOKEN_EXPIRED", "Token expired"),
            (InvalidCredentialsError, 401, "INVALID_CREDENTIALS", "Invalid credentials"),
            (InvalidTokenError, 403, "TOKEN_INVALID", "Invalid token"),
            (InsufficientRoleError, 403, "INSUFFICIENT_PERMISSIONS", "Insufficient permissions"),
            (
                RateLimitError,
                429,
                "RATE_LIMIT_EXCEEDED",
                "Too many requests from this IP, please try again later",
            ),
        ],
    )
    def test_gate_errors(self, exc_cls, status, code, message):
        exc = exc_cls()
        assert exc.status_code == status
        assert exc.error_code == code
        assert exc.message == message

    def test_token_errors_ask_for_bearer(self):
        assert MissingCredentialError.headers == {"WWW-Authenticate": "Bearer"}
        assert TokenExpiredError.headers == {"WWW-Authenticate": "Bearer"}
        assert InvalidCredentialsError.headers is None

    def test_exception_inheritance(self):
        assert issubclass(TokenExpiredError, AuthenticationError)
        assert issubclass(InvalidTokenError, AuthorizationError)
        assert issubclass(InsufficientRoleError, AuthorizationError)
        assert issubclass(ValidationError, GatewayException)


class TestErrorHandlerFunctions:
    """Direct tests of the handler coroutines."""

    def test_create_error_response_basic(self):
        assert create_error_response("NOT_FOUND", "User not found") == {
            "error": {"code": "NOT_FOUND", "message": "User not found"}
        }

    def test_gateway_exception_handler(self):
        exc = NotFoundError(message="User not found", details={"user_id": "123"})

        response = _run(gateway_exception_handler(_request(), exc))

        assert response.status_code == 404
        assert json.loads(response.body) == {
            "error": {
                "code": "NOT_FOUND",
                "message": "User not found",
                "details": {"user_id": "123"},
            }
        }

    def test_gateway_exception_handler_sets_headers(self):
        response = _run(gateway_exception_handler(_request(), TokenExpiredError()))

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_unmatched_route_message(self):
        exc = StarletteHTTPException(status_code=404, detail="Not Found")

        response = _run(http_exception_handler(_request("/nope"), exc))

        assert json.loads(response.body) == {
            "error": {"code": "NOT_FOUND", "message": "Endpoint not found"}
        }

    def test_only_framework_statuses_are_mapped(self):
        exc = StarletteHTTPException(status_code=429, detail="Too Many Requests")

        response = _run(http_exception_handler(_request(), exc))

        assert json.loads(response.body)["error"]["code"] == "ERROR"

    def test_http_exception_handler_unknown_status(self):
        exc = StarletteHTTPException(status_code=418, detail="I'm a teapot")

        response = _run(http_exception_handler(_request(), exc))

        body = json.loads(response.body)
        assert response.status_code == 418
        assert body["error"]["code"] == "ERROR"

    def test_unhandled_exception_handler_hides_details(self):
        exc = RuntimeError("connection to 10.0.0.5 refused")

        response = _run(unhandled_exception_handler(_request(), exc))

        assert response.status_code == 500
        assert json.loads(response.body) == {
            "error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}
        }


class SignupBody(BaseModel):
    email: EmailStr
    first_name: str


class TestErrorHandlerIntegration:
    """FastAPI app with the handlers registered."""

    @pytest.fixture
    def client(self):
        app = FastAPI()
        register_error_handlers(app)

        @app.get("/conflict")
        async def conflict():
            raise ConflictError("Email already registered", error_code="EMAIL_EXISTS")

        @app.post("/signup")
        async def signup(body: SignupBody):
            return {"ok": True}

        return SyncClient(app)

    def test_gateway_exception_response(self, client):
        response = client.get("/conflict")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "EMAIL_EXISTS"

    def test_validation_error_is_400_with_field_list(self, client):
        response = client.post("/signup", json={"email": "nope"})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        fields = {e["field"] for e in error["details"]["errors"]}
        assert fields == {"body.email", "body.first_name"}

    def test_unknown_route_is_endpoint_not_found(self, client):
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Endpoint not found"

    def test_wrong_method_is_405(self, client):
        response = client.post("/conflict")

        assert response.status_code == 405
        assert response.json()["error"]["code"] == "METHOD_NOT_ALLOWED"

"""Standard response models for API documentation.

Provides Pydantic models that appear in OpenAPI/Swagger docs
for consistent error schemas.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual error detail for validation errors."""

    field: str = Field(description="Field that caused the error")
    message: str = Field(description="Error message")
    type: str = Field(description="Error type code")


class ErrorContent(BaseModel):
    """Error information container."""

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[dict[str, Any]] = Field(
        default=None,
        description="Additional error context",
    )


class ErrorResponse(BaseModel):
    """Standard error response format.

    Example:
        {
            "error": {
                "code": "TOKEN_EXPIRED",
                "message": "Token expired"
            }
        }
    """

    error: ErrorContent = Field(description="Error information")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": {
                        "code": "TOKEN_EXPIRED",
                        "message": "Token expired",
                    }
                },
                {
                    "error": {
                        "code": "VALIDATION_ERROR",
                        "message": "Request validation failed",
                        "details": {
                            "errors": [
                                {
                                    "field": "body.email",
                                    "message": "value is not a valid email address",
                                    "type": "value_error",
                                }
                            ]
                        },
                    }
                },
            ]
        }
    }


# OpenAPI `responses=` maps shared by the routers
AUTH_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {"model": ErrorResponse, "description": "Missing or expired token"},
    403: {"model": ErrorResponse, "description": "Invalid token or role"},
}

VALIDATION_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Request validation failed"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}

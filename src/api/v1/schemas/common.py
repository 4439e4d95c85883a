"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """Body of every error response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_code": "POST_NOT_FOUND",
                "message": "Post not found",
                "details": {"post_id": "123e4567-e89b-12d3-a456-426614174000"},
            }
        },
    )

    error_code: str
    message: str
    details: Any | None = None


class MessageResponse(BaseModel):
    """Confirmation for deletes that return no document."""

    message: str


# OpenAPI entries for failures shared by every token-protected route
AUTH_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    503: {"model": ErrorResponse, "description": "Data store unavailable"},
}

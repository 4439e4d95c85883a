"""Authentication dependencies for FastAPI."""

from typing import Annotated

import structlog
from fastapi import Depends
from fastapi.security import APIKeyHeader

from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTTokenCodec
from infrastructure.auth.provider import Identity, TokenError

logger = structlog.get_logger()

# Security scheme for OpenAPI docs
token_header = APIKeyHeader(
    name=settings.auth_header_name,
    auto_error=False,
    description="Bearer token issued by POST /api/v1/users or POST /api/v1/auth",
)

# Singleton token codec
_token_codec: JWTTokenCodec | None = None


def get_token_codec() -> JWTTokenCodec:
    """Get or create the token codec singleton."""
    global _token_codec
    if _token_codec is None:
        _token_codec = JWTTokenCodec()
    return _token_codec


def _strip_scheme(raw: str) -> str:
    """Accept both a bare token and a 'Bearer <token>' value."""
    value = raw.strip()
    if value[:7].lower() == "bearer ":
        value = value[7:].strip()
    return value


async def get_current_user(
    raw_token: Annotated[str | None, Depends(token_header)],
    token_codec: JWTTokenCodec = Depends(get_token_codec),
) -> Identity:
    """
    Dependency resolving the caller identity from the token header.

    Every verification failure yields the same 401; the failure kind is
    only logged.

    Raises:
        AuthenticationError: If no token provided or token is invalid
    """
    token = _strip_scheme(raw_token) if raw_token else ""
    if not token:
        raise AuthenticationError(
            message="No token, authorization denied",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    try:
        return token_codec.verify(token)
    except TokenError as e:
        logger.info("token_rejected", reason=e.kind)
        raise AuthenticationError(
            message="Token is not valid",
            error_code=ErrorCode.INVALID_TOKEN,
        ) from None


# Type alias for convenience in route handlers
CurrentUser = Annotated[Identity, Depends(get_current_user)]

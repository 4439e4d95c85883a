"""Authentication provider protocols and token error types."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True)
class Identity:
    """The caller identity resolved from a verified bearer token."""

    id: UUID


class TokenError(Exception):
    """Base class for bearer token verification failures."""

    kind = "invalid"


class MalformedTokenError(TokenError):
    """Token could not be parsed or carries no usable identity claim."""

    kind = "malformed"


class InvalidSignatureError(TokenError):
    """Token signature did not verify against the signing secret."""

    kind = "invalid_signature"


class TokenExpiredError(TokenError):
    """Token is past its validity window."""

    kind = "expired"


class ITokenCodec(Protocol):
    """Protocol for bearer token codecs."""

    def issue(self, user_id: UUID) -> str:
        """
        Create a signed token carrying the user identity claim.

        Args:
            user_id: The user to issue a token for

        Returns:
            The signed token string
        """
        ...

    def verify(self, token: str) -> Identity:
        """
        Verify a token and extract the identity claim.

        Args:
            token: The bearer token to verify

        Returns:
            The resolved Identity

        Raises:
            TokenError: On any verification failure
        """
        ...


class IPasswordHasher(Protocol):
    """Protocol for password hashing."""

    async def hash(self, password: str) -> str:
        """Hash a plaintext password."""
        ...

    async def verify(self, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored hash."""
        ...

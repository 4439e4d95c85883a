"""JWT token codec implementation.

Token payload structure:
    {
        "user": { "id": "user-uuid" },
        "iat": 1234567890,
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from core.config import settings
from infrastructure.auth.provider import (
    Identity,
    InvalidSignatureError,
    MalformedTokenError,
    TokenExpiredError,
)

logger = logging.getLogger(__name__)


class JWTTokenCodec:
    """HS256 JWT codec for stateless bearer tokens.

    Rotating the signing secret invalidates every outstanding token.
    """

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    def issue(self, user_id: UUID) -> str:
        """
        Create a signed, time-bounded token for a user.

        Args:
            user_id: The user to create a token for

        Returns:
            The generated JWT string
        """
        now = datetime.utcnow()
        payload: dict[str, Any] = {
            "user": {"id": str(user_id)},
            "iat": now,
            "exp": now + timedelta(minutes=self._expire_minutes),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> Identity:
        """
        Verify a JWT and extract the identity claim.

        Args:
            token: The JWT to verify

        Returns:
            Identity of the token's user

        Raises:
            MalformedTokenError: Token cannot be decoded or has no user claim
            InvalidSignatureError: Signature check failed
            TokenExpiredError: Token is past its expiry
        """
        try:
            jwt.get_unverified_claims(token)
        except JWTError as e:
            raise MalformedTokenError(str(e)) from e

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError(str(e)) from e
        except JWTClaimsError as e:
            raise MalformedTokenError(str(e)) from e
        except JWTError as e:
            raise InvalidSignatureError(str(e)) from e

        user_claim = payload.get("user")
        raw_id = user_claim.get("id") if isinstance(user_claim, dict) else None
        if not raw_id:
            raise MalformedTokenError("Token has no user claim")

        try:
            return Identity(id=UUID(str(raw_id)))
        except ValueError as e:
            logger.debug("Token user claim is not a UUID: %r", raw_id)
            raise MalformedTokenError("Token user claim is not a valid id") from e

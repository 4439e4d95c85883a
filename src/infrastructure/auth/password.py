"""Password hashing backed by bcrypt."""

import asyncio

import bcrypt

from core.config import settings

# bcrypt only consumes the first 72 bytes of a password
_MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_PASSWORD_BYTES]


def _check(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


class BcryptPasswordHasher:
    """bcrypt implementation of IPasswordHasher.

    The key derivation runs in a worker thread so the event loop keeps
    serving other requests while a hash is computed.
    """

    def __init__(self, rounds: int = settings.bcrypt_rounds) -> None:
        self._rounds = rounds

    async def hash(self, password: str) -> str:
        """Hash a plaintext password with a fresh salt."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = await asyncio.to_thread(bcrypt.hashpw, _encode(password), salt)
        return hashed.decode("utf-8")

    async def verify(self, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored bcrypt hash."""
        return await asyncio.to_thread(_check, password, password_hash)

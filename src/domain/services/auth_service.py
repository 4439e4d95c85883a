"""Account service: registration, login and current-user lookup."""

from collections.abc import Callable
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import IPasswordHasher, ITokenCodec
from infrastructure.database.errors import is_unique_violation

logger = structlog.get_logger()


class AuthService:
    """Service layer for account business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        token_codec: ITokenCodec,
        password_hasher: IPasswordHasher,
    ) -> None:
        self._uow_factory = uow_factory
        self._tokens = token_codec
        self._hasher = password_hasher

    async def register(self, name: str, email: str, password: str) -> str:
        """Create an account and return a token for it.

        Two registrations racing on one email both pass the lookup; the
        loser hits the unique key on insert and gets the same conflict.
        """
        async with self._uow_factory() as uow:
            existing = await uow.users.get_by_email(email.strip().lower())
            if existing:
                raise UserAlreadyExistsError(email)

            user = User(
                name=name,
                email=email,
                password_hash=await self._hasher.hash(password),
            )
            try:
                created = await uow.users.create(user)
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                if not is_unique_violation(exc):
                    raise
                logger.info("registration_conflict")
                raise UserAlreadyExistsError(email) from None

        logger.info("user_registered", user_id=str(created.id))
        return self._tokens.issue(created.id)

    async def login(self, email: str, password: str) -> str:
        """Check credentials and return a fresh token.

        Unknown email and wrong password are reported identically.
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email.strip().lower())

        if not user or not await self._hasher.verify(password, user.password_hash):
            logger.info("login_rejected")
            raise InvalidCredentialsError()

        return self._tokens.issue(user.id)

    async def get_current(self, user_id: UUID) -> User:
        """Get the account behind an authenticated identity."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user

"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.user import User


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.profiles = AsyncMock()
        self.posts = AsyncMock()
        self.committed = False
        self.rolled_back = False

        # Updates hand back what they were given, like the real repositories
        self.profiles.create.side_effect = lambda profile: profile
        self.profiles.update.side_effect = lambda profile: profile
        self.posts.create.side_effect = lambda post: post
        self.posts.update.side_effect = lambda post: post
        self.users.create.side_effect = lambda user: user

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def other_user_id() -> UUID:
    """A random user ID distinct from user_id."""
    return uuid4()


@pytest.fixture
def author(user_id: UUID) -> User:
    """The account behind user_id."""
    return User(
        id=user_id,
        name="Jane Dev",
        email="jane@example.com",
        password_hash="hash",
    )

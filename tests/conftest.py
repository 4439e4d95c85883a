"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from typing import Any
from uuid import UUID

# Test settings must be in place before application modules are imported
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTTokenCodec
from infrastructure.auth.password import BcryptPasswordHasher
from infrastructure.database.models import Base


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory, one shared connection)
TEST_DATABASE_URL = "sqlite+aiosqlite://"
TEST_SECRET_KEY = "test-secret-key"

RegisterUser = Callable[..., Awaitable[tuple[str, UUID]]]


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        hide_parameters=True,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(
    engine: AsyncEngine,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create session factory."""
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    yield factory


@pytest.fixture
def token_codec() -> JWTTokenCodec:
    """Create token codec for testing."""
    return JWTTokenCodec(
        secret_key=TEST_SECRET_KEY,
        algorithm="HS256",
        expire_minutes=30,
    )


def build_app(
    session_factory: async_sessionmaker[AsyncSession],
    token_codec: JWTTokenCodec,
) -> FastAPI:
    """
    Create the application wired to a test database.

    - Overrides the token codec so tests can mint tokens directly
    - Overrides service factories to use the given session factory
    """
    from api.dependencies.auth import get_token_codec
    from api.v1.dependencies import get_auth_service, get_post_service, get_profile_service
    from domain.services.auth_service import AuthService
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    auth_service = AuthService(
        test_uow_factory,
        token_codec=token_codec,
        password_hasher=BcryptPasswordHasher(rounds=4),
    )
    profile_service = ProfileService(test_uow_factory)
    post_service = PostService(test_uow_factory)

    app.dependency_overrides[get_token_codec] = lambda: token_codec
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_profile_service] = lambda: profile_service
    app.dependency_overrides[get_post_service] = lambda: post_service

    return app


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    token_codec: JWTTokenCodec,
) -> FastAPI:
    """Create the application wired to the in-memory test database."""
    return build_app(session_factory, token_codec)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth header)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client: AsyncClient, token_codec: JWTTokenCodec) -> RegisterUser:
    """Register an account through the API; returns (token, user_id)."""

    async def _register(
        name: str = "Test User",
        email: str = "test@example.com",
        password: str = "secret123",
    ) -> tuple[str, UUID]:
        response = await client.post(
            "/api/v1/users",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        token = response.json()["token"]
        return token, token_codec.verify(token).id

    return _register


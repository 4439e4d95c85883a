"""Account API routes: registration, login and current user."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_auth_service
from api.v1.schemas.common import AUTH_ERROR_RESPONSES
from api.v1.schemas.user import (
    TokenResponse,
    UserDetailResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.auth_service import AuthService

users_router = APIRouter(prefix="/users", tags=["users"])
auth_router = APIRouter(prefix="/auth", tags=["auth"])


@users_router.post(
    "",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
    responses={
        201: {"description": "Account created; token returned"},
        409: {"description": "Email already registered"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def register(
    request: Request,
    body: UserRegister,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Create an account. The avatar is taken from Gravatar for the email."""
    token = await service.register(body.name, body.email, body.password)
    return TokenResponse(token=token)


@auth_router.post(
    "",
    response_model=TokenResponse,
    summary="Authenticate user & get token",
    responses={
        200: {"description": "Credentials accepted; token returned"},
        400: {"description": "Invalid credentials"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: UserLogin,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Exchange email and password for a token."""
    token = await service.login(body.email, body.password)
    return TokenResponse(token=token)


@auth_router.get(
    "",
    response_model=UserDetailResponse,
    summary="Get the authenticated user",
    responses=AUTH_ERROR_RESPONSES,
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_me(
    request: Request,
    user: CurrentUser,
    service: AuthService = Depends(get_auth_service),
) -> UserDetailResponse:
    """Get the account behind the token (without the password hash)."""
    account = await service.get_current(user.id)
    return UserDetailResponse(data=UserResponse.model_validate(account))

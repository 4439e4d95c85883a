"""Profile API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import AUTH_ERROR_RESPONSES, MessageResponse
from api.v1.schemas.profile import (
    ExperienceCreate,
    ExperienceResponse,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileOwner,
    ProfileResponse,
    ProfileUpsert,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import SOCIAL_PLATFORMS, Experience, Profile, ProfileWithOwner
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get current user's profile",
    responses={
        **AUTH_ERROR_RESPONSES,
        404: {"description": "There is no profile for this user"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the authenticated user's profile."""
    item = await service.get_mine(user.id)
    return ProfileDetailResponse(data=_build_owned_response(item))


@router.post(
    "",
    response_model=ProfileDetailResponse,
    summary="Create or update user profile",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """
    Create the profile, or merge the supplied fields into it.

    Empty fields leave stored values untouched, except social links, which
    are replaced by exactly the platforms supplied.
    """
    profile = await service.upsert(
        user.id,
        status=body.status,
        company=body.company,
        website=body.website,
        location=body.location,
        bio=body.bio,
        githubusername=body.githubusername,
        skills=body.skills,
        social={platform: getattr(body, platform) for platform in SOCIAL_PLATFORMS},
    )
    return ProfileDetailResponse(data=_build_profile_response(profile))


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="Get all profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Get every profile with its owner's name and avatar. Public."""
    profiles = await service.list_all()
    return ProfileListResponse(data=[_build_owned_response(item) for item in profiles])


@router.get(
    "/user/{user_id}",
    response_model=ProfileDetailResponse,
    summary="Get profile by user ID",
    responses={404: {"description": "Profile not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get a user's profile. Public."""
    item = await service.get_by_user(user_id)
    return ProfileDetailResponse(data=_build_owned_response(item))


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete profile and user",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the caller's profile and account. Posts are kept."""
    await service.delete(user.id)
    return MessageResponse(message="User deleted")


@router.put(
    "/experience",
    response_model=ProfileDetailResponse,
    summary="Add profile experience",
    responses={
        **AUTH_ERROR_RESPONSES,
        404: {"description": "There is no profile for this user"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Add an experience entry at the top of the caller's profile."""
    entry = Experience(
        title=body.title,
        company=body.company,
        location=body.location,
        from_date=body.from_date,
        to_date=body.to_date,
        current=body.current,
        description=body.description,
    )
    profile = await service.add_experience(user.id, entry)
    return ProfileDetailResponse(data=_build_profile_response(profile))


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileDetailResponse,
    summary="Delete experience from profile",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_experience(
    request: Request,
    exp_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Remove an experience entry. Unknown ids leave the profile unchanged."""
    profile = await service.remove_experience(user.id, exp_id)
    return ProfileDetailResponse(data=_build_profile_response(profile))


def _build_profile_response(
    profile: Profile, owner: ProfileOwner | None = None
) -> ProfileResponse:
    """Build a ProfileResponse from a domain entity."""
    return ProfileResponse(
        id=profile.id,
        user=profile.user_id,
        owner=owner,
        status=profile.status,
        company=profile.company,
        website=profile.website,
        location=profile.location,
        bio=profile.bio,
        githubusername=profile.githubusername,
        skills=profile.skills,
        social=profile.social,
        experience=[
            ExperienceResponse(
                id=e.id,
                title=e.title,
                company=e.company,
                location=e.location,
                from_date=e.from_date,
                to_date=e.to_date,
                current=e.current,
                description=e.description,
            )
            for e in profile.experience
        ],
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


def _build_owned_response(item: ProfileWithOwner) -> ProfileResponse:
    owner = ProfileOwner(id=item.profile.user_id, name=item.name, avatar=item.avatar)
    return _build_profile_response(item.profile, owner)

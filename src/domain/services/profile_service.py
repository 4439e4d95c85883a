"""Profile service layer with business logic."""

from collections.abc import Callable, Mapping
from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import MalformedIdError, ProfileNotFoundError, UserNotFoundError
from core.ids import parse_id
from domain.entities.profile import SOCIAL_PLATFORMS, Experience, Profile, ProfileWithOwner
from domain.policies.ownership import assert_owner
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.database.errors import is_unique_violation

logger = structlog.get_logger()

# Top-level fields merged on upsert when a non-empty value is supplied
_SCALAR_FIELDS = ("company", "website", "location", "bio", "status", "githubusername")


def parse_skills(raw: str) -> list[str]:
    """Split a comma-separated skills string, trimming each entry."""
    return [skill.strip() for skill in raw.split(",")]


def build_social(links: Mapping[str, str | None] | None) -> dict[str, str]:
    """Keep only the known platforms that were given a non-empty URL."""
    if not links:
        return {}
    return {
        platform: url
        for platform in SOCIAL_PLATFORMS
        if (url := links.get(platform))
    }


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_mine(self, user_id: UUID) -> ProfileWithOwner:
        """Get the caller's own profile with their name and avatar."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            owner = await uow.users.get(user_id) if profile else None
            if not profile or not owner:
                raise ProfileNotFoundError(
                    str(user_id), "There is no profile for this user"
                )
            return ProfileWithOwner(profile=profile, name=owner.name, avatar=owner.avatar)

    async def list_all(self) -> list[ProfileWithOwner]:
        """Get every profile with its owner's name and avatar."""
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.get_all()
            owners = await uow.users.get_many([p.user_id for p in profiles])

        result = []
        for profile in profiles:
            owner = owners.get(profile.user_id)
            if owner is None:
                # Orphaned profile; its account is gone
                continue
            result.append(
                ProfileWithOwner(profile=profile, name=owner.name, avatar=owner.avatar)
            )
        return result

    async def get_by_user(self, raw_user_id: str | UUID) -> ProfileWithOwner:
        """Get a profile by its owner's id, with owner display fields."""
        user_id = parse_id(raw_user_id, "profile")
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            owner = await uow.users.get(user_id) if profile else None
            if not profile or not owner:
                raise ProfileNotFoundError(str(user_id))
            return ProfileWithOwner(profile=profile, name=owner.name, avatar=owner.avatar)

    async def upsert(
        self,
        user_id: UUID,
        status: str,
        company: str | None = None,
        website: str | None = None,
        location: str | None = None,
        bio: str | None = None,
        githubusername: str | None = None,
        skills: str | None = None,
        social: Mapping[str, str | None] | None = None,
    ) -> Profile:
        """Create the caller's profile or merge supplied fields into it.

        Only non-empty scalar fields overwrite stored values. ``social`` is
        rebuilt from the supplied platforms on every call, so platforms left
        out are dropped.
        """
        supplied = {
            "company": company,
            "website": website,
            "location": location,
            "bio": bio,
            "status": status,
            "githubusername": githubusername,
        }
        fields = {name: supplied[name] for name in _SCALAR_FIELDS if supplied[name]}
        skill_list = parse_skills(skills) if skills else None
        social_links = build_social(social)

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            created = profile is None

            if created:
                saved = await self._try_create(
                    uow,
                    Profile(
                        user_id=user_id,
                        skills=skill_list or [],
                        social=social_links,
                        **{"status": status, **fields},
                    ),
                )
                if saved is None:
                    # A concurrent first upsert inserted the row; merge into it
                    logger.info("profile_create_conflict", user_id=str(user_id))
                    profile = await self._require_own_profile(uow, user_id)
                    created = False

            if not created:
                assert_owner(profile.user_id, user_id)
                for name, value in fields.items():
                    setattr(profile, name, value)
                if skill_list is not None:
                    profile.skills = skill_list
                profile.social = social_links
                profile.updated_at = datetime.utcnow()
                saved = await uow.profiles.update(profile)
                await uow.commit()

        logger.info("profile_upserted", user_id=str(user_id), created=created)
        return saved

    async def add_experience(self, user_id: UUID, entry: Experience) -> Profile:
        """Prepend an experience entry to the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_own_profile(uow, user_id)

            profile.add_experience(entry)
            updated = await uow.profiles.update(profile)
            await uow.commit()

        logger.info(
            "experience_added", user_id=str(user_id), experience_id=str(entry.id)
        )
        return updated

    async def remove_experience(
        self, user_id: UUID, raw_experience_id: str | UUID
    ) -> Profile:
        """Remove an experience entry by id.

        An unknown or malformed entry id leaves the list unchanged; the
        profile is still saved and returned.
        """
        async with self._uow_factory() as uow:
            profile = await self._require_own_profile(uow, user_id)

            try:
                experience_id = parse_id(raw_experience_id, "experience")
            except MalformedIdError:
                removed = False
            else:
                removed = profile.remove_experience(experience_id)

            updated = await uow.profiles.update(profile)
            await uow.commit()

        logger.info(
            "experience_removed",
            user_id=str(user_id),
            experience_id=str(raw_experience_id),
            removed=removed,
        )
        return updated

    async def delete(self, user_id: UUID) -> None:
        """Delete the caller's profile and account.

        The user's posts are not removed.
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            await uow.profiles.delete_by_user(user_id)
            await uow.users.delete(user_id)
            await uow.commit()

        logger.info("user_deleted", user_id=str(user_id))

    async def _require_own_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        """Load the caller's profile and verify ownership."""
        profile = await uow.profiles.get_by_user(user_id)
        if not profile:
            raise ProfileNotFoundError(str(user_id), "There is no profile for this user")
        assert_owner(profile.user_id, user_id)
        return profile

    async def _try_create(self, uow: IUnitOfWork, profile: Profile) -> Profile | None:
        """Insert and commit a new profile.

        Returns None, with the transaction rolled back, when the owner's
        profile row already exists.
        """
        try:
            saved = await uow.profiles.create(profile)
            await uow.commit()
        except IntegrityError as exc:
            await uow.rollback()
            if not is_unique_violation(exc):
                raise
            return None
        return saved

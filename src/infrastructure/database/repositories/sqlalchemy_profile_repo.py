"""SQLAlchemy implementation of Profile repository."""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Experience, Profile
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        model = await self._get_model(user_id)
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Profile]:
        """Get every profile."""
        stmt = select(ProfileModel).order_by(ProfileModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = ProfileModel(id=profile.id, user_id=profile.user_id)
        self._apply(model, profile)
        model.created_at = profile.created_at
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Replace the stored profile document."""
        model = await self._get_model(profile.user_id)

        if not model:
            raise ValueError(f"Profile for user {profile.user_id} not found")

        self._apply(model, profile)
        await self._session.flush()
        return self._to_entity(model)

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete the profile owned by a user."""
        model = await self._get_model(user_id)

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _get_model(self, user_id: UUID) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _apply(self, model: ProfileModel, entity: Profile) -> None:
        """Copy entity fields onto the ORM model (new JSON values, so changes are tracked)."""
        model.company = entity.company
        model.website = entity.website
        model.location = entity.location
        model.status = entity.status
        model.bio = entity.bio
        model.githubusername = entity.githubusername
        model.skills = list(entity.skills)
        model.social = dict(entity.social)
        model.experience = [_experience_to_doc(e) for e in entity.experience]
        model.updated_at = entity.updated_at

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            company=model.company,
            website=model.website,
            location=model.location,
            status=model.status,
            bio=model.bio,
            githubusername=model.githubusername,
            skills=list(model.skills or []),
            social=dict(model.social or {}),
            experience=[_experience_from_doc(doc) for doc in model.experience or []],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


def _experience_to_doc(entry: Experience) -> dict[str, Any]:
    return {
        "id": str(entry.id),
        "title": entry.title,
        "company": entry.company,
        "location": entry.location,
        "from": entry.from_date.isoformat(),
        "to": entry.to_date.isoformat() if entry.to_date else None,
        "current": entry.current,
        "description": entry.description,
    }


def _experience_from_doc(doc: dict[str, Any]) -> Experience:
    return Experience(
        id=UUID(doc["id"]),
        title=doc["title"],
        company=doc["company"],
        location=doc.get("location"),
        from_date=date.fromisoformat(doc["from"]),
        to_date=date.fromisoformat(doc["to"]) if doc.get("to") else None,
        current=bool(doc.get("current", False)),
        description=doc.get("description"),
    )

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from silentnote.domain.entities.profile import Profile
from silentnote.infrastructure.db.mappers import profile as mapper
from silentnote.infrastructure.db.models.profile import ProfileModel


class ProfileReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _one(self, *criteria: Any) -> Profile | None:
        result = await self._session.execute(select(ProfileModel).where(*criteria))
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def get_by_username(self, username: str) -> Profile | None:
        return await self._one(ProfileModel.username == username)

    async def get_by_user_id(self, user_id: UUID) -> Profile | None:
        return await self._one(ProfileModel.user_id == user_id)

    async def list_by_user_ids(self, user_ids: list[UUID]) -> list[Profile]:
        if not user_ids:
            return []
        stmt = select(ProfileModel).where(ProfileModel.user_id.in_(user_ids))
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def list_all(self) -> list[Profile]:
        stmt = select(ProfileModel).order_by(ProfileModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class ProfileWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, profile: Profile) -> Profile:
        model = mapper.entity_to_model(profile)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def update(self, user_id: UUID, values: dict[str, Any]) -> None:
        stmt = (
            update(ProfileModel)
            .where(ProfileModel.user_id == user_id)
            .values(**values, updated_at=func.now())
        )
        await self._session.execute(stmt)

    async def delete_for_user(self, user_id: UUID) -> int:
        result = await self._session.execute(
            delete(ProfileModel).where(ProfileModel.user_id == user_id)
        )
        return result.rowcount

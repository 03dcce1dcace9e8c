from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from silentnote.domain.entities.profile_view import ProfileView
from silentnote.infrastructure.db.models.profile_view import ProfileViewModel


class ProfileViewReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def count_for_profile(self, profile_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(ProfileViewModel)
            .where(ProfileViewModel.profile_id == profile_id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()


class ProfileViewWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, view: ProfileView) -> None:
        self._session.add(
            ProfileViewModel(
                id=view.id,
                profile_id=view.profile_id,
                viewer_ip=view.viewer_ip,
                viewer_user_agent=view.viewer_user_agent,
                referrer=view.referrer,
                viewed_at=view.viewed_at,
            )
        )
        await self._session.flush()

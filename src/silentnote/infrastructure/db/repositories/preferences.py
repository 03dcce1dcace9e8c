from __future__ import annotations

from uuid import UUID

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from silentnote.domain.entities.preferences import AccountPreferences
from silentnote.infrastructure.db.models.preferences import AccountPreferencesModel


class PreferencesReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: UUID) -> AccountPreferences | None:
        model = await self._session.get(AccountPreferencesModel, user_id)
        if model is None:
            return None
        return AccountPreferences(
            user_id=model.user_id,
            onboarding_completed=model.onboarding_completed,
            updated_at=model.updated_at,
        )


class PreferencesWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def upsert(self, preferences: AccountPreferences) -> None:
        values = {
            "user_id": preferences.user_id,
            "onboarding_completed": preferences.onboarding_completed,
            "updated_at": preferences.updated_at,
        }
        stmt = (
            pg_insert(AccountPreferencesModel)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[AccountPreferencesModel.user_id],
                set_={
                    "onboarding_completed": values["onboarding_completed"],
                    "updated_at": values["updated_at"],
                },
            )
        )
        await self._session.execute(stmt)

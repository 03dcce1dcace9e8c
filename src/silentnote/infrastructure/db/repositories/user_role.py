from __future__ import annotations

from collections import defaultdict
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from silentnote.infrastructure.db.models.user_role import UserRoleModel


class UserRoleReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def has_role(self, user_id: UUID, role: str) -> bool:
        stmt = select(UserRoleModel.id).where(
            UserRoleModel.user_id == user_id,
            UserRoleModel.role == role,
        ).limit(1)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def roles_for(self, user_ids: list[UUID]) -> dict[UUID, list[str]]:
        if not user_ids:
            return {}
        stmt = select(UserRoleModel.user_id, UserRoleModel.role).where(
            UserRoleModel.user_id.in_(user_ids)
        )
        result = await self._session.execute(stmt)
        roles: dict[UUID, list[str]] = defaultdict(list)
        for user_id, role in result.all():
            roles[user_id].append(role)
        return dict(roles)


class UserRoleWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def delete_for_user(self, user_id: UUID) -> int:
        result = await self._session.execute(
            delete(UserRoleModel).where(UserRoleModel.user_id == user_id)
        )
        return result.rowcount

    async def grant(self, user_id: UUID, role: str) -> bool:
        """Return False when the account already had the role."""
        stmt = (
            pg_insert(UserRoleModel)
            .values(user_id=user_id, role=role)
            .on_conflict_do_nothing(constraint="uq_user_role")
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

from __future__ import annotations

from types import TracebackType
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

from silentnote.infrastructure.db.repositories.message import (
    MessageReaderRepo,
    MessageWriterRepo,
)
from silentnote.infrastructure.db.repositories.preferences import (
    PreferencesReaderRepo,
    PreferencesWriterRepo,
)
from silentnote.infrastructure.db.repositories.profile import (
    ProfileReaderRepo,
    ProfileWriterRepo,
)
from silentnote.infrastructure.db.repositories.profile_view import (
    ProfileViewReaderRepo,
    ProfileViewWriterRepo,
)
from silentnote.infrastructure.db.repositories.user_role import (
    UserRoleReaderRepo,
    UserRoleWriterRepo,
)


class SqlAlchemyUoW:
    """One AsyncSession shared by every repository of a request.

    Nothing is persisted until a service calls ``commit``; leaving the
    ``async with`` block on an exception discards pending writes.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self.messages = MessageReaderRepo(session)
        self.messages_w = MessageWriterRepo(session)
        self.profiles = ProfileReaderRepo(session)
        self.profiles_w = ProfileWriterRepo(session)
        self.profile_views = ProfileViewReaderRepo(session)
        self.profile_views_w = ProfileViewWriterRepo(session)
        self.roles = UserRoleReaderRepo(session)
        self.roles_w = UserRoleWriterRepo(session)
        self.preferences = PreferencesReaderRepo(session)
        self.preferences_w = PreferencesWriterRepo(session)

    async def flush(self) -> None:
        await self._session.flush()

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None and self._session.in_transaction():
            await self.rollback()

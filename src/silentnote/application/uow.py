from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Callable, Protocol

from silentnote.application.repositories.message import MessageReader, MessageWriter
from silentnote.application.repositories.preferences import (
    PreferencesReader,
    PreferencesWriter,
)
from silentnote.application.repositories.profile import ProfileReader, ProfileWriter
from silentnote.application.repositories.profile_view import (
    ProfileViewReader,
    ProfileViewWriter,
)
from silentnote.application.repositories.user_role import UserRoleReader, UserRoleWriter


class UnitOfWork(Protocol):
    messages: MessageReader
    messages_w: MessageWriter
    profiles: ProfileReader
    profiles_w: ProfileWriter
    profile_views: ProfileViewReader
    profile_views_w: ProfileViewWriter
    roles: UserRoleReader
    roles_w: UserRoleWriter
    preferences: PreferencesReader
    preferences_w: PreferencesWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...


# Opens a fresh unit of work for work that outlives the request's own session.
UoWFactory = Callable[[], AbstractAsyncContextManager[UnitOfWork]]

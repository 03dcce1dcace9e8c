from __future__ import annotations

from typing import Any, Protocol
from uuid import UUID

from silentnote.domain.entities.profile import Profile


class ProfileReader(Protocol):
    async def get_by_username(self, username: str) -> Profile | None: ...

    async def get_by_user_id(self, user_id: UUID) -> Profile | None: ...

    async def list_by_user_ids(self, user_ids: list[UUID]) -> list[Profile]: ...

    async def list_all(self) -> list[Profile]: ...


class ProfileWriter(Protocol):
    async def create(self, profile: Profile) -> Profile: ...

    async def update(self, user_id: UUID, values: dict[str, Any]) -> None: ...

    async def delete_for_user(self, user_id: UUID) -> int: ...

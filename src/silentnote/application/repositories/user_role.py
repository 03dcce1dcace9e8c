from __future__ import annotations

from typing import Protocol
from uuid import UUID


class UserRoleReader(Protocol):
    async def has_role(self, user_id: UUID, role: str) -> bool: ...

    async def roles_for(self, user_ids: list[UUID]) -> dict[UUID, list[str]]: ...


class UserRoleWriter(Protocol):
    async def delete_for_user(self, user_id: UUID) -> int: ...

    async def grant(self, user_id: UUID, role: str) -> bool: ...

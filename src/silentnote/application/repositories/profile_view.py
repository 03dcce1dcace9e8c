from __future__ import annotations

from typing import Protocol
from uuid import UUID

from silentnote.domain.entities.profile_view import ProfileView


class ProfileViewReader(Protocol):
    async def count_for_profile(self, profile_id: UUID) -> int: ...


class ProfileViewWriter(Protocol):
    async def add(self, view: ProfileView) -> None: ...

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from silentnote.domain.entities.preferences import AccountPreferences


class PreferencesReader(Protocol):
    async def get(self, user_id: UUID) -> AccountPreferences | None: ...


class PreferencesWriter(Protocol):
    async def upsert(self, preferences: AccountPreferences) -> None: ...

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from silentnote.domain.entities.message import Message


class MessageReader(Protocol):
    async def get_for_receiver(self, message_id: UUID, receiver_id: UUID) -> Message | None: ...

    async def list_for_receiver(self, receiver_id: UUID) -> list[Message]:
        """Newest first."""
        ...

    async def list_all(self) -> list[Message]:
        """Newest first, across every account."""
        ...

    async def count_by_receiver(self, receiver_ids: list[UUID]) -> dict[UUID, int]: ...


class MessageWriter(Protocol):
    async def add(self, message: Message) -> Message: ...

    async def set_flags(self, message_id: UUID, **flags: bool) -> None: ...

    async def delete(self, message_id: UUID) -> bool:
        """Return False when no row matched."""
        ...

    async def delete_for_account(self, account_id: UUID) -> int:
        """Delete rows where the account is sender or receiver."""
        ...

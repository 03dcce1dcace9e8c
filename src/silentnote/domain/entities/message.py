from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any
from uuid import UUID

from silentnote.domain.value_objects.enums import SenderType


@dataclass(frozen=True, slots=True)
class Message:
    id: UUID
    content: str
    receiver_id: UUID
    sender_user_id: UUID | None
    sender_type: str
    sender_metadata: dict[str, Any] | None
    created_at: datetime
    is_favorite: bool = False
    is_archived: bool = False
    is_read: bool = False

    def __post_init__(self) -> None:
        if self.sender_type == SenderType.ANONYMOUS and self.sender_user_id is not None:
            raise ValueError("Anonymous messages cannot carry a sender reference")
        if self.sender_type == SenderType.REGISTERED and self.sender_user_id is None:
            raise ValueError("Registered messages require a sender reference")

    def with_flags(self, **flags: bool) -> Message:
        return replace(self, **flags)

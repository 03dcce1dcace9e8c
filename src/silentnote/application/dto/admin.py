from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

UNKNOWN_USERNAME = "Unknown"


@dataclass(frozen=True, slots=True)
class AdminMessageView:
    id: UUID
    content: str
    created_at: datetime
    receiver_id: UUID
    receiver_username: str
    sender_username: str | None
    sender_type: str
    sender_metadata: dict[str, Any] | None
    is_read: bool
    is_archived: bool

    def matches(self, term: str) -> bool:
        needle = term.lower()
        return (
            needle in self.content.lower()
            or needle in self.receiver_username.lower()
            or (self.sender_username is not None and needle in self.sender_username.lower())
        )


@dataclass(frozen=True, slots=True)
class AdminStats:
    total: int
    from_users: int
    anonymous: int
    today: int


@dataclass(frozen=True, slots=True)
class AdminUserView:
    user_id: UUID
    profile_id: UUID
    username: str
    display_name: str | None
    roles: list[str]
    message_count: int
    created_at: datetime

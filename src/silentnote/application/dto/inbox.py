from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from silentnote.domain.entities.message import Message


@dataclass(frozen=True, slots=True)
class InboxViews:
    active: list[Message]
    favorites: list[Message]
    archived: list[Message]
    total: int


@dataclass(frozen=True, slots=True)
class DashboardStats:
    total_messages: int
    favorite_messages: int
    archived_messages: int
    unread_messages: int
    profile_views: int
    last_activity: datetime | None

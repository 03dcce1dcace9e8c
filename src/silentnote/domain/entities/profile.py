from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Profile:
    id: UUID
    user_id: UUID
    username: str
    display_name: str | None
    avatar_url: str | None
    created_at: datetime
    updated_at: datetime

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class ProfileView:
    id: UUID
    profile_id: UUID
    viewer_ip: str
    viewer_user_agent: str
    referrer: str | None
    viewed_at: datetime

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class AccountPreferences:
    user_id: UUID
    onboarding_completed: bool
    updated_at: datetime

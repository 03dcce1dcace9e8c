from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class AdminMessageResponse(BaseModel):
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

    model_config = {"from_attributes": True}


class AdminStatsResponse(BaseModel):
    total: int
    from_users: int
    anonymous: int
    today: int

    model_config = {"from_attributes": True}


class AdminMessagesResponse(BaseModel):
    items: list[AdminMessageResponse]
    stats: AdminStatsResponse


class AdminUserResponse(BaseModel):
    user_id: UUID
    profile_id: UUID
    username: str
    display_name: str | None
    roles: list[str]
    message_count: int
    created_at: datetime

    model_config = {"from_attributes": True}

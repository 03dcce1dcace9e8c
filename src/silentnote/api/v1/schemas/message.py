from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from silentnote.application.validators import MESSAGE_MAX_LENGTH


class SubmitMessageRequest(BaseModel):
    content: str = Field(max_length=4 * MESSAGE_MAX_LENGTH)
    language: str | None = Field(None, max_length=64)
    platform: str | None = Field(None, max_length=64)
    screen_resolution: str | None = Field(None, max_length=32)
    timezone: str | None = Field(None, max_length=64)


class SubmitMessageResponse(BaseModel):
    id: UUID
    created_at: datetime


class InboxMessageResponse(BaseModel):
    """What a receiver sees; sender identity is never exposed here."""

    id: UUID
    content: str
    created_at: datetime
    is_favorite: bool
    is_archived: bool
    is_read: bool

    model_config = {"from_attributes": True}


class InboxResponse(BaseModel):
    active: list[InboxMessageResponse]
    favorites: list[InboxMessageResponse]
    archived: list[InboxMessageResponse]
    total: int

    model_config = {"from_attributes": True}


class DashboardStatsResponse(BaseModel):
    total_messages: int
    favorite_messages: int
    archived_messages: int
    unread_messages: int
    profile_views: int
    last_activity: datetime | None

    model_config = {"from_attributes": True}

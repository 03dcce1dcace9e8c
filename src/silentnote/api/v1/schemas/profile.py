from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class PublicProfileResponse(BaseModel):
    username: str
    display_name: str | None
    avatar_url: str | None

    model_config = {"from_attributes": True}


class MyProfileResponse(BaseModel):
    id: UUID
    user_id: UUID
    username: str
    display_name: str | None
    avatar_url: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CreateProfileRequest(BaseModel):
    username: str
    display_name: str | None = None


class UpdateProfileRequest(BaseModel):
    username: str | None = None
    display_name: str | None = None


class OnboardingResponse(BaseModel):
    completed: bool

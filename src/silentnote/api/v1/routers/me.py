from __future__ import annotations

from fastapi import APIRouter, File, UploadFile

from silentnote.api.deps import CurrentPrincipal, StorageDep, UoWDep
from silentnote.api.v1.schemas.message import DashboardStatsResponse
from silentnote.api.v1.schemas.profile import (
    CreateProfileRequest,
    MyProfileResponse,
    OnboardingResponse,
    UpdateProfileRequest,
)
from silentnote.config import settings
from silentnote.services import inbox_service, profile_service

router = APIRouter(prefix="/api/v1/me", tags=["me"])


@router.get("/profile", response_model=MyProfileResponse)
async def get_profile(principal: CurrentPrincipal, uow: UoWDep) -> MyProfileResponse:
    profile = await profile_service.get_my_profile(principal, uow)
    return MyProfileResponse.model_validate(profile, from_attributes=True)


@router.post("/profile", response_model=MyProfileResponse, status_code=201)
async def create_profile(
    body: CreateProfileRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MyProfileResponse:
    profile = await profile_service.create_profile(
        principal, body.username, body.display_name, uow,
    )
    return MyProfileResponse.model_validate(profile, from_attributes=True)


@router.patch("/profile", response_model=MyProfileResponse)
async def update_profile(
    body: UpdateProfileRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MyProfileResponse:
    profile = await profile_service.update_profile(
        principal, body.username, body.display_name, uow,
    )
    return MyProfileResponse.model_validate(profile, from_attributes=True)


@router.put("/avatar", response_model=MyProfileResponse)
async def replace_avatar(
    principal: CurrentPrincipal,
    uow: UoWDep,
    storage: StorageDep,
    file: UploadFile = File(...),
) -> MyProfileResponse:
    # Read one byte past the limit so oversized files are detectable without buffering them whole.
    data = await file.read(settings.AVATAR_MAX_BYTES + 1)
    profile = await profile_service.replace_avatar(
        principal,
        data,
        file.filename or "avatar",
        file.content_type,
        storage,
        uow,
        bucket=settings.AVATAR_BUCKET,
        max_bytes=settings.AVATAR_MAX_BYTES,
    )
    return MyProfileResponse.model_validate(profile, from_attributes=True)


@router.delete("/avatar", response_model=MyProfileResponse)
async def remove_avatar(
    principal: CurrentPrincipal,
    uow: UoWDep,
    storage: StorageDep,
) -> MyProfileResponse:
    profile = await profile_service.remove_avatar(
        principal, storage, uow, bucket=settings.AVATAR_BUCKET,
    )
    return MyProfileResponse.model_validate(profile, from_attributes=True)


@router.get("/onboarding", response_model=OnboardingResponse)
async def get_onboarding(principal: CurrentPrincipal, uow: UoWDep) -> OnboardingResponse:
    return OnboardingResponse(completed=await profile_service.get_onboarding(principal, uow))


@router.put("/onboarding", response_model=OnboardingResponse)
async def complete_onboarding(principal: CurrentPrincipal, uow: UoWDep) -> OnboardingResponse:
    await profile_service.complete_onboarding(principal, uow)
    return OnboardingResponse(completed=True)


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_stats(principal: CurrentPrincipal, uow: UoWDep) -> DashboardStatsResponse:
    stats = await inbox_service.dashboard_stats(principal, uow)
    return DashboardStatsResponse.model_validate(stats, from_attributes=True)

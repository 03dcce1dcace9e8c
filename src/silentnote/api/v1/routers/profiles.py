from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Query, Request

from silentnote.api.deps import IpLookupsDep, OptionalPrincipal, UoWDep, UoWFactoryDep
from silentnote.api.v1.schemas.message import SubmitMessageRequest, SubmitMessageResponse
from silentnote.api.v1.schemas.profile import PublicProfileResponse
from silentnote.application.dto.metadata import SenderEnvironment
from silentnote.config import settings
from silentnote.services import message_service, profile_service, profile_view_service

router = APIRouter(prefix="/api/v1/profiles", tags=["profiles"])


@router.get("/{username}", response_model=PublicProfileResponse)
async def get_profile(
    username: str,
    request: Request,
    background: BackgroundTasks,
    uow: UoWDep,
    uow_factory: UoWFactoryDep,
    ip_lookups: IpLookupsDep,
    referrer: str | None = Query(None),
) -> PublicProfileResponse:
    profile = await profile_service.get_public_profile(username, uow)
    # Runs after the response is sent; the request's session is closed by then.
    background.add_task(
        profile_view_service.track_view,
        profile.id,
        request.headers.get("user-agent", ""),
        referrer or request.headers.get("referer"),
        uow_factory,
        ip_lookups,
    )
    return PublicProfileResponse.model_validate(profile, from_attributes=True)


@router.post("/{username}/messages", response_model=SubmitMessageResponse, status_code=201)
async def submit_message(
    username: str,
    body: SubmitMessageRequest,
    request: Request,
    principal: OptionalPrincipal,
    uow: UoWDep,
    ip_lookups: IpLookupsDep,
) -> SubmitMessageResponse:
    environment = SenderEnvironment(
        user_agent=request.headers.get("user-agent", ""),
        language=body.language,
        platform=body.platform,
        screen_resolution=body.screen_resolution,
        timezone=body.timezone,
    )
    msg = await message_service.submit_message(
        username,
        body.content,
        principal,
        environment,
        uow,
        ip_lookups,
        max_length=settings.MESSAGE_MAX_LENGTH,
        capture_registered_metadata=settings.CAPTURE_REGISTERED_SENDER_METADATA,
    )
    return SubmitMessageResponse(id=msg.id, created_at=msg.created_at)

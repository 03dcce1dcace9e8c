from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query, Response

from silentnote.api.deps import CurrentPrincipal, UoWDep
from silentnote.api.v1.schemas.message import InboxMessageResponse, InboxResponse
from silentnote.services import inbox_service

router = APIRouter(prefix="/api/v1/inbox", tags=["inbox"])


@router.get("", response_model=InboxResponse)
async def list_inbox(
    principal: CurrentPrincipal,
    uow: UoWDep,
    search: str = Query("", max_length=300),
) -> InboxResponse:
    views = await inbox_service.list_inbox(principal, search, uow)
    return InboxResponse.model_validate(views, from_attributes=True)


@router.post("/{message_id}/favorite", response_model=InboxMessageResponse)
async def toggle_favorite(
    message_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> InboxMessageResponse:
    msg = await inbox_service.toggle_favorite(message_id, principal, uow)
    return InboxMessageResponse.model_validate(msg, from_attributes=True)


@router.post("/{message_id}/archive", response_model=InboxMessageResponse)
async def toggle_archive(
    message_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> InboxMessageResponse:
    msg = await inbox_service.toggle_archive(message_id, principal, uow)
    return InboxMessageResponse.model_validate(msg, from_attributes=True)


@router.post("/{message_id}/read", response_model=InboxMessageResponse)
async def mark_read(
    message_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> InboxMessageResponse:
    msg = await inbox_service.mark_read(message_id, principal, uow)
    return InboxMessageResponse.model_validate(msg, from_attributes=True)


@router.delete("/{message_id}", status_code=204)
async def delete_message(
    message_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> Response:
    await inbox_service.delete_message(message_id, principal, uow)
    return Response(status_code=204)

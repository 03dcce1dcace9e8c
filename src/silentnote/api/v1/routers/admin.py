from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Query, Response

from silentnote.api.deps import CurrentAdmin, UoWDep
from silentnote.api.v1.schemas.admin import (
    AdminMessageResponse,
    AdminMessagesResponse,
    AdminStatsResponse,
    AdminUserResponse,
)
from silentnote.services import admin_service

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.get("/messages", response_model=AdminMessagesResponse)
async def list_messages(
    admin: CurrentAdmin,
    uow: UoWDep,
    search: str = Query("", max_length=300),
) -> AdminMessagesResponse:
    views = await admin_service.list_messages(uow)
    stats = admin_service.message_stats(views, datetime.now(timezone.utc).date())
    return AdminMessagesResponse(
        items=[
            AdminMessageResponse.model_validate(v, from_attributes=True)
            for v in admin_service.filter_messages(views, search)
        ],
        stats=AdminStatsResponse.model_validate(stats, from_attributes=True),
    )


@router.delete("/messages/{message_id}", status_code=204)
async def delete_message(message_id: UUID, admin: CurrentAdmin, uow: UoWDep) -> Response:
    await admin_service.delete_message(message_id, uow)
    return Response(status_code=204)


@router.get("/users", response_model=list[AdminUserResponse])
async def list_users(
    admin: CurrentAdmin,
    uow: UoWDep,
    search: str = Query("", max_length=100),
) -> list[AdminUserResponse]:
    users = await admin_service.list_users(uow, search)
    return [AdminUserResponse.model_validate(u, from_attributes=True) for u in users]


@router.delete("/users/{account_id}", status_code=204)
async def delete_user(account_id: UUID, admin: CurrentAdmin, uow: UoWDep) -> Response:
    await admin_service.delete_user(account_id, uow)
    return Response(status_code=204)

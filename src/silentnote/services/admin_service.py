from __future__ import annotations

import logging
from datetime import date
from uuid import UUID

from silentnote.application.dto.admin import (
    UNKNOWN_USERNAME,
    AdminMessageView,
    AdminStats,
    AdminUserView,
)
from silentnote.application.exceptions import NotFoundError
from silentnote.application.uow import UnitOfWork
from silentnote.domain.entities.message import Message
from silentnote.domain.value_objects.enums import Role, SenderType

logger = logging.getLogger(__name__)


async def _username_map(messages: list[Message], uow: UnitOfWork) -> dict[UUID, str]:
    """Resolve every referenced account in one batched profile query."""
    user_ids: set[UUID] = set()
    for msg in messages:
        user_ids.add(msg.receiver_id)
        if msg.sender_user_id is not None:
            user_ids.add(msg.sender_user_id)
    if not user_ids:
        return {}
    profiles = await uow.profiles.list_by_user_ids(sorted(user_ids))
    return {p.user_id: p.username for p in profiles}


def _to_view(msg: Message, usernames: dict[UUID, str]) -> AdminMessageView:
    sender_username = None
    if msg.sender_user_id is not None:
        sender_username = usernames.get(msg.sender_user_id, UNKNOWN_USERNAME)
    return AdminMessageView(
        id=msg.id,
        content=msg.content,
        created_at=msg.created_at,
        receiver_id=msg.receiver_id,
        receiver_username=usernames.get(msg.receiver_id, UNKNOWN_USERNAME),
        sender_username=sender_username,
        sender_type=msg.sender_type or SenderType.ANONYMOUS,
        sender_metadata=msg.sender_metadata,
        is_read=msg.is_read,
        is_archived=msg.is_archived,
    )


def filter_messages(views: list[AdminMessageView], search: str) -> list[AdminMessageView]:
    term = search.strip()
    if not term:
        return list(views)
    return [v for v in views if v.matches(term)]


async def list_messages(uow: UnitOfWork, search: str = "") -> list[AdminMessageView]:
    messages = await uow.messages.list_all()
    usernames = await _username_map(messages, uow)
    return filter_messages([_to_view(m, usernames) for m in messages], search)


def message_stats(views: list[AdminMessageView], today: date) -> AdminStats:
    from_users = sum(1 for v in views if v.sender_type == SenderType.REGISTERED)
    return AdminStats(
        total=len(views),
        from_users=from_users,
        anonymous=len(views) - from_users,
        today=sum(1 for v in views if v.created_at.date() == today),
    )


async def delete_message(message_id: UUID, uow: UnitOfWork) -> None:
    if not await uow.messages_w.delete(message_id):
        raise NotFoundError("Message not found")
    await uow.commit()
    logger.info("Admin removed message %s", message_id)


async def list_users(uow: UnitOfWork, search: str = "") -> list[AdminUserView]:
    profiles = await uow.profiles.list_all()
    term = search.strip().lower()
    if term:
        profiles = [
            p for p in profiles
            if term in p.username.lower() or term in (p.display_name or "").lower()
        ]
    user_ids = [p.user_id for p in profiles]
    roles = await uow.roles.roles_for(user_ids)
    counts = await uow.messages.count_by_receiver(user_ids)
    return [
        AdminUserView(
            user_id=p.user_id,
            profile_id=p.id,
            username=p.username,
            display_name=p.display_name,
            roles=roles.get(p.user_id, []),
            message_count=counts.get(p.user_id, 0),
            created_at=p.created_at,
        )
        for p in profiles
    ]


async def delete_user(account_id: UUID, uow: UnitOfWork) -> None:
    """Remove an account's messages, roles and profile in one transaction.

    The auth identity belongs to the external provider and is left alone.
    """
    profile = await uow.profiles.get_by_user_id(account_id)
    if profile is None:
        raise NotFoundError("User not found")

    try:
        removed = await uow.messages_w.delete_for_account(account_id)
        await uow.roles_w.delete_for_user(account_id)
        await uow.profiles_w.delete_for_user(account_id)
        await uow.commit()
    except Exception:
        await uow.rollback()
        raise
    logger.info("Admin removed account=%s (%d messages)", account_id, removed)


async def grant_role(account_id: UUID, role: Role, uow: UnitOfWork) -> bool:
    granted = await uow.roles_w.grant(account_id, role)
    await uow.commit()
    if granted:
        logger.info("Granted role=%s to account=%s", role, account_id)
    return granted

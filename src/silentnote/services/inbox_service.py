"""Signed-in receiver's view of their own messages.

Every mutation writes to the data store first and only reports the new state
once the write is committed; a failed write leaves the caller's copy as it
was.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from uuid import UUID

from silentnote.application.dto.inbox import DashboardStats, InboxViews
from silentnote.application.dto.principal import Principal
from silentnote.application.exceptions import NotFoundError
from silentnote.application.policies.permissions import get_owned_message
from silentnote.application.uow import UnitOfWork
from silentnote.domain.entities.message import Message
from silentnote.services.profile_view_service import count_views_by_account

logger = logging.getLogger(__name__)


def _matches(message: Message, search: str) -> bool:
    return search.lower() in message.content.lower()


@dataclass
class Inbox:
    """A fetched message list plus the three dashboard tabs derived from it."""

    messages: list[Message] = field(default_factory=list)
    search: str = ""

    def _filtered(self) -> list[Message]:
        if not self.search:
            return list(self.messages)
        return [m for m in self.messages if _matches(m, self.search)]

    @property
    def active(self) -> list[Message]:
        return [m for m in self._filtered() if not m.is_archived]

    @property
    def favorites(self) -> list[Message]:
        return [m for m in self._filtered() if m.is_favorite and not m.is_archived]

    @property
    def archived(self) -> list[Message]:
        return [m for m in self._filtered() if m.is_archived]

    def views(self) -> InboxViews:
        return InboxViews(
            active=self.active,
            favorites=self.favorites,
            archived=self.archived,
            total=len(self.messages),
        )

    def apply(self, updated: Message) -> None:
        self.messages = [updated if m.id == updated.id else m for m in self.messages]

    def discard(self, message_id: UUID) -> None:
        self.messages = [m for m in self.messages if m.id != message_id]


async def load_inbox(principal: Principal, uow: UnitOfWork, search: str = "") -> Inbox:
    messages = await uow.messages.list_for_receiver(principal.account_id)
    return Inbox(messages=messages, search=search.strip())


async def list_inbox(principal: Principal, search: str, uow: UnitOfWork) -> InboxViews:
    return (await load_inbox(principal, uow, search)).views()


async def _flip(
    message_id: UUID,
    principal: Principal,
    uow: UnitOfWork,
    flag: str,
) -> Message:
    message = await get_owned_message(principal, message_id, uow.messages)
    value = not getattr(message, flag)
    await uow.messages_w.set_flags(message_id, **{flag: value})
    await uow.commit()
    return message.with_flags(**{flag: value})


async def toggle_favorite(message_id: UUID, principal: Principal, uow: UnitOfWork) -> Message:
    return await _flip(message_id, principal, uow, "is_favorite")


async def toggle_archive(message_id: UUID, principal: Principal, uow: UnitOfWork) -> Message:
    return await _flip(message_id, principal, uow, "is_archived")


async def mark_read(message_id: UUID, principal: Principal, uow: UnitOfWork) -> Message:
    message = await get_owned_message(principal, message_id, uow.messages)
    if message.is_read:
        return message
    await uow.messages_w.set_flags(message_id, is_read=True)
    await uow.commit()
    return message.with_flags(is_read=True)


async def delete_message(message_id: UUID, principal: Principal, uow: UnitOfWork) -> None:
    await get_owned_message(principal, message_id, uow.messages)
    if not await uow.messages_w.delete(message_id):
        raise NotFoundError("Message not found")
    await uow.commit()


async def dashboard_stats(principal: Principal, uow: UnitOfWork) -> DashboardStats:
    messages = await uow.messages.list_for_receiver(principal.account_id)
    views = await count_views_by_account(principal.account_id, uow)
    if views.error:
        logger.warning("Profile views unavailable for account=%s: %s", principal.account_id, views.error)
    return DashboardStats(
        total_messages=len(messages),
        favorite_messages=sum(1 for m in messages if m.is_favorite),
        archived_messages=sum(1 for m in messages if m.is_archived),
        unread_messages=sum(1 for m in messages if not m.is_read),
        profile_views=views.count,
        last_activity=messages[0].created_at if messages else None,
    )

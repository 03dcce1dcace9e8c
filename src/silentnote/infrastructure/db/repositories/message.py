from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from silentnote.domain.entities.message import Message
from silentnote.infrastructure.db.mappers import message as mapper
from silentnote.infrastructure.db.models.message import MessageModel


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_for_receiver(self, message_id: UUID, receiver_id: UUID) -> Message | None:
        stmt = select(MessageModel).where(
            MessageModel.id == message_id,
            MessageModel.receiver_id == receiver_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def list_for_receiver(self, receiver_id: UUID) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(MessageModel.receiver_id == receiver_id)
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def list_all(self) -> list[Message]:
        stmt = select(MessageModel).order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def count_by_receiver(self, receiver_ids: list[UUID]) -> dict[UUID, int]:
        if not receiver_ids:
            return {}
        stmt = (
            select(MessageModel.receiver_id, func.count())
            .where(MessageModel.receiver_id.in_(receiver_ids))
            .group_by(MessageModel.receiver_id)
        )
        result = await self._session.execute(stmt)
        return {receiver_id: count for receiver_id, count in result.all()}


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, message: Message) -> Message:
        model = mapper.entity_to_model(message)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def set_flags(self, message_id: UUID, **flags: bool) -> None:
        stmt = update(MessageModel).where(MessageModel.id == message_id).values(**flags)
        await self._session.execute(stmt)

    async def delete(self, message_id: UUID) -> bool:
        stmt = delete(MessageModel).where(MessageModel.id == message_id)
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def delete_for_account(self, account_id: UUID) -> int:
        stmt = delete(MessageModel).where(
            or_(
                MessageModel.sender_user_id == account_id,
                MessageModel.receiver_id == account_id,
            )
        )
        result = await self._session.execute(stmt)
        return result.rowcount

from __future__ import annotations

from silentnote.domain.entities.message import Message
from silentnote.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        id=model.id,
        content=model.content,
        receiver_id=model.receiver_id,
        sender_user_id=model.sender_user_id,
        sender_type=model.sender_type,
        sender_metadata=model.sender_metadata,
        created_at=model.created_at,
        is_favorite=model.is_favorite,
        is_archived=model.is_archived,
        is_read=model.is_read,
    )


def entity_to_model(entity: Message) -> MessageModel:
    return MessageModel(
        id=entity.id,
        content=entity.content,
        receiver_id=entity.receiver_id,
        sender_user_id=entity.sender_user_id,
        sender_type=entity.sender_type,
        sender_metadata=entity.sender_metadata,
        created_at=entity.created_at,
        is_favorite=entity.is_favorite,
        is_archived=entity.is_archived,
        is_read=entity.is_read,
    )

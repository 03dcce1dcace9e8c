from __future__ import annotations

import logging
import uuid

from silentnote.application.dto.metadata import SenderEnvironment
from silentnote.application.dto.principal import Principal
from silentnote.application.exceptions import NotFoundError
from silentnote.application.ports.clock import Clock, SystemClock
from silentnote.application.ports.ip_lookup import IpLookup
from silentnote.application.uow import UnitOfWork
from silentnote.application.validators import MESSAGE_MAX_LENGTH, validate_message_content
from silentnote.domain.entities.message import Message
from silentnote.domain.value_objects.enums import SenderType
from silentnote.services.metadata_collector import collect_sender_metadata

logger = logging.getLogger(__name__)


async def submit_message(
    receiver_username: str,
    content: str,
    principal: Principal | None,
    environment: SenderEnvironment,
    uow: UnitOfWork,
    ip_lookups: tuple[IpLookup, IpLookup | None],
    *,
    clock: Clock | None = None,
    max_length: int = MESSAGE_MAX_LENGTH,
    capture_registered_metadata: bool = True,
) -> Message:
    """Store a message for the owner of ``receiver_username``.

    Validation happens before any lookup. Without a session the message is
    anonymous and carries only the captured browser/network metadata; with a
    session it is tagged with the sender's account.
    """
    text = validate_message_content(content, max_length)
    clock = clock or SystemClock()

    receiver = await uow.profiles.get_by_username(receiver_username)
    if receiver is None:
        raise NotFoundError("Profile not found")

    if principal is None:
        sender_type, sender_user_id = SenderType.ANONYMOUS, None
    else:
        sender_type, sender_user_id = SenderType.REGISTERED, principal.account_id

    metadata = None
    if sender_type == SenderType.ANONYMOUS or capture_registered_metadata:
        metadata = (await collect_sender_metadata(environment, ip_lookups, clock)).as_dict()

    message = Message(
        id=uuid.uuid4(),
        content=text,
        receiver_id=receiver.user_id,
        sender_user_id=sender_user_id,
        sender_type=sender_type.value,
        sender_metadata=metadata,
        created_at=clock.now(),
    )
    message = await uow.messages_w.add(message)
    await uow.commit()
    logger.info("Message %s delivered to profile=%s (%s)", message.id, receiver.id, sender_type)
    return message

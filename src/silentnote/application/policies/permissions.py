from __future__ import annotations

from uuid import UUID

from silentnote.application.dto.principal import Principal
from silentnote.application.exceptions import AdminRedirect, NotFoundError
from silentnote.application.repositories.message import MessageReader
from silentnote.application.repositories.user_role import UserRoleReader
from silentnote.domain.entities.message import Message
from silentnote.domain.value_objects.enums import Role


async def get_owned_message(
    principal: Principal,
    message_id: UUID,
    messages: MessageReader,
) -> Message:
    """Fetch a message the principal received; other accounts' rows look missing."""
    message = await messages.get_for_receiver(message_id, principal.account_id)
    if message is None:
        raise NotFoundError("Message not found")
    return message


async def require_admin(
    principal: Principal,
    roles: UserRoleReader,
    *,
    redirect_to: str = "/dashboard",
) -> None:
    """Raise ``AdminRedirect`` unless the role table lists the principal as admin.

    Role claims inside the token are ignored here.
    """
    if not await roles.has_role(principal.account_id, Role.ADMIN):
        raise AdminRedirect(redirect_to)

"""Seed development data: one public profile with a few inbox messages."""
from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime, timedelta, timezone

from silentnote.domain.entities.message import Message
from silentnote.domain.entities.profile import Profile
from silentnote.domain.value_objects.enums import SenderType
from silentnote.infrastructure.db.session import AsyncSessionLocal
from silentnote.infrastructure.db.uow import SqlAlchemyUoW

logger = logging.getLogger(__name__)

DEV_ACCOUNT_ID = uuid.UUID("00000000-0000-4000-8000-000000000001")


async def seed() -> None:
    async with AsyncSessionLocal() as session, SqlAlchemyUoW(session) as uow:
        now = datetime.now(timezone.utc)
        if await uow.profiles.get_by_user_id(DEV_ACCOUNT_ID) is None:
            await uow.profiles_w.create(
                Profile(
                    id=uuid.uuid4(),
                    user_id=DEV_ACCOUNT_ID,
                    username="devuser",
                    display_name="Dev User",
                    avatar_url=None,
                    created_at=now,
                    updated_at=now,
                )
            )

        bodies = [
            "You always make the team meetings better.",
            "Honest question: how do you stay so calm?",
            "Loved your talk last week!",
        ]
        for i, body in enumerate(bodies):
            await uow.messages_w.add(
                Message(
                    id=uuid.uuid4(),
                    content=body,
                    receiver_id=DEV_ACCOUNT_ID,
                    sender_user_id=None,
                    sender_type=SenderType.ANONYMOUS,
                    sender_metadata={"timestamp": now.isoformat(), "ip_address": "unknown"},
                    created_at=now - timedelta(hours=i),
                )
            )

        await uow.commit()
        logger.info("Seeded profile 'devuser' with %d messages", len(bodies))


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())


if __name__ == "__main__":
    main()

"""Create the SilentNote tables and optionally grant the admin role.

    python -m silentnote.scripts.init_db --admin <account uuid>
"""
from __future__ import annotations

import argparse
import asyncio
import logging
from uuid import UUID

from silentnote.domain.value_objects.enums import Role
from silentnote.infrastructure.db import models  # noqa: F401
from silentnote.infrastructure.db.base import Base
from silentnote.infrastructure.db.session import AsyncSessionLocal, engine
from silentnote.infrastructure.db.uow import SqlAlchemyUoW
from silentnote.services import admin_service

logger = logging.getLogger(__name__)


async def init_db(admins: list[UUID]) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema ready: %s", ", ".join(sorted(Base.metadata.tables)))

    if admins:
        async with AsyncSessionLocal() as session, SqlAlchemyUoW(session) as uow:
            for account_id in admins:
                await admin_service.grant_role(account_id, Role.ADMIN, uow)
    await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--admin", type=UUID, action="append", default=[], metavar="ACCOUNT_ID")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_db(args.admin))


if __name__ == "__main__":
    main()

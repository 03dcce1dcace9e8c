from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from uuid import UUID

from silentnote.application.ports.clock import Clock, SystemClock
from silentnote.application.ports.ip_lookup import IpLookup
from silentnote.application.uow import UnitOfWork, UoWFactory
from silentnote.domain.entities.profile_view import ProfileView
from silentnote.services.metadata_collector import resolve_ip

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ViewCount:
    count: int
    error: str | None = None


async def record_view(
    profile_id: UUID,
    user_agent: str,
    referrer: str | None,
    uow: UnitOfWork,
    ip_lookups: tuple[IpLookup, IpLookup | None],
    clock: Clock | None = None,
) -> bool:
    """Append a view row. Failures are logged and never reach the visitor."""
    clock = clock or SystemClock()
    try:
        primary, fallback = ip_lookups
        view = ProfileView(
            id=uuid.uuid4(),
            profile_id=profile_id,
            viewer_ip=await resolve_ip(primary, fallback),
            viewer_user_agent=user_agent,
            referrer=referrer or None,
            viewed_at=clock.now(),
        )
        await uow.profile_views_w.add(view)
        await uow.commit()
    except Exception:
        logger.exception("Error tracking profile view for profile=%s", profile_id)
        return False
    return True


async def track_view(
    profile_id: UUID,
    user_agent: str,
    referrer: str | None,
    uow_factory: UoWFactory,
    ip_lookups: tuple[IpLookup, IpLookup | None],
    clock: Clock | None = None,
) -> bool:
    """``record_view`` on its own unit of work, for scheduling after the response."""
    try:
        async with uow_factory() as uow:
            return await record_view(profile_id, user_agent, referrer, uow, ip_lookups, clock)
    except Exception:
        logger.exception("Could not open a unit of work to track profile=%s", profile_id)
        return False


async def count_views(profile_id: UUID, uow: UnitOfWork) -> int:
    return await uow.profile_views.count_for_profile(profile_id)


async def count_views_by_account(account_id: UUID, uow: UnitOfWork) -> ViewCount:
    try:
        profile = await uow.profiles.get_by_user_id(account_id)
        if profile is None:
            return ViewCount(0, "Profile not found")
        return ViewCount(await count_views(profile.id, uow))
    except Exception as exc:  # noqa: BLE001
        logger.error("Error getting profile views for account=%s: %s", account_id, exc)
        return ViewCount(0, str(exc))

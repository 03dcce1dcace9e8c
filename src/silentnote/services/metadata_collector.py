"""Best-effort capture of who sent a message or opened a profile."""
from __future__ import annotations

import logging

from silentnote.application.dto.metadata import UNKNOWN_IP, SenderEnvironment, SenderMetadata
from silentnote.application.ports.clock import Clock, SystemClock
from silentnote.application.ports.ip_lookup import IpLookup

logger = logging.getLogger(__name__)


async def _try_lookup(lookup: IpLookup, label: str) -> str | None:
    try:
        return await lookup.lookup()
    except Exception as exc:  # noqa: BLE001
        logger.warning("%s IP lookup failed: %s", label, exc)
        return None


async def resolve_ip(primary: IpLookup, fallback: IpLookup | None = None) -> str:
    """Ask the primary service, then the fallback once; never raises."""
    ip = await _try_lookup(primary, "Primary")
    if ip:
        return ip
    if fallback is not None:
        ip = await _try_lookup(fallback, "Fallback")
        if ip:
            return ip
    return UNKNOWN_IP


async def collect_sender_metadata(
    environment: SenderEnvironment,
    ip_lookups: tuple[IpLookup, IpLookup | None],
    clock: Clock | None = None,
) -> SenderMetadata:
    clock = clock or SystemClock()
    primary, fallback = ip_lookups
    return SenderMetadata(
        timestamp=clock.now().isoformat(),
        user_agent=environment.user_agent,
        language=environment.language,
        platform=environment.platform,
        screen_resolution=environment.screen_resolution,
        timezone=environment.timezone,
        ip_address=await resolve_ip(primary, fallback),
    )

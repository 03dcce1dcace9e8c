from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

UNKNOWN_IP = "unknown"


@dataclass(frozen=True, slots=True)
class SenderEnvironment:
    """Attributes reported by the sender's browser."""

    user_agent: str = ""
    language: str | None = None
    platform: str | None = None
    screen_resolution: str | None = None
    timezone: str | None = None


@dataclass(frozen=True, slots=True)
class SenderMetadata:
    timestamp: str
    user_agent: str
    language: str | None
    platform: str | None
    screen_resolution: str | None
    timezone: str | None
    ip_address: str = UNKNOWN_IP

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)

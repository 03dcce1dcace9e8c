from __future__ import annotations

from typing import Protocol


class IpLookup(Protocol):
    async def lookup(self) -> str | None:
        """Return the public IP, or None when the service answers with a non-success status.

        Transport errors and timeouts are raised.
        """
        ...

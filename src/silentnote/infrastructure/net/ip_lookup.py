from __future__ import annotations

import ipaddress
import logging

import httpx
from starlette.requests import Request

logger = logging.getLogger(__name__)


class HttpIpLookup:
    """Query a public "what is my IP" endpoint answering ``{"ip": "..."}``."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 3.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def lookup(self) -> str | None:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.get(self._url)
        if not response.is_success:
            logger.warning("IP lookup %s answered %s", self._url, response.status_code)
            return None
        ip = response.json().get("ip")
        return str(ip) if ip else None


class RequestIpLookup:
    """The visitor's address as seen by this server.

    The first ``X-Forwarded-For`` hop wins when ``trust_forwarded_for`` is set,
    otherwise the socket peer. Anything that is not an IP address yields None.
    """

    def __init__(self, forwarded_for: str | None, client_host: str | None) -> None:
        self._forwarded_for = forwarded_for or ""
        self._client_host = client_host

    @classmethod
    def from_request(cls, request: Request, *, trust_forwarded_for: bool = True) -> RequestIpLookup:
        forwarded = request.headers.get("x-forwarded-for") if trust_forwarded_for else None
        return cls(forwarded, request.client.host if request.client else None)

    async def lookup(self) -> str | None:
        candidate = self._forwarded_for.split(",")[0].strip() or self._client_host
        if not candidate:
            return None
        try:
            return str(ipaddress.ip_address(candidate))
        except ValueError:
            logger.debug("Ignoring non-IP client address %r", candidate)
            return None

from __future__ import annotations

from typing import Protocol

from silentnote.application.dto.principal import Principal


class TokenVerifier(Protocol):
    """Turns a bearer token from the auth provider into a Principal.

    Implementations raise on an invalid, expired or wrong-audience token.
    """

    async def verify(self, token: str) -> Principal: ...

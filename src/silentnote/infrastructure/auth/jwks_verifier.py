from __future__ import annotations

import jwt
from jwt import PyJWKClient

from silentnote.application.dto.principal import Principal
from silentnote.infrastructure.auth.claims import principal_from_claims


class JWKSVerifier:
    """Verify session JWTs using the provider's remote JWKS endpoint."""

    def __init__(self, jwks_url: str, audience: str | None = None) -> None:
        self._jwks_url = jwks_url
        self._audience = audience
        self._jwk_client = PyJWKClient(jwks_url)

    async def verify(self, token: str) -> Principal:
        signing_key = self._jwk_client.get_signing_key_from_jwt(token)
        payload = jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256", "ES256"],
            audience=self._audience,
            options={"verify_aud": self._audience is not None},
        )
        return principal_from_claims(payload)

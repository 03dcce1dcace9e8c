from __future__ import annotations

from typing import Any
from uuid import UUID

from silentnote.application.dto.principal import Principal


def principal_from_claims(payload: dict[str, Any]) -> Principal:
    """Build a Principal from the auth provider's session claims."""
    app_metadata = payload.get("app_metadata") or {}
    roles = payload.get("roles") or app_metadata.get("roles") or []
    return Principal(
        account_id=UUID(str(payload["sub"])),
        email=payload.get("email"),
        roles=list(roles),
    )

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Principal:
    """Signed-in account identity extracted from the session JWT."""

    account_id: UUID
    email: str | None = None
    roles: list[str] = field(default_factory=list)

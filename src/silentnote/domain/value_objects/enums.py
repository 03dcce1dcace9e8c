from __future__ import annotations

from enum import StrEnum


class SenderType(StrEnum):
    """Who wrote a message: a signed-in account or an anonymous visitor."""

    REGISTERED = "registered"
    ANONYMOUS = "anonymous"


class Role(StrEnum):
    ADMIN = "admin"
    USER = "user"

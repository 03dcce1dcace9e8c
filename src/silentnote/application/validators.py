"""Input checks that run before any network or database call."""
from __future__ import annotations

import re

from silentnote.application.exceptions import ValidationError

MESSAGE_MAX_LENGTH = 300
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30

_USERNAME_RE = re.compile(r"^[A-Za-z0-9_]+$")


def validate_message_content(content: str, max_length: int = MESSAGE_MAX_LENGTH) -> str:
    """Return the trimmed content or raise."""
    text = (content or "").strip()
    if not text:
        raise ValidationError("Please write a message before sending.")
    if len(text) > max_length:
        raise ValidationError(f"Messages are limited to {max_length} characters.")
    return text


def validate_username(username: str) -> str:
    name = (username or "").strip()
    if (
        len(name) < USERNAME_MIN_LENGTH
        or len(name) > USERNAME_MAX_LENGTH
        or not _USERNAME_RE.fullmatch(name)
    ):
        raise ValidationError(
            "Username must be at least 3 characters and contain only letters, "
            "numbers, and underscores."
        )
    return name

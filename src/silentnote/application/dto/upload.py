from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UploadResult:
    success: bool
    url: str | None = None
    error: str | None = None

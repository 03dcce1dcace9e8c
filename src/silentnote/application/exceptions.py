"""Errors raised by services and mapped to HTTP responses in ``app``."""
from __future__ import annotations


class AppError(Exception):
    """Base application error; ``detail`` is safe to show to the caller."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class NotFoundError(AppError):
    """Unknown profile or message, or one that belongs to another account."""


class ConflictError(AppError):
    pass


class ValidationError(AppError):
    """Input rejected before anything was written."""


class AdminRedirect(AppError):
    """Caller lacks the admin role; send them back without saying why."""

    def __init__(self, location: str = "/dashboard") -> None:
        self.location = location
        super().__init__("")

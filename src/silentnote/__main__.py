"""Entrypoint: python -m silentnote"""
from __future__ import annotations

import logging

import uvicorn

from silentnote.api.middleware.correlation_id import RequestIdLogFilter
from silentnote.config import settings


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s [%(request_id)s]: %(message)s",
    )
    for handler in logging.getLogger().handlers:
        handler.addFilter(RequestIdLogFilter())


def main() -> None:
    configure_logging()
    uvicorn.run(
        "silentnote.app:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        # Keep our handlers (and the request id filter) in charge.
        log_config=None,
    )


if __name__ == "__main__":
    main()

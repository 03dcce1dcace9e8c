from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from silentnote.api.middleware.correlation_id import CorrelationIdMiddleware
from silentnote.api.middleware.timing import RequestTimingMiddleware
from silentnote.api.v1.routers import admin, health, inbox, me, profiles
from silentnote.application.exceptions import (
    AdminRedirect,
    AppError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from silentnote.config import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    logger.info("SilentNote API starting")
    yield
    from silentnote.infrastructure.db.session import engine

    await engine.dispose()
    logger.info("Database engine disposed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="SilentNote API",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Last added runs first: the request id is set before timing logs.
    app.add_middleware(RequestTimingMiddleware, slow_ms=settings.SLOW_REQUEST_MS)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(profiles.router)
    app.include_router(inbox.router)
    app.include_router(me.router)
    app.include_router(admin.router)

    return app


_STATUS_BY_ERROR: dict[type[AppError], int] = {
    NotFoundError: 404,
    ConflictError: 409,
    ValidationError: 422,
}


def _register_exception_handlers(app: FastAPI) -> None:
    async def _app_error(_req: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=_STATUS_BY_ERROR[type(exc)], content={"detail": exc.detail})

    for error_type in _STATUS_BY_ERROR:
        app.add_exception_handler(error_type, _app_error)

    @app.exception_handler(AdminRedirect)
    async def _admin_redirect(_req: Request, exc: AdminRedirect) -> RedirectResponse:
        return RedirectResponse(url=exc.location, status_code=303)

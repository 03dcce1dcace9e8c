"""Process-wide async engine and session factory for the SilentNote database."""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from silentnote.config import settings

engine = create_async_engine(
    settings.database_url,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_recycle=settings.DB_POOL_RECYCLE,
    pool_pre_ping=True,
    echo=settings.DB_ECHO,
    # Timestamps are compared against UTC "today" in moderation stats.
    connect_args={"server_settings": {"application_name": settings.APP_NAME, "timezone": "UTC"}},
)

# Services return entities after commit, so loaded rows must stay readable.
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

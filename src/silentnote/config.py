from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "silentnote"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    SLOW_REQUEST_MS: float = 1000.0

    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    POSTGRES_DB: str
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432

    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_RECYCLE: int = 300
    DB_ECHO: bool = False

    JWT_SECRET: str = ""
    JWT_VERIFY_MODE: Literal["hs256", "jwks"] = "hs256"
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str | None = "authenticated"
    JWKS_URL: str | None = None

    CORS_ORIGINS: list[str] = ["*"]

    TRUST_FORWARDED_FOR: bool = True
    IP_LOOKUP_URL: str = "https://api.ipify.org?format=json"
    IP_LOOKUP_TIMEOUT_SECONDS: float = 3.0

    STORAGE_ENDPOINT_URL: str | None = None
    STORAGE_REGION: str = "auto"
    STORAGE_ACCESS_KEY_ID: str = ""
    STORAGE_SECRET_ACCESS_KEY: str = ""
    STORAGE_PUBLIC_BASE_URL: str = ""
    AVATAR_BUCKET: str = "avatars"
    AVATAR_MAX_BYTES: int = 10 * 1024 * 1024

    MESSAGE_MAX_LENGTH: int = 300
    CAPTURE_REGISTERED_SENDER_METADATA: bool = True

    DASHBOARD_PATH: str = "/dashboard"

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.POSTGRES_DB}"
        )

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()  # type: ignore[call-arg]

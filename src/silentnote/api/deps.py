"""FastAPI dependency injection helpers."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Annotated, AsyncIterator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from silentnote.application.dto.principal import Principal
from silentnote.application.policies.permissions import require_admin
from silentnote.application.ports.auth import TokenVerifier
from silentnote.application.ports.ip_lookup import IpLookup
from silentnote.application.ports.storage import ObjectStorage
from silentnote.application.uow import UoWFactory
from silentnote.config import settings
from silentnote.infrastructure.auth.hs256_verifier import HS256Verifier
from silentnote.infrastructure.auth.jwks_verifier import JWKSVerifier
from silentnote.infrastructure.db.session import AsyncSessionLocal
from silentnote.infrastructure.db.uow import SqlAlchemyUoW
from silentnote.infrastructure.net.ip_lookup import HttpIpLookup, RequestIpLookup
from silentnote.infrastructure.storage.s3_storage import S3ObjectStorage

_bearer_scheme = HTTPBearer()
_optional_bearer_scheme = HTTPBearer(auto_error=False)


@asynccontextmanager
async def open_uow() -> AsyncIterator[SqlAlchemyUoW]:
    """A unit of work with its own session, usable outside a request."""
    async with AsyncSessionLocal() as session, SqlAlchemyUoW(session) as uow:
        yield uow


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with open_uow() as uow:
        yield uow


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


def get_uow_factory() -> UoWFactory:
    return open_uow


UoWFactoryDep = Annotated[UoWFactory, Depends(get_uow_factory)]


def _get_verifier() -> TokenVerifier:
    if settings.JWT_VERIFY_MODE == "jwks":
        assert settings.JWKS_URL, "JWKS_URL must be set when JWT_VERIFY_MODE=jwks"
        return JWKSVerifier(settings.JWKS_URL, settings.JWT_AUDIENCE)
    return HS256Verifier(settings.JWT_SECRET, settings.JWT_ALGORITHM, settings.JWT_AUDIENCE)


_verifier: TokenVerifier | None = None


def get_verifier() -> TokenVerifier:
    global _verifier  # noqa: PLW0603
    if _verifier is None:
        _verifier = _get_verifier()
    return _verifier


async def _verify(token: str) -> Principal:
    verifier = get_verifier()
    try:
        return await verifier.verify(token)
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(_bearer_scheme)],
) -> Principal:
    return await _verify(credentials.credentials)


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


async def get_optional_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_optional_bearer_scheme)],
) -> Principal | None:
    """Visitors without a session are allowed through as ``None``."""
    if credentials is None:
        return None
    return await _verify(credentials.credentials)


OptionalPrincipal = Annotated[Principal | None, Depends(get_optional_principal)]


async def get_current_admin(principal: CurrentPrincipal, uow: UoWDep) -> Principal:
    await require_admin(principal, uow.roles, redirect_to=settings.DASHBOARD_PATH)
    return principal


CurrentAdmin = Annotated[Principal, Depends(get_current_admin)]


def get_http_ip_lookup() -> IpLookup:
    return HttpIpLookup(settings.IP_LOOKUP_URL, timeout=settings.IP_LOOKUP_TIMEOUT_SECONDS)


def get_ip_lookups(
    request: Request,
    fallback: Annotated[IpLookup, Depends(get_http_ip_lookup)],
) -> tuple[IpLookup, IpLookup | None]:
    """The caller's own address first; the public lookup service only if that is unusable."""
    primary = RequestIpLookup.from_request(request, trust_forwarded_for=settings.TRUST_FORWARDED_FOR)
    return primary, fallback


IpLookupsDep = Annotated[tuple[IpLookup, IpLookup | None], Depends(get_ip_lookups)]


_storage: ObjectStorage | None = None


def get_storage() -> ObjectStorage:
    global _storage  # noqa: PLW0603
    if _storage is None:
        _storage = S3ObjectStorage(
            public_base_url=settings.STORAGE_PUBLIC_BASE_URL,
            endpoint_url=settings.STORAGE_ENDPOINT_URL,
            region_name=settings.STORAGE_REGION,
            access_key_id=settings.STORAGE_ACCESS_KEY_ID,
            secret_access_key=settings.STORAGE_SECRET_ACCESS_KEY,
        )
    return _storage


StorageDep = Annotated[ObjectStorage, Depends(get_storage)]

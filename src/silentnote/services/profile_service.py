from __future__ import annotations

import logging
import uuid
from typing import Any

from silentnote.application.dto.principal import Principal
from silentnote.application.exceptions import ConflictError, NotFoundError, ValidationError
from silentnote.application.ports.clock import Clock, SystemClock
from silentnote.application.ports.storage import ObjectStorage
from silentnote.application.uow import UnitOfWork
from silentnote.application.validators import validate_username
from silentnote.domain.entities.preferences import AccountPreferences
from silentnote.domain.entities.profile import Profile
from silentnote.services.upload_service import DEFAULT_BUCKET, MAX_IMAGE_BYTES, delete_image, upload_image

logger = logging.getLogger(__name__)


async def get_public_profile(username: str, uow: UnitOfWork) -> Profile:
    profile = await uow.profiles.get_by_username(username)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


async def get_my_profile(principal: Principal, uow: UnitOfWork) -> Profile:
    profile = await uow.profiles.get_by_user_id(principal.account_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


async def _assert_username_free(username: str, principal: Principal, uow: UnitOfWork) -> None:
    existing = await uow.profiles.get_by_username(username)
    if existing is not None and existing.user_id != principal.account_id:
        raise ConflictError("Username is already taken")


async def create_profile(
    principal: Principal,
    username: str,
    display_name: str | None,
    uow: UnitOfWork,
    clock: Clock | None = None,
) -> Profile:
    name = validate_username(username)
    if await uow.profiles.get_by_user_id(principal.account_id) is not None:
        raise ConflictError("Profile already exists")
    await _assert_username_free(name, principal, uow)

    now = (clock or SystemClock()).now()
    profile = await uow.profiles_w.create(
        Profile(
            id=uuid.uuid4(),
            user_id=principal.account_id,
            username=name,
            display_name=(display_name or "").strip() or None,
            avatar_url=None,
            created_at=now,
            updated_at=now,
        )
    )
    await uow.commit()
    return profile


async def update_profile(
    principal: Principal,
    username: str | None,
    display_name: str | None,
    uow: UnitOfWork,
) -> Profile:
    await get_my_profile(principal, uow)
    values: dict[str, Any] = {}
    if username is not None:
        name = validate_username(username)
        await _assert_username_free(name, principal, uow)
        values["username"] = name
    if display_name is not None:
        values["display_name"] = display_name.strip() or None
    if values:
        await uow.profiles_w.update(principal.account_id, values)
        await uow.commit()
    return await get_my_profile(principal, uow)


async def replace_avatar(
    principal: Principal,
    data: bytes,
    filename: str,
    content_type: str | None,
    storage: ObjectStorage,
    uow: UnitOfWork,
    *,
    bucket: str = DEFAULT_BUCKET,
    max_bytes: int = MAX_IMAGE_BYTES,
) -> Profile:
    profile = await get_my_profile(principal, uow)
    result = await upload_image(
        storage, data, filename, content_type, principal.account_id,
        bucket=bucket, max_bytes=max_bytes,
    )
    if not result.success:
        raise ValidationError(result.error or "Failed to upload image")

    await uow.profiles_w.update(principal.account_id, {"avatar_url": result.url})
    await uow.commit()

    if profile.avatar_url and not await delete_image(storage, profile.avatar_url, bucket=bucket):
        logger.warning("Old avatar %s was not removed", profile.avatar_url)
    return await get_my_profile(principal, uow)


async def remove_avatar(
    principal: Principal,
    storage: ObjectStorage,
    uow: UnitOfWork,
    *,
    bucket: str = DEFAULT_BUCKET,
) -> Profile:
    profile = await get_my_profile(principal, uow)
    if profile.avatar_url is None:
        return profile
    await delete_image(storage, profile.avatar_url, bucket=bucket)
    await uow.profiles_w.update(principal.account_id, {"avatar_url": None})
    await uow.commit()
    return await get_my_profile(principal, uow)


async def get_onboarding(principal: Principal, uow: UnitOfWork) -> bool:
    prefs = await uow.preferences.get(principal.account_id)
    return prefs.onboarding_completed if prefs else False


async def complete_onboarding(
    principal: Principal,
    uow: UnitOfWork,
    clock: Clock | None = None,
) -> None:
    await uow.preferences_w.upsert(
        AccountPreferences(
            user_id=principal.account_id,
            onboarding_completed=True,
            updated_at=(clock or SystemClock()).now(),
        )
    )
    await uow.commit()

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager

import pytest

from silentnote.services import profile_view_service
from tests.conftest import FakeIpLookup, make_profile


@pytest.mark.asyncio
async def test_record_view_appends_row(uow, ip_lookups, clock):
    profile = make_profile()
    uow.store.profiles.append(profile)

    ok = await profile_view_service.record_view(
        profile.id, "Mozilla/5.0", "https://t.co/x", uow, ip_lookups, clock,
    )

    assert ok is True
    [view] = uow.store.views
    assert view.profile_id == profile.id
    assert view.viewer_ip == "203.0.113.7"
    assert view.viewer_user_agent == "Mozilla/5.0"
    assert view.referrer == "https://t.co/x"
    assert view.viewed_at == clock.now()
    assert uow.commits == 1


@pytest.mark.asyncio
async def test_record_view_uses_unknown_ip(uow, clock):
    lookups = (FakeIpLookup(ip=None), FakeIpLookup(error=OSError("offline")))

    await profile_view_service.record_view(uuid.uuid4(), "", None, uow, lookups, clock)

    assert uow.store.views[0].viewer_ip == "unknown"
    assert uow.store.views[0].referrer is None


@pytest.mark.asyncio
async def test_record_view_swallows_failures(uow, ip_lookups):
    uow.store.fail_on.add("profile_views.add")

    ok = await profile_view_service.record_view(uuid.uuid4(), "ua", None, uow, ip_lookups)

    assert ok is False
    assert uow.store.views == []


@pytest.mark.asyncio
async def test_count_by_account(uow, alice, ip_lookups):
    profile = make_profile(user_id=alice.account_id)
    uow.store.profiles.append(profile)
    for _ in range(3):
        await profile_view_service.record_view(profile.id, "ua", None, uow, ip_lookups)

    result = await profile_view_service.count_views_by_account(alice.account_id, uow)

    assert result.count == 3
    assert result.error is None


@pytest.mark.asyncio
async def test_count_by_account_without_profile(uow):
    result = await profile_view_service.count_views_by_account(uuid.uuid4(), uow)

    assert result.count == 0
    assert result.error == "Profile not found"


@pytest.mark.asyncio
async def test_count_by_account_lookup_error(uow, alice):
    uow.store.fail_on.add("profiles.get_by_user_id")

    result = await profile_view_service.count_views_by_account(alice.account_id, uow)

    assert result.count == 0
    assert "failed" in result.error


@pytest.mark.asyncio
async def test_track_view_opens_its_own_unit_of_work(uow, ip_lookups):
    opened = []

    @asynccontextmanager
    async def factory():
        opened.append(True)
        yield uow

    assert await profile_view_service.track_view(uuid.uuid4(), "ua", None, factory, ip_lookups)
    assert opened == [True]
    assert len(uow.store.views) == 1


@pytest.mark.asyncio
async def test_track_view_survives_session_failure(ip_lookups):
    @asynccontextmanager
    async def factory():
        raise ConnectionError("database down")
        yield

    assert await profile_view_service.track_view(uuid.uuid4(), "ua", None, factory, ip_lookups) is False

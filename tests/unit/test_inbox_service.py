from __future__ import annotations

import uuid
from datetime import timedelta

import pytest

from silentnote.application.exceptions import NotFoundError
from silentnote.services import inbox_service
from silentnote.services.inbox_service import Inbox
from tests.conftest import FIXED_NOW, make_message, make_profile


@pytest.fixture
def seeded(uow, alice, bob):
    rows = [
        make_message(receiver_id=alice.account_id, content="First note", created_at=FIXED_NOW),
        make_message(
            receiver_id=alice.account_id,
            content="You are GREAT",
            created_at=FIXED_NOW + timedelta(minutes=1),
            is_favorite=True,
        ),
        make_message(
            receiver_id=alice.account_id,
            content="old great news",
            created_at=FIXED_NOW + timedelta(minutes=2),
            is_archived=True,
            is_favorite=True,
        ),
        make_message(receiver_id=bob.account_id, content="for bob"),
    ]
    uow.store.messages.extend(rows)
    return rows


@pytest.mark.asyncio
async def test_views_are_newest_first_and_partitioned(uow, alice, seeded):
    views = await inbox_service.list_inbox(alice, "", uow)

    assert [m.content for m in views.active] == ["You are GREAT", "First note"]
    assert [m.content for m in views.favorites] == ["You are GREAT"]
    assert [m.content for m in views.archived] == ["old great news"]
    assert views.total == 3


@pytest.mark.asyncio
async def test_search_is_case_insensitive(uow, alice, seeded):
    views = await inbox_service.list_inbox(alice, "great", uow)

    assert [m.content for m in views.active] == ["You are GREAT"]
    assert [m.content for m in views.archived] == ["old great news"]


@pytest.mark.asyncio
async def test_toggle_favorite_twice_restores_value(uow, alice, seeded):
    target = seeded[0]

    first = await inbox_service.toggle_favorite(target.id, alice, uow)
    second = await inbox_service.toggle_favorite(target.id, alice, uow)

    assert first.is_favorite is True
    assert second.is_favorite is False
    assert uow.store.count("messages.set_flags") == 2
    assert uow.commits == 2


@pytest.mark.asyncio
async def test_toggle_archive(uow, alice, seeded):
    msg = await inbox_service.toggle_archive(seeded[0].id, alice, uow)

    assert msg.is_archived is True
    views = await inbox_service.list_inbox(alice, "", uow)
    assert seeded[0].id in {m.id for m in views.archived}


@pytest.mark.asyncio
async def test_failed_update_leaves_state(uow, alice, seeded):
    uow.store.fail_on.add("messages.set_flags")

    with pytest.raises(RuntimeError):
        await inbox_service.toggle_favorite(seeded[0].id, alice, uow)

    assert uow.commits == 0
    assert uow.store.messages[0].is_favorite is False


@pytest.mark.asyncio
async def test_cannot_touch_someone_elses_message(uow, alice, seeded):
    bobs = seeded[3]

    with pytest.raises(NotFoundError):
        await inbox_service.toggle_favorite(bobs.id, alice, uow)
    with pytest.raises(NotFoundError):
        await inbox_service.delete_message(bobs.id, alice, uow)

    assert uow.store.count("messages.set_flags") == 0
    assert uow.store.count("messages.delete") == 0


@pytest.mark.asyncio
async def test_mark_read_is_idempotent(uow, alice, seeded):
    await inbox_service.mark_read(seeded[0].id, alice, uow)
    msg = await inbox_service.mark_read(seeded[0].id, alice, uow)

    assert msg.is_read is True
    assert uow.store.count("messages.set_flags") == 1


@pytest.mark.asyncio
async def test_delete_removes_from_every_view(uow, alice, seeded):
    favorite = seeded[1]

    await inbox_service.delete_message(favorite.id, alice, uow)

    views = await inbox_service.list_inbox(alice, "", uow)
    remaining = views.active + views.favorites + views.archived
    assert favorite.id not in {m.id for m in remaining}
    assert uow.store.count("messages.delete") == 1


@pytest.mark.asyncio
async def test_delete_unknown_message(uow, alice):
    with pytest.raises(NotFoundError):
        await inbox_service.delete_message(uuid.uuid4(), alice, uow)


def test_inbox_discard_drops_message_everywhere(alice):
    fav = make_message(receiver_id=alice.account_id, is_favorite=True)
    other = make_message(receiver_id=alice.account_id, content="keep")
    inbox = Inbox(messages=[fav, other])
    assert fav in inbox.active and fav in inbox.favorites

    inbox.discard(fav.id)
    inbox.discard(fav.id)

    assert inbox.messages == [other]
    assert fav not in inbox.active
    assert fav not in inbox.favorites
    assert fav not in inbox.archived


def test_inbox_apply_moves_between_tabs(alice):
    msg = make_message(receiver_id=alice.account_id)
    inbox = Inbox(messages=[msg])

    inbox.apply(msg.with_flags(is_archived=True))

    assert inbox.active == []
    assert [m.id for m in inbox.archived] == [msg.id]


@pytest.mark.asyncio
async def test_dashboard_stats(uow, alice, seeded):
    uow.store.profiles.append(make_profile(user_id=alice.account_id))

    stats = await inbox_service.dashboard_stats(alice, uow)

    assert stats.total_messages == 3
    assert stats.favorite_messages == 2
    assert stats.archived_messages == 1
    assert stats.unread_messages == 3
    assert stats.profile_views == 0
    assert stats.last_activity == FIXED_NOW + timedelta(minutes=2)


@pytest.mark.asyncio
async def test_dashboard_stats_without_profile(uow, alice):
    stats = await inbox_service.dashboard_stats(alice, uow)

    assert stats.total_messages == 0
    assert stats.profile_views == 0
    assert stats.last_activity is None

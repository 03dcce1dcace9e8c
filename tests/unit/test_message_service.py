from __future__ import annotations

import pytest

from silentnote.application.dto.metadata import SenderEnvironment
from silentnote.application.exceptions import NotFoundError, ValidationError
from silentnote.domain.value_objects.enums import SenderType
from silentnote.services import message_service
from tests.conftest import FakeIpLookup, make_profile

ENV = SenderEnvironment(user_agent="pytest-agent", language="en-US", timezone="UTC")


@pytest.fixture
def alice_profile(uow, alice):
    profile = make_profile(user_id=alice.account_id, username="alice")
    uow.store.profiles.append(profile)
    return profile


@pytest.mark.asyncio
async def test_anonymous_submission(uow, alice_profile, ip_lookups, clock):
    msg = await message_service.submit_message(
        "alice", "hello", None, ENV, uow, ip_lookups, clock=clock,
    )

    assert uow.store.messages == [msg]
    assert msg.content == "hello"
    assert msg.sender_type == SenderType.ANONYMOUS
    assert msg.sender_user_id is None
    assert msg.receiver_id == alice_profile.user_id
    assert msg.sender_metadata is not None
    assert msg.sender_metadata["ip_address"] == "203.0.113.7"
    assert msg.sender_metadata["user_agent"] == "pytest-agent"
    assert uow.commits == 1


@pytest.mark.asyncio
async def test_registered_submission_carries_sender(uow, alice_profile, bob, ip_lookups):
    msg = await message_service.submit_message(
        "alice", "hi from bob", bob, ENV, uow, ip_lookups,
    )

    assert msg.sender_type == SenderType.REGISTERED
    assert msg.sender_user_id == bob.account_id
    assert msg.sender_metadata is not None


@pytest.mark.asyncio
async def test_registered_metadata_capture_can_be_disabled(uow, alice_profile, bob, ip_lookups):
    msg = await message_service.submit_message(
        "alice", "hi", bob, ENV, uow, ip_lookups, capture_registered_metadata=False,
    )

    assert msg.sender_metadata is None
    assert ip_lookups[0].calls == 0


@pytest.mark.asyncio
async def test_content_is_trimmed(uow, alice_profile, ip_lookups):
    msg = await message_service.submit_message(
        "alice", "   spaced out  \n", None, ENV, uow, ip_lookups,
    )

    assert msg.content == "spaced out"


@pytest.mark.parametrize("content", ["", "   ", "\n\t "])
@pytest.mark.asyncio
async def test_blank_message_rejected_without_insert(uow, alice_profile, ip_lookups, content):
    with pytest.raises(ValidationError):
        await message_service.submit_message(
            "alice", content, None, ENV, uow, ip_lookups,
        )

    assert uow.store.count("messages.add") == 0
    assert uow.store.count("profiles.get_by_username") == 0
    assert ip_lookups[0].calls == 0


@pytest.mark.asyncio
async def test_limit_is_inclusive(uow, alice_profile, ip_lookups):
    msg = await message_service.submit_message(
        "alice", "x" * 300, None, ENV, uow, ip_lookups,
    )
    assert len(msg.content) == 300

    with pytest.raises(ValidationError):
        await message_service.submit_message(
            "alice", "x" * 301, None, ENV, uow, ip_lookups,
        )
    assert uow.store.count("messages.add") == 1


@pytest.mark.asyncio
async def test_unknown_receiver(uow, ip_lookups):
    with pytest.raises(NotFoundError):
        await message_service.submit_message(
            "nobody", "hello", None, ENV, uow, ip_lookups,
        )
    assert uow.store.count("messages.add") == 0


@pytest.mark.asyncio
async def test_ip_lookup_failure_does_not_block_submission(uow, alice_profile):
    lookups = (FakeIpLookup(error=OSError("down")), FakeIpLookup(ip=None))

    msg = await message_service.submit_message(
        "alice", "still delivered", None, ENV, uow, lookups,
    )

    assert msg.sender_metadata["ip_address"] == "unknown"
    assert uow.store.count("messages.add") == 1


@pytest.mark.asyncio
async def test_insert_failure_propagates(uow, alice_profile, ip_lookups):
    uow.store.fail_on.add("messages.add")

    with pytest.raises(RuntimeError):
        await message_service.submit_message(
            "alice", "hello", None, ENV, uow, ip_lookups,
        )
    assert uow.commits == 0

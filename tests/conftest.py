"""Shared test fixtures."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

import pytest

from silentnote.application.dto.principal import Principal
from silentnote.domain.entities.message import Message
from silentnote.domain.entities.preferences import AccountPreferences
from silentnote.domain.entities.profile import Profile
from silentnote.domain.entities.profile_view import ProfileView
from silentnote.domain.value_objects.enums import SenderType

FIXED_NOW = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)


@dataclass
class FixedClock:
    at: datetime = FIXED_NOW

    def now(self) -> datetime:
        return self.at


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def alice() -> Principal:
    return Principal(account_id=uuid.uuid4(), email="alice@example.com")


@pytest.fixture
def bob() -> Principal:
    return Principal(account_id=uuid.uuid4(), email="bob@example.com")


def make_profile(
    *,
    user_id: UUID | None = None,
    username: str = "alice",
    display_name: str | None = None,
    avatar_url: str | None = None,
) -> Profile:
    return Profile(
        id=uuid.uuid4(),
        user_id=user_id or uuid.uuid4(),
        username=username,
        display_name=display_name,
        avatar_url=avatar_url,
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
    )


def make_message(
    *,
    receiver_id: UUID,
    content: str = "hello",
    sender_user_id: UUID | None = None,
    created_at: datetime = FIXED_NOW,
    is_favorite: bool = False,
    is_archived: bool = False,
    is_read: bool = False,
) -> Message:
    return Message(
        id=uuid.uuid4(),
        content=content,
        receiver_id=receiver_id,
        sender_user_id=sender_user_id,
        sender_type=SenderType.REGISTERED if sender_user_id else SenderType.ANONYMOUS,
        sender_metadata={"ip_address": "unknown"},
        created_at=created_at,
        is_favorite=is_favorite,
        is_archived=is_archived,
        is_read=is_read,
    )


@dataclass
class FakeStore:
    """Rows shared by the fake repositories plus a log of data-layer calls."""

    messages: list[Message] = field(default_factory=list)
    profiles: list[Profile] = field(default_factory=list)
    views: list[ProfileView] = field(default_factory=list)
    roles: list[tuple[UUID, str]] = field(default_factory=list)
    preferences: dict[UUID, AccountPreferences] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    fail_on: set[str] = field(default_factory=set)
    snapshot: dict[str, Any] | None = None

    def hit(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise RuntimeError(f"{name} failed")

    def write(self, name: str) -> None:
        """Like hit, but remembers the pre-transaction rows on the first write."""
        self.hit(name)
        if self.snapshot is None:
            self.snapshot = {
                "messages": list(self.messages),
                "profiles": list(self.profiles),
                "views": list(self.views),
                "roles": list(self.roles),
                "preferences": dict(self.preferences),
            }

    def count(self, name: str) -> int:
        return self.calls.count(name)


@dataclass
class FakeMessageReader:
    _store: FakeStore

    async def get_for_receiver(self, message_id: UUID, receiver_id: UUID) -> Message | None:
        self._store.hit("messages.get_for_receiver")
        for m in self._store.messages:
            if m.id == message_id and m.receiver_id == receiver_id:
                return m
        return None

    async def list_for_receiver(self, receiver_id: UUID) -> list[Message]:
        self._store.hit("messages.list_for_receiver")
        rows = [m for m in self._store.messages if m.receiver_id == receiver_id]
        return sorted(rows, key=lambda m: m.created_at, reverse=True)

    async def list_all(self) -> list[Message]:
        self._store.hit("messages.list_all")
        return sorted(self._store.messages, key=lambda m: m.created_at, reverse=True)

    async def count_by_receiver(self, receiver_ids: list[UUID]) -> dict[UUID, int]:
        self._store.hit("messages.count_by_receiver")
        counts: dict[UUID, int] = {}
        for m in self._store.messages:
            if m.receiver_id in receiver_ids:
                counts[m.receiver_id] = counts.get(m.receiver_id, 0) + 1
        return counts


@dataclass
class FakeMessageWriter:
    _store: FakeStore

    async def add(self, message: Message) -> Message:
        self._store.write("messages.add")
        self._store.messages.append(message)
        return message

    async def set_flags(self, message_id: UUID, **flags: bool) -> None:
        self._store.write("messages.set_flags")
        self._store.messages = [
            replace(m, **flags) if m.id == message_id else m for m in self._store.messages
        ]

    async def delete(self, message_id: UUID) -> bool:
        self._store.write("messages.delete")
        before = len(self._store.messages)
        self._store.messages = [m for m in self._store.messages if m.id != message_id]
        return len(self._store.messages) < before

    async def delete_for_account(self, account_id: UUID) -> int:
        self._store.write("messages.delete_for_account")
        before = len(self._store.messages)
        self._store.messages = [
            m for m in self._store.messages
            if m.receiver_id != account_id and m.sender_user_id != account_id
        ]
        return before - len(self._store.messages)


@dataclass
class FakeProfileReader:
    _store: FakeStore

    async def get_by_username(self, username: str) -> Profile | None:
        self._store.hit("profiles.get_by_username")
        return next((p for p in self._store.profiles if p.username == username), None)

    async def get_by_user_id(self, user_id: UUID) -> Profile | None:
        self._store.hit("profiles.get_by_user_id")
        return next((p for p in self._store.profiles if p.user_id == user_id), None)

    async def list_by_user_ids(self, user_ids: list[UUID]) -> list[Profile]:
        self._store.hit("profiles.list_by_user_ids")
        return [p for p in self._store.profiles if p.user_id in user_ids]

    async def list_all(self) -> list[Profile]:
        self._store.hit("profiles.list_all")
        return list(self._store.profiles)


@dataclass
class FakeProfileWriter:
    _store: FakeStore

    async def create(self, profile: Profile) -> Profile:
        self._store.write("profiles.create")
        self._store.profiles.append(profile)
        return profile

    async def update(self, user_id: UUID, values: dict[str, Any]) -> None:
        self._store.write("profiles.update")
        self._store.profiles = [
            replace(p, **values) if p.user_id == user_id else p for p in self._store.profiles
        ]

    async def delete_for_user(self, user_id: UUID) -> int:
        self._store.write("profiles.delete_for_user")
        before = len(self._store.profiles)
        self._store.profiles = [p for p in self._store.profiles if p.user_id != user_id]
        return before - len(self._store.profiles)


@dataclass
class FakeProfileViewReader:
    _store: FakeStore

    async def count_for_profile(self, profile_id: UUID) -> int:
        self._store.hit("profile_views.count_for_profile")
        return sum(1 for v in self._store.views if v.profile_id == profile_id)


@dataclass
class FakeProfileViewWriter:
    _store: FakeStore

    async def add(self, view: ProfileView) -> None:
        self._store.write("profile_views.add")
        self._store.views.append(view)


@dataclass
class FakeUserRoleReader:
    _store: FakeStore

    async def has_role(self, user_id: UUID, role: str) -> bool:
        self._store.hit("roles.has_role")
        return (user_id, role) in self._store.roles

    async def roles_for(self, user_ids: list[UUID]) -> dict[UUID, list[str]]:
        self._store.hit("roles.roles_for")
        result: dict[UUID, list[str]] = {}
        for user_id, role in self._store.roles:
            if user_id in user_ids:
                result.setdefault(user_id, []).append(role)
        return result


@dataclass
class FakeUserRoleWriter:
    _store: FakeStore

    async def delete_for_user(self, user_id: UUID) -> int:
        self._store.write("roles.delete_for_user")
        before = len(self._store.roles)
        self._store.roles = [r for r in self._store.roles if r[0] != user_id]
        return before - len(self._store.roles)

    async def grant(self, user_id: UUID, role: str) -> bool:
        self._store.write("roles.grant")
        if (user_id, role) in self._store.roles:
            return False
        self._store.roles.append((user_id, role))
        return True


@dataclass
class FakePreferencesReader:
    _store: FakeStore

    async def get(self, user_id: UUID) -> AccountPreferences | None:
        self._store.hit("preferences.get")
        return self._store.preferences.get(user_id)


@dataclass
class FakePreferencesWriter:
    _store: FakeStore

    async def upsert(self, preferences: AccountPreferences) -> None:
        self._store.write("preferences.upsert")
        self._store.preferences[preferences.user_id] = preferences


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests.

    Writes land in the store immediately; ``rollback`` restores the rows as
    they were before the first uncommitted write.
    """

    store: FakeStore = field(default_factory=FakeStore)
    commits: int = 0
    rollbacks: int = 0

    def __post_init__(self) -> None:
        s = self.store
        self.messages = FakeMessageReader(s)
        self.messages_w = FakeMessageWriter(s)
        self.profiles = FakeProfileReader(s)
        self.profiles_w = FakeProfileWriter(s)
        self.profile_views = FakeProfileViewReader(s)
        self.profile_views_w = FakeProfileViewWriter(s)
        self.roles = FakeUserRoleReader(s)
        self.roles_w = FakeUserRoleWriter(s)
        self.preferences = FakePreferencesReader(s)
        self.preferences_w = FakePreferencesWriter(s)

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self.store.hit("commit")
        self.commits += 1
        self.store.snapshot = None

    async def rollback(self) -> None:
        self.rollbacks += 1
        if self.store.snapshot is not None:
            for name, rows in self.store.snapshot.items():
                setattr(self.store, name, rows)
            self.store.snapshot = None


@pytest.fixture
def uow() -> FakeUoW:
    return FakeUoW()


@dataclass
class FakeIpLookup:
    """Returns ``ip``; None mimics a non-success response, ``error`` is raised."""

    ip: str | None = "203.0.113.7"
    error: Exception | None = None
    calls: int = 0

    async def lookup(self) -> str | None:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.ip


@pytest.fixture
def ip_lookups() -> tuple[FakeIpLookup, FakeIpLookup]:
    return FakeIpLookup(), FakeIpLookup(ip="198.51.100.9")


@dataclass
class FakeStorage:
    base_url: str = "https://storage.test/object/public"
    objects: dict[tuple[str, str], bytes] = field(default_factory=dict)
    removed: list[tuple[str, str]] = field(default_factory=list)
    upload_calls: int = 0
    fail_upload: bool = False
    fail_remove: bool = False

    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        *,
        content_type: str,
        upsert: bool = False,
    ) -> None:
        self.upload_calls += 1
        if self.fail_upload:
            raise RuntimeError("storage unavailable")
        if not upsert and (bucket, path) in self.objects:
            raise RuntimeError("The resource already exists")
        self.objects[(bucket, path)] = data

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/{bucket}/{path}"

    async def remove(self, bucket: str, paths: list[str]) -> None:
        if self.fail_remove:
            raise RuntimeError("remove failed")
        for path in paths:
            self.objects.pop((bucket, path), None)
            self.removed.append((bucket, path))


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()

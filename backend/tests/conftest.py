"""Shared test fixtures and fake collaborators."""

import uuid
from dataclasses import dataclass, field

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import storefront.models  # noqa: F401
from storefront.models.user import Base
from storefront.services.user_directory import DirectoryUnavailable


@dataclass
class FakeUser:
    id: str
    full_name: str
    is_active: bool = True


class FakeConnection:
    """Connection handle that records server-side terminations."""

    def __init__(self, session_id: str | None = None) -> None:
        self.session_id = session_id or uuid.uuid4().hex
        self.terminate_calls = 0

    def terminate(self) -> None:
        self.terminate_calls += 1


@dataclass
class FakeDirectory:
    """In-memory user directory; set ``unavailable`` to simulate outages."""

    users: dict[str, FakeUser] = field(default_factory=dict)
    unavailable: bool = False
    lookups: int = 0

    def add(self, user_id: str, full_name: str, is_active: bool = True) -> FakeUser:
        user = FakeUser(id=user_id, full_name=full_name, is_active=is_active)
        self.users[user_id] = user
        return user

    async def find_by_id(self, user_id: str) -> FakeUser | None:
        self.lookups += 1
        if self.unavailable:
            raise DirectoryUnavailable("User directory is unavailable")
        user = self.users.get(user_id)
        if user is None:
            return None
        # Return a copy so later directory edits do not leak into snapshots.
        return FakeUser(id=user.id, full_name=user.full_name, is_active=user.is_active)


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    db_path = tmp_path / "storefront.sqlite3"
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}")
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield factory
    finally:
        await engine.dispose()

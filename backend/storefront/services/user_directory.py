"""User lookup used by the WebSocket presence registry."""

import logging
import uuid
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.db.session import AsyncSessionLocal
from storefront.models.user import User

logger = logging.getLogger(__name__)


class DirectoryUnavailable(RuntimeError):
    """Raised when the user store cannot be reached."""


class UserDirectory(Protocol):
    async def find_by_id(self, user_id: str) -> User | None: ...


class SqlUserDirectory:
    """Look users up by primary key in the relational store."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal,
    ) -> None:
        self._session_factory = session_factory

    async def find_by_id(self, user_id: str) -> User | None:
        try:
            user_uuid = uuid.UUID(str(user_id))
        except ValueError:
            return None

        try:
            async with self._session_factory() as db:
                result = await db.execute(select(User).where(User.id == user_uuid))
                return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as exc:
            logger.error("User directory lookup failed for %s: %s", user_id, exc)
            raise DirectoryUnavailable("User directory is unavailable") from exc


# Single instance shared across the application.
user_directory = SqlUserDirectory()

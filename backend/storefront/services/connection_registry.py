"""Track authenticated WebSocket sessions and keep one live session per user."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from storefront.services.user_directory import UserDirectory, user_directory

logger = logging.getLogger(__name__)


class RegistrationError(ValueError):
    """Raised when a connection cannot be registered for a user."""


class UserNotFound(RegistrationError):
    """The user id does not exist in the directory."""


class UserInactive(RegistrationError):
    """The user exists but is marked inactive."""


class SessionNotFound(LookupError):
    """No session is registered under the given id."""


class ConnectionHandle(Protocol):
    session_id: str

    def terminate(self) -> None: ...


@dataclass(frozen=True)
class UserSnapshot:
    """User fields captured at registration time."""

    id: str
    full_name: str
    is_active: bool


@dataclass(frozen=True)
class SessionRecord:
    session_id: str
    connection: ConnectionHandle
    user: UserSnapshot


class ConnectionRegistry:
    """Map live sessions to users, evicting a user's older session on re-login.

    The directory lookup in ``register`` runs without holding the lock. The
    scan, eviction and insert that follow run under a single ``asyncio.Lock``
    so two registrations for the same user can never leave two entries behind.
    An evicted entry is dropped immediately; the later ``unregister`` coming
    from its own disconnect is then a no-op.
    """

    def __init__(self, directory: UserDirectory) -> None:
        self._directory = directory
        self._sessions: dict[str, SessionRecord] = {}
        self._lock = asyncio.Lock()

    async def register(self, connection: ConnectionHandle, user_id: str) -> None:
        """Bind a connection to a user, evicting that user's previous session."""
        user =await self._directory.find_by_id(user_id)
        if user is None:
            raise UserNotFound(f"User {user_id} not found")
        if not user.is_active:
            raise UserInactive(f"User {user_id} is not active")

        snapshot = UserSnapshot(
            id=str(user.id),
            full_name=user.full_name,
            is_active=user.is_active,
        )

        async with self._lock:
            self._evict_user(snapshot.id)
            self._sessions[connection.session_id] = SessionRecord(
                session_id=connection.session_id,
                connection=connection,
                user=snapshot,
            )
        logger.info(
            "Session %s registered for user %s (%d active)",
            connection.session_id,
            snapshot.id,
            len(self._sessions),
        )

    async def unregister(self, session_id: str) -> None:
        """Drop a session; unknown ids are ignored."""
        async with self._lock:
            record = self._sessions.pop(session_id, None)
        if record is not None:
            logger.info("Session %s unregistered", session_id)

    def list_active_session_ids(self) -> list[str]:
        """Return the ids of all registered sessions."""
        return list(self._sessions)

    def get_display_name(self, session_id: str) -> str:
        """Return the full name captured when the session registered."""
        record = self._sessions.get(session_id)
        if record is None:
            raise SessionNotFound(f"Session {session_id} not found")
        return record.user.full_name

    def get_connection(self, session_id: str) -> ConnectionHandle | None:
        """Return the handle for a session, or None if it is not registered."""
        record = self._sessions.get(session_id)
        return record.connection if record is not None else None

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def _evict_user(self, user_id: str) -> None:
        # Caller holds the lock. At most one entry per user can exist.
        for session_id, record in self._sessions.items():
            if record.user.id != user_id:
                continue
            logger.info(
                "Evicting session %s: user %s connected again", session_id, user_id
            )
            record.connection.terminate()
            del self._sessions[session_id]
            break


# Single instance shared across the application.
connection_registry = ConnectionRegistry(user_directory)

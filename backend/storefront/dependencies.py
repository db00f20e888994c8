"""FastAPI dependency injection for database sessions and authentication."""

import uuid
from typing import Annotated, Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from storefront.db.session import AsyncSessionLocal
from storefront.models.user import User
from storefront.services.auth_service import user_id_from_access_token
from storefront.services.connection_registry import (
    ConnectionRegistry,
    connection_registry,
)
from storefront.services.ws_connections import ConnectionManager, connection_manager

security = HTTPBearer(auto_error=False)


async def get_db():
    """Yield a database session."""
    async with AsyncSessionLocal() as session:
        yield session


def get_connection_registry() -> ConnectionRegistry:
    """Return the process-wide presence registry."""
    return connection_registry


def get_connection_manager() -> ConnectionManager:
    """Return the process-wide set of open gateway sockets."""
    return connection_manager


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Extract and validate JWT, then load and return an active user."""
    invalid_token = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Token not valid",
    )
    if credentials is None:
        raise invalid_token

    user_id = user_id_from_access_token(credentials.credentials)
    if user_id is None:
        raise invalid_token
    try:
        user_uuid = uuid.UUID(user_id)
    except ValueError:
        raise invalid_token

    result = await db.execute(select(User).where(User.id == user_uuid))
    user = result.scalar_one_or_none()
    if user is None:
        raise invalid_token
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User is inactive, talk with an admin",
        )
    return user


def require_roles(*roles: str) -> Callable:
    """Build a dependency that admits users holding at least one of ``roles``."""

    async def _check_roles(
        user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if not roles or user.has_any_role(roles):
            return user
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"User {user.full_name} need a valid role: [{', '.join(roles)}]",
        )

    return _check_roles

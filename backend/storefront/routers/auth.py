"""Authentication endpoints: register, login, check-status."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from storefront.dependencies import get_db, get_current_user
from storefront.models.user import User
from storefront.schemas.user import AuthResponse, UserCreate, UserLogin, UserProfile
from storefront.services.auth_service import (
    hash_password,
    verify_password,
    create_access_token,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(user: User) -> AuthResponse:
    profile = UserProfile.model_validate(user)
    return AuthResponse(**profile.model_dump(), token=create_access_token(str(user.id)))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Register a new user and return an access token."""
    normalised_email = user_data.email.strip().lower()
    result = await db.execute(select(User).where(User.email == normalised_email))
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    user = User(
        email=normalised_email,
        full_name=user_data.full_name.strip(),
        password_hash=hash_password(user_data.password),
        is_active=True,
        roles=["user"],
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("Registration rejected for %s: %s", normalised_email, exc.orig)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )
    await db.refresh(user)

    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Authenticate user and return an access token."""
    result = await db.execute(
        select(User).where(User.email == credentials.email.strip().lower())
    )
    user = result.scalar_one_or_none()
    if not user or not verify_password(credentials.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credentials are not valid",
        )

    return _auth_response(user)


@router.get("/check-status", response_model=AuthResponse)
async def check_status(current_user: Annotated[User, Depends(get_current_user)]):
    """Return the current user's profile with a fresh token."""
    return _auth_response(current_user)

"""User model and SQLAlchemy declarative base."""

import uuid
from datetime import datetime

from sqlalchemy import JSON, String, Boolean, DateTime, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

VALID_ROLES = ("admin", "super-user", "user")


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    roles: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=lambda: ["user"]
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    def has_any_role(self, roles: tuple[str, ...] | list[str]) -> bool:
        return any(role in (self.roles or []) for role in roles)

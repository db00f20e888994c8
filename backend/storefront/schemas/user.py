import re
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

_HAS_UPPER = re.compile(r"[A-Z]")
_HAS_LOWER = re.compile(r"[a-z]")
_HAS_DIGIT_OR_SYMBOL = re.compile(r"[\d\W]")


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=50)
    full_name: str = Field(min_length=1, max_length=255)

    @field_validator("password")
    @classmethod
    def _check_password_strength(cls, value: str) -> str:
        if not (
            _HAS_UPPER.search(value)
            and _HAS_LOWER.search(value)
            and _HAS_DIGIT_OR_SYMBOL.search(value)
        ):
            raise ValueError(
                "The password must have a Uppercase, lowercase letter and a number"
            )
        return value


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=50)


class UserProfile(BaseModel):
    id: UUID
    email: str
    full_name: str
    is_active: bool
    roles: list[str]
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(UserProfile):
    token: str
    token_type: str = "bearer"

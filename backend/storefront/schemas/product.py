from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

Gender = Literal["men", "women", "kid", "unisex"]


class ProductCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    price: float = Field(default=0, ge=0)
    description: str | None = None
    slug: str | None = Field(default=None, min_length=1, max_length=255)
    stock: int = Field(default=0, ge=0)
    sizes: list[str]
    gender: Gender
    tags: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)


class ProductUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    price: float | None = Field(default=None, ge=0)
    description: str | None = None
    slug: str | None = Field(default=None, min_length=1, max_length=255)
    stock: int | None = Field(default=None, ge=0)
    sizes: list[str] | None = None
    gender: Gender | None = None
    tags: list[str] | None = None
    images: list[str] | None = None


class ProductOut(BaseModel):
    id: UUID
    title: str
    price: float
    description: str | None = None
    slug: str
    stock: int
    sizes: list[str]
    gender: str
    tags: list[str]
    images: list[str] = Field(default_factory=list)
    user_id: UUID | None = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("images", mode="before")
    @classmethod
    def _flatten_images(cls, value):
        # ORM rows carry ProductImage objects; the API exposes bare URLs.
        return [getattr(item, "url", item) for item in value or []]

"""Product catalogue endpoints."""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import settings
from storefront.dependencies import get_current_user, get_db, require_roles
from storefront.models.user import User
from storefront.schemas.product import ProductCreate, ProductOut, ProductUpdate
from storefront.services.product_service import (
    ProductConflictError,
    ProductNotFoundError,
    create_product,
    delete_product,
    find_product,
    list_products,
    update_product,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


def _unexpected_error(exc: Exception) -> HTTPException:
    logger.error("Product persistence error: %s", exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Unexpected error, check server logs",
    )


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
async def create(
    payload: ProductCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    try:
        product = await create_product(db, payload, current_user.id)
        await db.commit()
    except ProductConflictError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except SQLAlchemyError as exc:
        raise _unexpected_error(exc)
    return product


@router.get("", response_model=list[ProductOut])
async def list_all(
    db: Annotated[AsyncSession, Depends(get_db)],
    limit: Annotated[int | None, Query(ge=1, le=settings.max_page_limit)] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """Return a page of products with their image URLs."""
    page_limit = limit or settings.default_page_limit
    return await list_products(db, limit=page_limit, offset=offset)


@router.get("/{term}", response_model=ProductOut)
async def find_one(
    term: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Look a product up by id, title or slug."""
    try:
        return await find_product(db, term)
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.patch("/{product_id}", response_model=ProductOut)
async def update(
    product_id: uuid.UUID,
    payload: ProductUpdate,
    current_user: Annotated[User, Depends(require_roles("super-user"))],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    try:
        product = await update_product(db, product_id, payload, current_user.id)
        await db.commit()
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except ProductConflictError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except SQLAlchemyError as exc:
        raise _unexpected_error(exc)
    return product


@router.delete("/{product_id}")
async def remove(
    product_id: uuid.UUID,
    _: Annotated[User, Depends(require_roles("super-user"))],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    deleted = await delete_product(db, product_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with id: {product_id} not found",
        )
    await db.commit()
    return {"message": "Product deleted"}

"""Product catalogue persistence."""

import logging
import uuid

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.product import Product, ProductImage
from storefront.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

# Columns a PATCH may reset to null.
NULLABLE_FIELDS = frozenset({"description"})


class ProductNotFoundError(ValueError):
    """Raised when no product matches the requested id or term."""


class ProductConflictError(ValueError):
    """Raised when a write violates a uniqueness constraint."""


def normalise_slug(value: str) -> str:
    return value.strip().lower().replace(" ", "_").replace("'", "")


def _parse_uuid(term: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(term)
    except ValueError:
        return None


async def _flush_or_conflict(db: AsyncSession) -> None:
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        detail = str(exc.orig) if exc.orig is not None else str(exc)
        logger.warning("Product write rejected: %s", detail)
        raise ProductConflictError(detail) from exc


async def create_product(
    db: AsyncSession,
    data: ProductCreate,
    user_id: uuid.UUID | None,
) -> Product:
    product = Product(
        title=data.title,
        price=data.price,
        description=data.description,
        slug=normalise_slug(data.slug or data.title),
        stock=data.stock,
        sizes=list(data.sizes),
        gender=data.gender,
        tags=list(data.tags),
        user_id=user_id,
        images=[ProductImage(url=url) for url in data.images],
    )
    db.add(product)
    await _flush_or_conflict(db)
    return product


async def list_products(
    db: AsyncSession,
    limit: int,
    offset: int,
) -> list[Product]:
    result = await db.execute(
        select(Product)
        .order_by(Product.created_at.asc(), Product.id.asc())
        .limit(limit)
        .offset(offset)
    )
    return list(result.scalars().all())


async def get_product(db: AsyncSession, product_id: uuid.UUID) -> Product | None:
    result = await db.execute(select(Product).where(Product.id == product_id))
    return result.scalar_one_or_none()


async def find_product(db: AsyncSession, term: str) -> Product:
    """Find a product by id, or else by title (case-insensitive) or slug."""
    product_id = _parse_uuid(term)
    if product_id is not None:
        product = await get_product(db, product_id)
    else:
        result = await db.execute(
            select(Product).where(
                or_(
                    func.upper(Product.title) == term.upper(),
                    Product.slug == term.lower(),
                )
            )
        )
        product = result.scalars().first()

    if product is None:
        raise ProductNotFoundError(f"Product with {term} not found")
    return product


async def update_product(
    db: AsyncSession,
    product_id: uuid.UUID,
    data: ProductUpdate,
    user_id: uuid.UUID | None,
) -> Product:
    product = await get_product(db, product_id)
    if product is None:
        raise ProductNotFoundError(f"Product with id: {product_id} not found")

    fields = data.model_dump(exclude_unset=True)
    images = fields.pop("images", None)
    for name, value in fields.items():
        if value is None and name not in NULLABLE_FIELDS:
            continue
        if name == "slug":
            value = normalise_slug(value)
        setattr(product, name, value)

    if images is not None:
        # Supplied images replace the whole gallery.
        product.images = [ProductImage(url=url) for url in images]

    product.user_id = user_id
    await _flush_or_conflict(db)
    return product


async def delete_product(db: AsyncSession, product_id: uuid.UUID) -> bool:
    product = await get_product(db, product_id)
    if product is None:
        return False
    await db.delete(product)
    await db.flush()
    return True


async def delete_all_products(db: AsyncSession) -> None:
    await db.execute(delete(ProductImage))
    await db.execute(delete(Product))
    await db.flush()

import uuid

import pytest
from sqlalchemy import func, select

from storefront.models.product import Product, ProductImage
from storefront.models.user import User
from storefront.schemas.product import ProductCreate, ProductUpdate
from storefront.services.product_service import (
    ProductConflictError,
    ProductNotFoundError,
    create_product,
    delete_all_products,
    delete_product,
    find_product,
    list_products,
    normalise_slug,
    update_product,
)
from storefront.services.seed_data import SEED_PRODUCTS, SEED_USERS
from storefront.services.seed_service import run_seed


def _payload(**overrides) -> ProductCreate:
    data = {
        "title": "Men's Chill Crew Neck",
        "price": 75,
        "sizes": ["S", "M"],
        "gender": "men",
        "images": ["a.jpg", "b.jpg"],
    }
    data.update(overrides)
    return ProductCreate.model_validate(data)


def test_normalise_slug_lowercases_and_strips_quotes() -> None:
    assert normalise_slug("Men's Chill Crew Neck") == "mens_chill_crew_neck"


@pytest.mark.asyncio
async def test_create_derives_slug_and_images(session_factory) -> None:
    async with session_factory() as db:
        product = await create_product(db, _payload(), None)
        await db.commit()

    assert product.slug == "mens_chill_crew_neck"
    assert [image.url for image in product.images] == ["a.jpg", "b.jpg"]


@pytest.mark.asyncio
async def test_duplicate_title_raises_conflict(session_factory) -> None:
    async with session_factory() as db:
        await create_product(db, _payload(), None)
        await db.commit()

        with pytest.raises(ProductConflictError):
            await create_product(db, _payload(slug="other-slug"), None)


@pytest.mark.asyncio
async def test_find_product_by_id_title_and_slug(session_factory) -> None:
    async with session_factory() as db:
        product = await create_product(db, _payload(), None)
        await db.commit()

        assert (await find_product(db, str(product.id))).id == product.id
        assert (await find_product(db, "MEN'S CHILL CREW NECK")).id == product.id
        assert (await find_product(db, "Mens_Chill_Crew_Neck")).id == product.id

        with pytest.raises(ProductNotFoundError):
            await find_product(db, "no-such-product")
        with pytest.raises(ProductNotFoundError):
            await find_product(db, str(uuid.uuid4()))


@pytest.mark.asyncio
async def test_update_replaces_images_and_normalises_slug(session_factory) -> None:
    async with session_factory() as db:
        product = await create_product(db, _payload(), None)
        await db.commit()

        updated = await update_product(
            db,
            product.id,
            ProductUpdate(slug="New Slug's", images=["c.jpg"], stock=4),
            None,
        )
        await db.commit()

        assert updated.slug == "new_slugs"
        assert updated.stock == 4
        assert updated.title == "Men's Chill Crew Neck"
        assert [image.url for image in updated.images] == ["c.jpg"]

        image_count = (
            await db.execute(select(func.count(ProductImage.id)))
        ).scalar_one()
        assert image_count == 1


@pytest.mark.asyncio
async def test_update_clears_description_but_keeps_required_fields(session_factory) -> None:
    async with session_factory() as db:
        product = await create_product(db, _payload(description="Soft cotton"), None)
        await db.commit()

        updated = await update_product(
            db,
            product.id,
            ProductUpdate(description=None, title=None, price=None),
            None,
        )
        await db.commit()

        assert updated.description is None
        assert updated.title == "Men's Chill Crew Neck"
        assert updated.price == 75


@pytest.mark.asyncio
async def test_update_missing_product_raises(session_factory) -> None:
    async with session_factory() as db:
        with pytest.raises(ProductNotFoundError):
            await update_product(db, uuid.uuid4(), ProductUpdate(stock=1), None)


@pytest.mark.asyncio
async def test_list_products_paginates(session_factory) -> None:
    async with session_factory() as db:
        for index in range(5):
            await create_product(db, _payload(title=f"Tee {index}", images=[]), None)
        await db.commit()

        first_page = await list_products(db, limit=2, offset=0)
        rest = await list_products(db, limit=10, offset=2)

    assert len(first_page) == 2
    assert len(rest) == 3
    assert {p.id for p in first_page}.isdisjoint({p.id for p in rest})


@pytest.mark.asyncio
async def test_delete_product_and_delete_all(session_factory) -> None:
    async with session_factory() as db:
        first = await create_product(db, _payload(title="One", images=["1.jpg"]), None)
        await create_product(db, _payload(title="Two", images=["2.jpg"]), None)
        await db.commit()

        assert await delete_product(db, first.id) is True
        assert await delete_product(db, first.id) is False
        await delete_all_products(db)
        await db.commit()

        assert (await db.execute(select(func.count(Product.id)))).scalar_one() == 0
        assert (await db.execute(select(func.count(ProductImage.id)))).scalar_one() == 0


@pytest.mark.asyncio
async def test_run_seed_replaces_users_and_products(session_factory) -> None:
    async with session_factory() as db:
        db.add(User(email="old@example.com", full_name="Old", password_hash="x", roles=["user"]))
        await db.commit()

        await run_seed(db)
        await db.commit()

        emails = set((await db.execute(select(User.email))).scalars().all())
        product_count = (await db.execute(select(func.count(Product.id)))).scalar_one()

    assert emails == {item["email"] for item in SEED_USERS}
    assert product_count == len(SEED_PRODUCTS)

"""Wipe and repopulate the demo users and catalogue."""

import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.user import User
from storefront.schemas.product import ProductCreate
from storefront.services.auth_service import hash_password
from storefront.services.product_service import create_product, delete_all_products
from storefront.services.seed_data import SEED_PRODUCTS, SEED_USERS

logger = logging.getLogger(__name__)


async def _insert_users(db: AsyncSession) -> list[User]:
    users = [
        User(
            email=item["email"].strip().lower(),
            full_name=item["full_name"],
            password_hash=hash_password(item["password"]),
            roles=list(item["roles"]),
            is_active=True,
        )
        for item in SEED_USERS
    ]
    db.add_all(users)
    await db.flush()
    return users


async def run_seed(db: AsyncSession) -> None:
    """Replace all products and users with the seed data. Caller commits."""
    await delete_all_products(db)
    await db.execute(delete(User))
    await db.flush()

    users = await _insert_users(db)
    owner = users[0]
    for item in SEED_PRODUCTS:
        await create_product(db, ProductCreate.model_validate(item), owner.id)

    logger.info(
        "Seed executed: %d users, %d products", len(users), len(SEED_PRODUCTS)
    )

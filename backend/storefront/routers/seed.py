"""Seed endpoint: reload demo users and products."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.dependencies import get_db, require_roles
from storefront.models.user import User
from storefront.services.seed_service import run_seed

router = APIRouter(prefix="/api/seed", tags=["seed"])


@router.get("")
async def execute_seed(
    _: Annotated[User, Depends(require_roles("admin"))],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await run_seed(db)
    await db.commit()
    return {"message": "SEED EXECUTED"}

"""Database initialisation and migration runner."""

import asyncio
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from storefront.config import settings

logger = logging.getLogger(__name__)


def _build_alembic_config() -> Config:
    backend_dir = Path(__file__).resolve().parents[2]
    cfg = Config(str(backend_dir / "alembic.ini"))
    cfg.set_main_option("script_location", str(backend_dir / "alembic"))
    cfg.set_main_option("sqlalchemy.url", settings.database_url)
    return cfg


async def init_db() -> None:
    """Run Alembic migrations to keep the schema up to date."""
    if not settings.run_migrations_on_startup:
        logger.info("Skipping migrations (RUN_MIGRATIONS_ON_STARTUP is off)")
        return
    cfg = _build_alembic_config()
    await asyncio.to_thread(command.upgrade, cfg, "head")

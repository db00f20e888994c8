"""FastAPI application entry point with startup initialisation and logging."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.config import settings
from storefront.db.session import engine
from storefront.db.init_db import init_db
from storefront.dependencies import get_connection_registry
from storefront.routers.auth import router as auth_router
from storefront.routers.messages_ws import router as messages_ws_router
from storefront.routers.products import router as products_router
from storefront.routers.seed import router as seed_router


def _configure_logging() -> None:
    """Set up structured logging for the application."""
    root_logger = logging.getLogger("storefront")
    root_logger.setLevel(settings.log_level)

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in ("storefront.routers", "storefront.services"):
        logging.getLogger(name).setLevel(settings.log_level)


_configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    await init_db()
    yield
    await engine.dispose()


app = FastAPI(title="Storefront API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(products_router)
app.include_router(seed_router)
app.include_router(messages_ws_router)


@app.get("/health")
async def health_check():
    """Health check endpoint with the number of live WebSocket sessions."""
    return {
        "status": "healthy",
        "active_sessions": len(get_connection_registry()),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.backend_reload,
    )

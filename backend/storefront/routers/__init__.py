from storefront.routers.auth import router as auth_router
from storefront.routers.products import router as products_router
from storefront.routers.seed import router as seed_router
from storefront.routers.messages_ws import router as messages_ws_router

__all__ = [
    "auth_router",
    "products_router",
    "seed_router",
    "messages_ws_router",
]

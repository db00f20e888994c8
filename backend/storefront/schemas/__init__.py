from storefront.schemas.user import (
    UserCreate,
    UserLogin,
    UserProfile,
    AuthResponse,
)
from storefront.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductOut,
)
from storefront.schemas.ws import (
    MessageFromClientIn,
)

__all__ = [
    "UserCreate",
    "UserLogin",
    "UserProfile",
    "AuthResponse",
    "ProductCreate",
    "ProductUpdate",
    "ProductOut",
    "MessageFromClientIn",
]

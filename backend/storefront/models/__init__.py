from storefront.models.user import User, Base
from storefront.models.product import Product, ProductImage

__all__ = [
    "User",
    "Base",
    "Product",
    "ProductImage",
]

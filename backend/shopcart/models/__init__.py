from shopcart.db.base import Base  # noqa: F401
from shopcart.models.catalog import Product  # noqa: F401
from shopcart.models.cart import Cart, CartItem, MAX_LINE_QUANTITY  # noqa: F401

__all__ = [
    "Base",
    "Product",
    "Cart",
    "CartItem",
    "MAX_LINE_QUANTITY",
]

from shopcart.stores.base import CartStore, ProductStore, StoreConflictError, StoreError  # noqa: F401
from shopcart.stores.sql import SqlCartStore, SqlProductStore  # noqa: F401

__all__ = [
    "CartStore",
    "ProductStore",
    "StoreConflictError",
    "StoreError",
    "SqlCartStore",
    "SqlProductStore",
]

from __future__ import annotations

from typing import Protocol

from shopcart.models.cart import Cart
from shopcart.models.catalog import Product


class StoreError(Exception):
    """A storage fault while persisting a record."""


class StoreConflictError(StoreError):
    """The stored version moved since the record was read."""


class ProductStore(Protocol):
    async def get(self, product_id: str) -> Product | None: ...

    async def list_active(self) -> list[Product]: ...

    async def add(self, product: Product) -> Product: ...

    async def save(self, product: Product) -> Product: ...


class CartStore(Protocol):
    async def find_by_user_id(self, user_id: str) -> Cart | None:
        """Load the cart fresh from storage, discarding any unsaved in-memory state."""
        ...

    async def save(self, cart: Cart) -> Cart:
        """Insert or version-checked update; raises StoreConflictError on a stale write."""
        ...

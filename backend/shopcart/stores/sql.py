from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import inspect, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError

from shopcart.models.cart import Cart
from shopcart.models.catalog import Product
from shopcart.stores.base import StoreConflictError, StoreError

logger = logging.getLogger("shopcart.stores")


async def _commit(session: AsyncSession, *, label: str, is_new: bool) -> None:
    try:
        await session.commit()
    except StaleDataError as exc:
        await session.rollback()
        raise StoreConflictError(f"{label} was modified concurrently") from exc
    except IntegrityError as exc:
        await session.rollback()
        if is_new:
            # Another writer inserted the same key first.
            raise StoreConflictError(f"{label} was created concurrently") from exc
        raise StoreError(f"Failed to persist {label}") from exc
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.warning("store_commit_failed", extra={"record": label, "error": str(exc)})
        raise StoreError(f"Failed to persist {label}") from exc


class SqlProductStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, product_id: str) -> Product | None:
        return await self.session.get(Product, product_id)

    async def list_active(self) -> list[Product]:
        result = await self.session.execute(select(Product).where(Product.is_active.is_(True)).order_by(Product.id))
        return list(result.scalars().all())

    async def add(self, product: Product) -> Product:
        self.session.add(product)
        await _commit(self.session, label=f"product {product.id}", is_new=True)
        return product

    async def save(self, product: Product) -> Product:
        is_new = inspect(product).transient
        self.session.add(product)
        await _commit(self.session, label=f"product {product.id}", is_new=is_new)
        return product


class SqlCartStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_user_id(self, user_id: str) -> Cart | None:
        result = await self.session.execute(
            select(Cart)
            .options(selectinload(Cart.items))
            .where(Cart.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def save(self, cart: Cart) -> Cart:
        is_new = inspect(cart).transient
        if not is_new:
            # Line edits only touch cart_items; dirtying the parent forces the version check.
            cart.updated_at = datetime.now(timezone.utc)
        self.session.add(cart)
        await _commit(self.session, label=f"cart {cart.user_id}", is_new=is_new)
        return cart
